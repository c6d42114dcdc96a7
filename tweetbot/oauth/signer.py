"""
OAuth 1.0a request signing with HMAC-SHA1 and already-issued user tokens.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import time
from typing import Callable, Iterable
from urllib.parse import urlsplit, urlunsplit

import requests

from tweetbot.config import Credentials
from tweetbot.exceptions import SigningError
from tweetbot.oauth import base64
from tweetbot.oauth.nonce import RandomSource, create_nonce
from tweetbot.oauth.parameter import Parameter, join, percent_encode

logger = logging.getLogger(__name__)

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"


class OAuthSigner:
    """Adds an OAuth 1.0a ``Authorization`` header to prepared requests."""

    def __init__(
        self,
        credentials: Credentials,
        *,
        clock: Callable[[], float] = time.time,
        random_bytes: RandomSource = secrets.token_bytes,
    ) -> None:
        self._credentials = credentials
        self._clock = clock
        self._random_bytes = random_bytes

    def authorize(
        self,
        request: requests.PreparedRequest,
        parameters: Iterable[Parameter] = (),
    ) -> requests.PreparedRequest:
        """
        Sign ``request`` and return it with the ``Authorization`` header set.

        Args:
            request: Prepared request whose method and URL are signed.
            parameters: Business fields of the request (form or query values).
                The request body is not inspected, so callers pass them here.
                Multipart fields are never signed.

        Raises:
            SigningError: if the clock, the random source or the header fails.
        """
        params = list(parameters)

        timestamp = self._timestamp()
        logger.debug("Current timestamp: %s", timestamp)
        nonce = create_nonce(self._random_bytes)
        logger.debug("Nonce length: %d", len(nonce))

        params.extend(
            [
                Parameter("oauth_consumer_key", self._credentials.app_key),
                Parameter("oauth_token", self._credentials.user_token),
                Parameter("oauth_signature_method", SIGNATURE_METHOD),
                Parameter("oauth_version", OAUTH_VERSION),
                Parameter("oauth_timestamp", timestamp),
                Parameter("oauth_nonce", nonce),
            ]
        )

        base_string = self.signature_base_string(request.method or "GET", request.url or "", params)
        signature = percent_encode(self.sign(base_string))
        request.headers["Authorization"] = self.authorization_header(signature, nonce, timestamp)
        return request

    @staticmethod
    def signature_base_string(method: str, url: str, params: Iterable[Parameter]) -> str:
        parts = urlsplit(url)
        base_url = urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", "", ""))
        base_string = "&".join(
            percent_encode(value)
            for value in (method.upper(), base_url, join(sorted(params)))
        )
        logger.debug("Base string: %s", base_string)
        return base_string

    def sign(self, base_string: str) -> str:
        """Return the base64 HMAC-SHA1 digest of ``base_string`` (not percent-encoded)."""

        key = f"{self._credentials.app_secret}&{self._credentials.user_secret}"
        digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
        return base64.encode(digest)

    def authorization_header(self, signature: str, nonce: str, timestamp: str) -> str:
        fields = (
            ("oauth_consumer_key", self._credentials.app_key),
            ("oauth_nonce", nonce),
            ("oauth_signature", signature),
            ("oauth_signature_method", SIGNATURE_METHOD),
            ("oauth_timestamp", timestamp),
            ("oauth_token", self._credentials.user_token),
            ("oauth_version", OAUTH_VERSION),
        )
        header = "OAuth " + ",".join(f'{name}="{value}"' for name, value in fields)
        if not header.isascii() or any(ch in header for ch in "\r\n"):
            raise SigningError("Authorization header contains invalid characters.")
        logger.debug("OAuth Authorization: %s", header)
        return header

    def _timestamp(self) -> str:
        try:
            now = self._clock()
        except OSError as exc:
            raise SigningError(f"Wall clock unavailable: {exc}") from exc
        if now < 0:
            raise SigningError("Wall clock reports a time before the Unix epoch.")
        return str(int(now))
