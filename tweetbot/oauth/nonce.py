"""
Per-request nonce generation.
"""

from __future__ import annotations

import secrets
from typing import Callable

from tweetbot.exceptions import SigningError
from tweetbot.oauth import base64

NONCE_BYTES = 32
_STRIPPED = str.maketrans("", "", "+=/")

RandomSource = Callable[[int], bytes]


def create_nonce(random_bytes: RandomSource = secrets.token_bytes) -> str:
    """
    Return a random alphanumeric token for ``oauth_nonce``.

    32 random bytes are base64 encoded and every ``+``, ``=`` and ``/`` is
    dropped, so the length varies slightly between calls.

    Raises:
        SigningError: if the random source fails or yields unusable output.
    """

    try:
        raw = random_bytes(NONCE_BYTES)
    except (OSError, NotImplementedError) as exc:
        raise SigningError(f"Random source failed: {exc}") from exc

    if len(raw) != NONCE_BYTES:
        raise SigningError(
            f"Random source returned {len(raw)} bytes, expected {NONCE_BYTES}."
        )

    nonce = base64.encode(raw).translate(_STRIPPED)
    if not nonce or not (nonce.isascii() and nonce.isalnum()):
        raise SigningError("Generated nonce is not alphanumeric.")
    return nonce
