"""
Blocking HTTP transport used for signed upload requests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from tweetbot.exceptions import TransportError, UploadPhase

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpTransport:
    """Executes prepared requests over a ``requests.Session``; never retries."""

    def __init__(self, session: requests.Session | None = None, *, timeout: float | None = 30.0) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def execute(
        self,
        request: requests.PreparedRequest,
        *,
        phase: UploadPhase | None = None,
    ) -> HttpResponse:
        try:
            response = self._session.send(request, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(
                f"{request.method} {request.url} failed: {exc}", phase=phase
            ) from exc

        logger.debug("%s %s -> %d", request.method, request.url, response.status_code)
        return HttpResponse(status=response.status_code, body=response.text)

    def close(self) -> None:
        self._session.close()
