"""
Thin wrapper around tweepy.Client used to publish statuses.
"""

from __future__ import annotations

from typing import Any

import tweepy

from tweetbot.exceptions import ApiResponseError, RateLimitExceeded

TweepyException = tweepy.errors.TweepyException
TooManyRequests = tweepy.errors.TooManyRequests


class TweepyClient:
    """Wrapper that converts tweepy exceptions into domain exceptions."""

    def __init__(self, client: tweepy.Client) -> None:
        self._client = client

    def create_tweet(self, **kwargs: Any) -> Any:
        return self._invoke("create_tweet", **kwargs)

    def _invoke(self, method_name: str, *args: Any, **kwargs: Any) -> Any:
        method = getattr(self._client, method_name, None)
        if method is None:
            raise AttributeError(f"tweepy.Client has no attribute '{method_name}'.")

        try:
            return method(*args, **kwargs)
        except TweepyException as exc:
            raise self._convert_exception(exc) from exc

    def _convert_exception(self, exc: TweepyException) -> ApiResponseError:
        message = str(exc) or "Unhandled Tweepy exception."

        if isinstance(exc, TooManyRequests):
            return RateLimitExceeded(message, reset_at=self._extract_reset_at(exc))

        api_codes = getattr(exc, "api_codes", None)
        code: int | None = api_codes[0] if api_codes else None
        response = getattr(exc, "response", None)
        status = getattr(response, "status_code", None)
        return ApiResponseError(message, code=code, status=status)

    @staticmethod
    def _extract_reset_at(exc: TweepyException) -> int | None:
        response = getattr(exc, "response", None)
        headers = getattr(response, "headers", None)
        if not headers:
            return None

        reset_value = headers.get("x-rate-limit-reset") or headers.get(
            "X-Rate-Limit-Reset"
        )
        if reset_value is None:
            return None

        try:
            return int(reset_value)
        except (TypeError, ValueError):
            return None
