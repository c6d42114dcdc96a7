from __future__ import annotations

from types import SimpleNamespace

import pytest
import tweepy

from tweetbot.clients.tweepy_client import TooManyRequests, TweepyClient, TweepyException
from tweetbot.exceptions import ApiResponseError, RateLimitExceeded


class StubV2Client:
    """Stub for tweepy.Client (v2 API)."""

    def __init__(self, *, create_result=None) -> None:
        self.create_result = create_result
        self.called_with: dict[str, tuple[tuple, dict]] = {}
        self._exception: Exception | None = None

    def set_exception(self, exc: Exception) -> None:
        self._exception = exc

    def create_tweet(self, **kwargs):
        self.called_with["create_tweet"] = ((), kwargs)
        if self._exception:
            raise self._exception
        return self.create_result or {"data": {"id": "1"}}


def _response(status: int, reason: str, payload: dict, headers: dict | None = None) -> SimpleNamespace:
    return SimpleNamespace(
        status_code=status,
        status=status,
        headers=headers or {},
        json=lambda: payload,
        reason=reason,
    )


def test_create_tweet_delegates_and_returns_response() -> None:
    v2_client = StubV2Client(create_result={"data": {"id": "42"}})
    client = TweepyClient(v2_client)  # type: ignore[arg-type]

    response = client.create_tweet(text="hello", media_ids=["710511363345354753"])

    assert response == {"data": {"id": "42"}}
    assert v2_client.called_with["create_tweet"][1] == {
        "text": "hello",
        "media_ids": ["710511363345354753"],
    }


def test_api_errors_translate_to_domain_exception() -> None:
    v2_client = StubV2Client()
    payload = {"errors": [{"code": 187, "message": "Status is a duplicate."}]}
    v2_client.set_exception(tweepy.errors.Forbidden(_response(403, "Forbidden", payload)))
    client = TweepyClient(v2_client)  # type: ignore[arg-type]

    with pytest.raises(ApiResponseError) as exc:
        client.create_tweet(text="hello")

    assert exc.value.code == 187
    assert exc.value.status == 403


def test_generic_tweepy_errors_translate_without_code() -> None:
    v2_client = StubV2Client()
    v2_client.set_exception(TweepyException("boom"))
    client = TweepyClient(v2_client)  # type: ignore[arg-type]

    with pytest.raises(ApiResponseError) as exc:
        client.create_tweet(text="hello")

    assert exc.value.code is None
    assert "boom" in str(exc.value)


def test_rate_limit_errors_translate_to_domain_exception() -> None:
    v2_client = StubV2Client()
    response = _response(429, "Too Many Requests", {}, {"x-rate-limit-reset": "1700000000"})
    v2_client.set_exception(TooManyRequests(response))
    client = TweepyClient(v2_client)  # type: ignore[arg-type]

    with pytest.raises(RateLimitExceeded) as exc:
        client.create_tweet(text="hello")

    assert exc.value.reset_at == 1700000000


def test_missing_client_method_raises_attribute_error() -> None:
    client = TweepyClient(object())  # type: ignore[arg-type]

    with pytest.raises(AttributeError):
        client.create_tweet(text="hello")
