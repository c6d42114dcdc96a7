"""
Status publishing built on top of the tweepy client adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from tweetbot.models import Tweet


class TweetClient(Protocol):
    """Protocol subset consumed by the service."""

    def create_tweet(self, **kwargs: Any) -> Any:
        ...


@dataclass(slots=True)
class TweetService:
    """Publishes statuses, optionally referencing uploaded media."""

    client: TweetClient

    def create_tweet(
        self,
        text: str,
        *,
        media_ids: Iterable[str] | None = None,
        **extra: Any,
    ) -> Tweet:
        payload: dict[str, Any] = {"text": text, "user_auth": True}
        if media_ids:
            payload["media_ids"] = list(media_ids)
        payload.update(extra)
        response = self.client.create_tweet(**payload)
        return Tweet.from_api(response)
