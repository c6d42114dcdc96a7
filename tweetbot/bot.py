"""
High level facade combining media upload and status publishing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Sequence

from tweetbot.models import MediaUploadSession, Tweet
from tweetbot.services.media_service import MediaUploadService
from tweetbot.services.tweet_service import TweetService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TweetBot:
    media: MediaUploadService
    tweets: TweetService

    def upload_media(self, stream: BinaryIO, length: int) -> MediaUploadSession:
        return self.media.upload(stream, length)

    def tweet_status_with_media(
        self,
        text: str,
        media: Sequence[MediaUploadSession] = (),
    ) -> Tweet:
        media_ids = [session.media_id_string for session in media]
        tweet = self.tweets.create_tweet(text, media_ids=media_ids or None)
        logger.info("Posted tweet %s with %d media attachment(s).", tweet.id, len(media_ids))
        return tweet

    def publish_video(self, path: Path, text: str = "") -> Tweet:
        """Upload the mp4 at ``path`` and post it with ``text``."""

        session = self.media.upload_video(path)
        return self.tweet_status_with_media(text, [session])

    def close(self) -> None:
        self.media.transport.close()
