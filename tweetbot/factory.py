"""
Factory for creating fully wired TweetBot instances.
"""

from __future__ import annotations

from typing import Any

import requests
import tweepy

from tweetbot.bot import TweetBot
from tweetbot.clients.tweepy_client import TweepyClient
from tweetbot.config import ConfigManager, Credentials
from tweetbot.oauth.signer import OAuthSigner
from tweetbot.services.media_service import MediaUploadService
from tweetbot.services.tweet_service import TweetService
from tweetbot.transport import HttpTransport


class TweetBotFactory:
    """Factory for creating properly initialized bots."""

    @staticmethod
    def create_from_config(config_manager: ConfigManager, **upload_options: Any) -> TweetBot:
        """
        Create a TweetBot from credentials loaded by ``config_manager``.

        Raises:
            ConfigurationError: If credentials are missing or incomplete
        """
        credentials = config_manager.load_credentials()
        return TweetBotFactory.create_from_credentials(credentials, **upload_options)

    @staticmethod
    def create_from_credentials(
        credentials: Credentials,
        *,
        session: requests.Session | None = None,
        **upload_options: Any,
    ) -> TweetBot:
        """
        Wire the signer and transport for media uploads and a tweepy v2 client
        for status publishing, all using the same OAuth 1.0a user credentials.

        Args:
            credentials: Application and user credentials
            session: Optional requests session for the upload transport
            **upload_options: Keyword options forwarded to MediaUploadService
        """
        signer = OAuthSigner(credentials)
        transport = HttpTransport(session)
        media = MediaUploadService(signer, transport, **upload_options)

        v2_client = tweepy.Client(
            consumer_key=credentials.app_key,
            consumer_secret=credentials.app_secret,
            access_token=credentials.user_token,
            access_token_secret=credentials.user_secret,
        )
        tweets = TweetService(TweepyClient(v2_client))

        return TweetBot(media=media, tweets=tweets)
