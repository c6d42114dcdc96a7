from __future__ import annotations

from unittest.mock import Mock, patch

import pytest

from tweetbot.bot import TweetBot
from tweetbot.clients.tweepy_client import TweepyClient
from tweetbot.config import ConfigManager, Credentials
from tweetbot.exceptions import ConfigurationError
from tweetbot.factory import TweetBotFactory
from tweetbot.oauth.signer import OAuthSigner
from tweetbot.transport import HttpTransport

CREDENTIALS = Credentials(
    app_key="test_key",
    app_secret="test_secret",
    user_token="test_token",
    user_secret="test_token_secret",
)


def test_create_from_credentials_wires_upload_and_tweet_clients() -> None:
    with patch("tweetbot.factory.tweepy") as mock_tweepy:
        mock_v2_client = Mock()
        mock_tweepy.Client.return_value = mock_v2_client

        bot = TweetBotFactory.create_from_credentials(CREDENTIALS)

    mock_tweepy.Client.assert_called_once_with(
        consumer_key="test_key",
        consumer_secret="test_secret",
        access_token="test_token",
        access_token_secret="test_token_secret",
    )
    assert isinstance(bot, TweetBot)
    assert isinstance(bot.media.signer, OAuthSigner)
    assert isinstance(bot.media.transport, HttpTransport)
    assert isinstance(bot.tweets.client, TweepyClient)
    assert bot.tweets.client._client is mock_v2_client


def test_upload_options_are_forwarded() -> None:
    bot = TweetBotFactory.create_from_credentials(CREDENTIALS, poll_timeout=30.0, max_status_polls=4)

    assert bot.media.poll_timeout == 30.0
    assert bot.media.max_status_polls == 4
    assert bot.media.chunk_size == 1_024_000


def test_create_from_config_loads_credentials() -> None:
    config = Mock(spec=ConfigManager)
    config.load_credentials.return_value = CREDENTIALS

    bot = TweetBotFactory.create_from_config(config, init_delay=0)

    config.load_credentials.assert_called_once_with()
    assert bot.media.init_delay == 0


def test_create_from_config_propagates_missing_credentials() -> None:
    config = Mock(spec=ConfigManager)
    config.load_credentials.side_effect = ConfigurationError("Twitter credentials are not configured.")

    with pytest.raises(ConfigurationError):
        TweetBotFactory.create_from_config(config)
