"""
Command line entry point: upload a video and post it as a tweet.

Usage:
    tweetbot path/to/video.mp4 --text "Happy Friday"

Credentials are read from TWAPP_KEY, TWAPP_SECRET, TWUSER_TOKEN and
TWUSER_SECRET, then from a .env file, then from a JSON credential file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tweetbot.config import ENV_VAR_MAP, ConfigManager
from tweetbot.exceptions import (
    ConfigurationError,
    MediaProcessingFailed,
    MediaValidationError,
    TweetbotError,
)
from tweetbot.factory import TweetBotFactory

logger = logging.getLogger("tweetbot")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tweetbot",
        description="Upload an mp4 video through the chunked upload API and tweet it",
    )
    parser.add_argument("video", type=Path, help="Path to mp4 video file (max 512MB)")
    parser.add_argument("--text", default="", help="Status text (default: empty)")
    parser.add_argument(
        "--dotenv",
        type=Path,
        help="Path to a .env file with credentials (default: ./.env)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to credentials JSON file (default: credentials/tweetbot.json)",
    )
    parser.add_argument(
        "--poll-timeout",
        type=float,
        default=600.0,
        help="Seconds to wait for media processing (default: 600)",
    )
    parser.add_argument(
        "--max-polls",
        type=int,
        default=None,
        help="Maximum number of STATUS checks (default: unlimited)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    bot = None
    try:
        config = ConfigManager(credential_path=args.config, dotenv_path=args.dotenv)
        bot = TweetBotFactory.create_from_config(
            config,
            poll_timeout=args.poll_timeout,
            max_status_polls=args.max_polls,
        )

        logger.info("Uploading video: %s", args.video)
        session = bot.media.upload_video(args.video)
        print(f"Media uploaded: {session.media_id_string}")

        tweet = bot.tweet_status_with_media(args.text, [session])
        print(f"Tweet created: https://twitter.com/i/web/status/{tweet.id}")
        return 0

    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print(
            "Set the environment variables " + ", ".join(ENV_VAR_MAP.values()) + ".",
            file=sys.stderr,
        )
        return 1

    except MediaValidationError as e:
        print(f"Media validation error: {e}", file=sys.stderr)
        return 1

    except MediaProcessingFailed as e:
        print(f"Media processing failed: {e}", file=sys.stderr)
        return 1

    except TweetbotError as e:
        phase = f" during {e.phase.value}" if e.phase else ""
        print(f"Twitter API error{phase} ({e.kind.value}): {e}", file=sys.stderr)
        return 1

    finally:
        if bot is not None:
            bot.close()


if __name__ == "__main__":
    sys.exit(main())
