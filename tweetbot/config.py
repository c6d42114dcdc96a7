"""
Configuration management utilities for tweetbot.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Mapping, Sequence

from dotenv import dotenv_values

from tweetbot.exceptions import ConfigurationError

ENV_VAR_MAP = {
    "app_key": "TWAPP_KEY",
    "app_secret": "TWAPP_SECRET",
    "user_token": "TWUSER_TOKEN",
    "user_secret": "TWUSER_SECRET",
}


@dataclass(frozen=True, slots=True)
class Credentials:
    """OAuth 1.0a application and user credentials."""

    app_key: str
    app_secret: str
    user_token: str
    user_secret: str

    def __post_init__(self) -> None:
        missing = [field.name for field in fields(self) if not getattr(self, field.name)]
        if missing:
            raise ConfigurationError(f"Missing credentials: {', '.join(missing)}.")

    def __repr__(self) -> str:
        return f"Credentials(app_key={self.app_key!r}, user_token={self.user_token!r})"

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, str | None]) -> "Credentials":
        return cls(
            app_key=data.get("app_key") or "",
            app_secret=data.get("app_secret") or "",
            user_token=data.get("user_token") or "",
            user_secret=data.get("user_secret") or "",
        )


class ConfigManager:
    """Loads and persists credentials from the environment, a dotenv file or disk."""

    def __init__(
        self,
        credential_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
        dotenv_path: Path | None = None,
    ) -> None:
        self._credential_path = credential_path or Path("credentials/tweetbot.json")
        self._env = os.environ if env is None else env
        self._dotenv_path = dotenv_path or Path(".env")

    def load_credentials(
        self,
        priority: Sequence[str] = ("env", "dotenv", "file"),
    ) -> Credentials:
        """
        Load credentials according to the requested priority order.

        A source that provides none of the values is skipped. A source that
        provides only some of them is an error.

        Raises:
            ConfigurationError: when no complete credential set is available.
        """

        for source in priority:
            if source == "env":
                values = self._load_from_env()
            elif source == "dotenv":
                values = self._load_from_dotenv()
            elif source == "file":
                values = self._load_from_file()
            else:
                raise ValueError(f"Unknown credential source '{source}'.")

            if not values:
                continue
            try:
                return Credentials.from_mapping(values)
            except ConfigurationError as exc:
                raise ConfigurationError(f"Incomplete credentials from {source}: {exc}") from exc

        raise ConfigurationError("Twitter credentials are not configured.")

    def save_credentials(self, credentials: Credentials) -> None:
        """Persist credentials to the JSON credential file."""

        self._credential_path.parent.mkdir(parents=True, exist_ok=True)
        with self._credential_path.open("w", encoding="utf-8") as fp:
            json.dump(credentials.to_dict(), fp, indent=2, sort_keys=True)

        os.chmod(self._credential_path, 0o600)

    def _load_from_env(self) -> dict[str, str]:
        return _present(
            {field: self._env.get(env_name) for field, env_name in ENV_VAR_MAP.items()}
        )

    def _load_from_dotenv(self) -> dict[str, str]:
        if not self._dotenv_path.exists():
            return {}
        values = dotenv_values(self._dotenv_path)
        return _present(
            {field: values.get(env_name) for field, env_name in ENV_VAR_MAP.items()}
        )

    def _load_from_file(self) -> dict[str, str]:
        if not self._credential_path.exists():
            return {}

        with self._credential_path.open("r", encoding="utf-8") as fp:
            data = json.load(fp)

        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Credential file {self._credential_path} did not contain a mapping."
            )
        return _present({field: data.get(field) for field in ENV_VAR_MAP})


def _present(values: Mapping[str, str | None]) -> dict[str, str]:
    return {key: value for key, value in values.items() if value}
