"""
Configuration of the game client.

Values are read from environment variables, after loading a `.env` file (if present) with python-dotenv.
Command line flags of the terminal client take precedence over both.
"""

import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from src.core.exceptions import ConfigError
from src.core.shared_types import MoveBodyFormat

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_REQUEST_TIMEOUT = 10.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    move_format: MoveBodyFormat = MoveBodyFormat.POSITIONAL
    request_timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT  # None: wait forever
    poll_interval: Optional[float] = None  # None: fetch state once at session start
    log_level: str = "WARNING"


def optional_seconds(value: str) -> Optional[float]:
    """'none' (any case) or an empty string disables the setting, anything else must be a positive number."""
    if value.strip().lower() in ("", "none"):
        return None
    try:
        seconds = float(value)
    except ValueError:
        raise ConfigError(f"Expected a number of seconds or 'none', got {value!r}.")
    if seconds <= 0:
        raise ConfigError(f"Expected a positive number of seconds, got {value!r}.")
    return seconds


def move_format(value: str) -> MoveBodyFormat:
    try:
        return MoveBodyFormat(value.strip().lower())
    except ValueError:
        raise ConfigError(
            f"Invalid move format: {value!r}. Pick one from {','.join(MoveBodyFormat)}"
        )


def log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level: {value!r}. Pick one from {','.join(LOG_LEVELS)}"
        )
    return level


def api_url(value: str) -> str:
    url = value.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ConfigError(f"API URL must start with http:// or https://, got {value!r}.")
    return url


def _get(name: str, default: Any, cast: Callable[[str], Any]) -> Any:
    env = os.environ.get(name)
    if env is None:
        return default
    return cast(env)


def load_settings(use_dotenv: bool = True) -> Settings:
    """Build Settings from the environment."""
    if use_dotenv:
        load_dotenv()
    return Settings(
        api_url=_get("TICTACTOE_API_URL", DEFAULT_API_URL, api_url),
        move_format=_get("TICTACTOE_MOVE_FORMAT", MoveBodyFormat.POSITIONAL, move_format),
        request_timeout=_get(
            "TICTACTOE_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, optional_seconds
        ),
        poll_interval=_get("TICTACTOE_POLL_INTERVAL", None, optional_seconds),
        log_level=_get("TICTACTOE_LOG_LEVEL", "WARNING", log_level),
    )
