import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass(frozen=True)
class Settings:
    api_key: str
    search_url: str = DEFAULT_SEARCH_URL
    host: str = "0.0.0.0"
    port: int = 8000
    upstream_timeout: float = 10.0
    debug_logging: bool = False

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.debug_logging else logging.INFO


def _flag(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build the process settings from the environment.

    A `.env` file is loaded first when reading the real environment. Raises
    ConfigurationError if YT_API_KEY is missing or a numeric value is invalid.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = env.get("YT_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("Environment variable YT_API_KEY has not been set!")

    try:
        port = int(env.get("PORT", "8000"))
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {env.get('PORT')!r}")
    if not 1 <= port <= 65535:
        raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}")

    try:
        timeout = float(env.get("UPSTREAM_TIMEOUT", "10"))
    except ValueError:
        raise ConfigurationError(f"UPSTREAM_TIMEOUT must be a number, got {env.get('UPSTREAM_TIMEOUT')!r}")
    if timeout <= 0:
        raise ConfigurationError("UPSTREAM_TIMEOUT must be positive")

    return Settings(
        api_key=api_key,
        search_url=env.get("YOUTUBE_SEARCH_URL", DEFAULT_SEARCH_URL),
        host=env.get("HOST", "0.0.0.0"),
        port=port,
        upstream_timeout=timeout,
        debug_logging=_flag(env.get("DEBUG_LOGGING", "false")),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logging.getLogger("ytthumbs").setLevel(settings.log_level)
