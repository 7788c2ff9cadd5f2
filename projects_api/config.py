"""Environment-driven settings for the projects API."""
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional


logger = logging.getLogger(__name__)


DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001,https://aaroncarneiro.com"
DEFAULT_CORS_ORIGIN_REGEX = r"https://([a-z0-9-]+\.)+aaroncarneiro\.com"


def _get_int(names: List[str], default: int) -> int:
    """Read the first set variable among ``names`` as an int."""
    for name in names:
        raw = os.getenv(name)
        if raw is None or raw.strip() == "":
            continue
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Ignoring non-integer {name}={raw!r}")
    return default


def _get_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}")
        return default
    # 0 disables the timeout
    return value if value > 0 else None


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _get_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read once at startup."""
    github_account: str = "euaaron"
    github_api_url: str = "https://api.github.com"
    github_web_url: str = "https://github.com"
    github_fetch_attempts: int = 1
    scrape_concurrency: int = 8
    http_timeout_seconds: Optional[float] = 30.0
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = field(
        default_factory=lambda: DEFAULT_CORS_ORIGINS.split(",")
    )
    cors_origin_regex: Optional[str] = DEFAULT_CORS_ORIGIN_REGEX
    warm_cache_on_startup: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables.

        ``PORT`` falls back to ``API_PORT`` and ``HOST`` to ``API_HOST``.
        """
        return cls(
            github_account=os.getenv("GITHUB_ACCOUNT", "euaaron"),
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            github_web_url=os.getenv("GITHUB_WEB_URL", "https://github.com"),
            github_fetch_attempts=max(1, _get_int(["GITHUB_FETCH_ATTEMPTS"], 1)),
            scrape_concurrency=max(0, _get_int(["SCRAPE_CONCURRENCY"], 8)),
            http_timeout_seconds=_get_float("HTTP_TIMEOUT_SECONDS", 30.0),
            host=os.getenv("HOST") or os.getenv("API_HOST") or "0.0.0.0",
            port=_get_int(["PORT", "API_PORT"], 3000),
            cors_origins=_get_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            cors_origin_regex=os.getenv("CORS_ORIGIN_REGEX", DEFAULT_CORS_ORIGIN_REGEX) or None,
            warm_cache_on_startup=_get_bool("WARM_CACHE_ON_STARTUP", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper()
        )
