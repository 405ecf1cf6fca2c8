"""Configuration: optional .env loading and the settings read from the environment."""
from dataclasses import dataclass
from typing import Optional
import logging
import os

logger = logging.getLogger(__name__)


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def load_env_file(filepath: str = ".env") -> int:
    """Copy KEY=VALUE pairs from `filepath` into os.environ without overriding.

    Returns the number of variables set. A missing or unreadable file is not an error.
    """
    if not os.path.exists(filepath):
        logger.debug(".env file not found: %s", filepath)
        return 0
    loaded = 0
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            for raw in f:
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                line = line[len("export "):] if line.startswith("export ") else line
                key, sep, val = line.partition("=")
                key = key.strip()
                if not sep or not key or key in os.environ:
                    continue
                os.environ[key] = _strip_quotes(val.strip())
                loaded += 1
    except OSError as e:
        logger.debug("Ignoring .env load error: %s", e)
    return loaded


@dataclass(frozen=True)
class Settings:
    github_token: Optional[str] = None
    api_root: str = "https://api.github.com"
    request_timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = os.environ.get("GITHUB_REQUEST_TIMEOUT", "")
        try:
            request_timeout = float(timeout) if timeout else 10.0
            if request_timeout <= 0:
                raise ValueError(timeout)
        except ValueError:
            logger.warning("Invalid GITHUB_REQUEST_TIMEOUT %r, using 10s", timeout)
            request_timeout = 10.0
        return cls(
            github_token=os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN") or None,
            api_root=os.environ.get("GITHUB_API_ROOT") or "https://api.github.com",
            request_timeout=request_timeout,
            log_level=(os.environ.get("LOG_LEVEL") or "INFO").upper(),
        )


def resolve_github_token(request_token: Optional[str], settings: Settings) -> Optional[str]:
    """Prefer the credential sent with the request, fall back to the configured one."""
    return (request_token or "").strip() or settings.github_token
