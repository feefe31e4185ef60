# =============================================================================
# stellify_core/config.py  -  Environment Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the handful of settings the server needs from the process
#   environment and freezes them into a Settings object.
#
#   STELLIFY_API_TOKEN   required   bearer token sent on every request
#   STELLIFY_API_URL     optional   defaults to the public Stellify API
#   STELLIFY_LOG_LEVEL   optional   DEBUG / INFO / WARNING / ERROR
#
# .env FILES:
#   main.py calls load_dotenv() BEFORE Settings.from_env(), so a local .env
#   file works the same as exported variables.  This module only reads
#   os.environ (or whatever mapping a test hands it).
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping

from stellify_core.errors import ConfigError

DEFAULT_API_URL = "https://stellisoft.com/api/v1"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup."""

    api_url: str
    api_token: str
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build Settings from the environment.

        Args:
            environ: Mapping to read from.  Defaults to os.environ.

        Raises:
            ConfigError: If STELLIFY_API_TOKEN is unset or blank, or the log
                level is not one the logging module knows.
        """
        env = os.environ if environ is None else environ

        token = env.get("STELLIFY_API_TOKEN", "").strip()
        if not token:
            raise ConfigError("STELLIFY_API_TOKEN environment variable is required")

        api_url = env.get("STELLIFY_API_URL", "").strip() or DEFAULT_API_URL

        log_level = env.get("STELLIFY_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if log_level not in _VALID_LOG_LEVELS:
            raise ConfigError(
                f"STELLIFY_LOG_LEVEL must be one of {', '.join(_VALID_LOG_LEVELS)}, got {log_level!r}"
            )

        return cls(api_url=api_url.rstrip("/"), api_token=token, log_level=log_level)

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks.
        return f"Settings(api_url={self.api_url!r}, api_token='***', log_level={self.log_level!r})"
