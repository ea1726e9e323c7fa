# =============================================================================
# core/config.py  —  Process configuration (credentials + model choice)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the handful of environment values the server needs, exactly once,
#   into a frozen TriageConfig.  The config is passed into the gateway at
#   construction time; nothing else in core/ reads os.environ.
#
# ENVIRONMENT VARIABLES:
#   GITHUB_TOKEN    — bearer token for the GitHub REST API (needed by every
#                     GitHub-backed tool; the server still starts without it)
#   GEMINI_API_KEY  — optional; summarize_pr degrades gracefully without it
#   GEMINI_MODEL    — optional; first model tried by summarize_pr
#   GITHUB_API_URL  — optional; override for GitHub Enterprise Server
#
#   Loading a .env file is main.py's job (python-dotenv), not this module's.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_GITHUB_API_URL = "https://api.github.com"


def _clean(value: Optional[str]) -> Optional[str]:
    """Treat blank environment values as unset."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class TriageConfig:
    """Immutable credentials and defaults for one server process."""
    github_token: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    github_api_url: str = DEFAULT_GITHUB_API_URL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TriageConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from.  Defaults to ``os.environ``.
        """
        env = os.environ if environ is None else environ
        return cls(
            github_token=_clean(env.get("GITHUB_TOKEN")),
            gemini_api_key=_clean(env.get("GEMINI_API_KEY")),
            gemini_model=_clean(env.get("GEMINI_MODEL")) or DEFAULT_GEMINI_MODEL,
            github_api_url=_clean(env.get("GITHUB_API_URL")) or DEFAULT_GITHUB_API_URL,
        )

    @property
    def has_github_token(self) -> bool:
        return self.github_token is not None

    @property
    def has_gemini_key(self) -> bool:
        return self.gemini_api_key is not None

    def __repr__(self) -> str:
        # Never leak secrets into logs.
        return (
            f"TriageConfig(github_token={'***' if self.github_token else None}, "
            f"gemini_api_key={'***' if self.gemini_api_key else None}, "
            f"gemini_model={self.gemini_model!r}, "
            f"github_api_url={self.github_api_url!r})"
        )
