"""Runtime configuration for Creator Studio.

Configuration is an explicit value passed to the backend client. There is
no module-level client: re-authenticating means building a new config
with ``with_api_key()`` and a new client from it.

Environment Variables:
    GEMINI_API_KEY / API_KEY: Credential for the generative-AI service
    CREATOR_STUDIO_BASE_URL: API base URL
    CREATOR_STUDIO_TEXT_MODEL: Model for short text generations
    CREATOR_STUDIO_PRO_MODEL: Model for long-form generations (scripts)
    CREATOR_STUDIO_VIDEO_MODEL: Model for video generation
    CREATOR_STUDIO_TIMEOUT: Request timeout in seconds
    CREATOR_STUDIO_POLL_INTERVAL: Seconds between video status checks
    CREATOR_STUDIO_DEBUG_DIR: Directory for request/response dumps

When reading the real environment, a ``.env.local`` file in the working
directory is loaded first. Variables already set in the environment win.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

from creator_studio.core.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_FILE_NAME = ".env.local"

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TEXT_MODEL = "gemini-flash-lite-latest"
DEFAULT_PRO_MODEL = "gemini-2.5-pro"
DEFAULT_SEARCH_MODEL = "gemini-2.5-flash"
DEFAULT_VIDEO_MODEL = "veo-3.1-fast-generate-preview"
DEFAULT_POLL_INTERVAL = 10.0


@dataclass(frozen=True)
class StudioConfig:
    """Configuration for the generation backend.

    Attributes:
        api_key: Credential sent with every request.
        base_url: API base URL.
        text_model: Model for titles, hooks, tags and other short outputs.
        pro_model: Model for script generation.
        search_model: Model for calls that use the search tool.
        video_model: Model for long-running video generation.
        timeout: Per-request timeout in seconds.
        poll_interval: Seconds between status checks of a video job.
        debug_dir: If set, raw requests/responses are saved here.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    text_model: str = DEFAULT_TEXT_MODEL
    pro_model: str = DEFAULT_PRO_MODEL
    search_model: str = DEFAULT_SEARCH_MODEL
    video_model: str = DEFAULT_VIDEO_MODEL
    timeout: float = 120.0
    poll_interval: float = DEFAULT_POLL_INTERVAL
    debug_dir: str | None = None

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigError("API key is required (set GEMINI_API_KEY)")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive")
        if self.poll_interval <= 0:
            raise ConfigError("poll_interval must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StudioConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ, after
                loading ``.env.local`` from the working directory.

        Raises:
            ConfigError: If the API key is missing or a number is malformed.
        """
        if environ is None:
            load_env_file()
        env = os.environ if environ is None else environ

        api_key = env.get("GEMINI_API_KEY") or env.get("API_KEY") or ""

        return cls(
            api_key=api_key,
            base_url=env.get("CREATOR_STUDIO_BASE_URL", DEFAULT_BASE_URL),
            text_model=env.get("CREATOR_STUDIO_TEXT_MODEL", DEFAULT_TEXT_MODEL),
            pro_model=env.get("CREATOR_STUDIO_PRO_MODEL", DEFAULT_PRO_MODEL),
            search_model=env.get("CREATOR_STUDIO_SEARCH_MODEL", DEFAULT_SEARCH_MODEL),
            video_model=env.get("CREATOR_STUDIO_VIDEO_MODEL", DEFAULT_VIDEO_MODEL),
            timeout=_float_env(env, "CREATOR_STUDIO_TIMEOUT", 120.0),
            poll_interval=_float_env(env, "CREATOR_STUDIO_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
            debug_dir=env.get("CREATOR_STUDIO_DEBUG_DIR") or None,
        )

    def with_api_key(self, api_key: str) -> StudioConfig:
        """Return a copy of this config using a different credential."""
        return replace(self, api_key=api_key)

    def __repr__(self) -> str:
        return f"StudioConfig(base_url={self.base_url!r}, text_model={self.text_model!r})"


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def load_env_file(directory: Path | None = None) -> Path | None:
    """Load ``.env.local`` from ``directory`` (default: cwd) into os.environ.

    Returns:
        The file that was loaded, or None if there is none.
    """
    env_file = (directory or Path.cwd()) / ENV_FILE_NAME
    if not env_file.is_file():
        return None
    load_dotenv(env_file, override=False)
    logger.debug("env_file_loaded: path=%s", env_file)
    return env_file
