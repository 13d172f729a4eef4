"""Client configuration sourced from the process environment."""

import os
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .types import ConfigurationError

DEFAULT_API_URL = "https://app.freeplay.ai/api/v2"

# Field name -> environment variable
ENV_VARS: dict[str, str] = {
    "api_key": "FREEPLAY_API_KEY",
    "project_id": "FREEPLAY_PROJECT_ID",
    "api_url": "FREEPLAY_API_URL",
    "prompt_version_id": "FREEPLAY_PROMPT_VERSION_ID",
}

REQUIRED_FIELDS = ("api_key", "project_id")


@dataclass(frozen=True)
class Configuration:
    """
    Credentials and endpoint for the Freeplay API.

    Build it once at startup and hand it to whatever needs it:

        config = Configuration.from_env()
        config.validate()

    Args:
        api_key: Bearer token for the API
        project_id: Project all requests are scoped to
        api_url: API base, without a trailing slash
        prompt_version_id: Default template version attached to completions
    """

    api_key: Optional[str] = None
    project_id: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    prompt_version_id: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Configuration":
        """Read settings from ``environ`` (defaults to ``os.environ``). Empty values count as unset."""
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get(ENV_VARS["api_key"]) or None,
            project_id=env.get(ENV_VARS["project_id"]) or None,
            api_url=env.get(ENV_VARS["api_url"]) or DEFAULT_API_URL,
            prompt_version_id=env.get(ENV_VARS["prompt_version_id"]) or None,
        )

    def validate(self, required: Iterable[str] = REQUIRED_FIELDS) -> None:
        """Raise ConfigurationError naming every required field that is unset."""
        missing = []
        for name in required:
            if name not in ENV_VARS:
                raise ValueError(f"Unknown configuration field: {name}")
            if not getattr(self, name):
                missing.append(ENV_VARS[name])
        if missing:
            raise ConfigurationError(missing)

    def url(self, path: str) -> str:
        return f"{self.api_url.rstrip('/')}/{path.lstrip('/')}"
