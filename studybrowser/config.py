"""
Runtime settings.

Values come from environment variables and can be overridden by CLI options:

    STUDYBROWSER_API_URL     base URL of the course API (default http://localhost:8000)
    STUDYBROWSER_TOKEN       bearer token
    STUDYBROWSER_TOKEN_FILE  JSON file holding {"token": "..."}
    STUDYBROWSER_TIMEOUT     request timeout in seconds (default 30)

Both sources go through the same pydantic model, so a bad value (e.g.
STUDYBROWSER_TIMEOUT=thirty) raises pydantic.ValidationError instead of
being replaced by a default.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30.0

ENV_VARS = {
    "api_url": "STUDYBROWSER_API_URL",
    "token": "STUDYBROWSER_TOKEN",
    "token_file": "STUDYBROWSER_TOKEN_FILE",
    "timeout": "STUDYBROWSER_TIMEOUT",
}


def default_token_path() -> Path:
    """
    Return the default location of the token file.

    A function instead of a constant, so tests can point HOME elsewhere.
    """
    return Path.home() / ".studybrowser" / "token.json"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    token_file: Optional[Path] = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("api_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("api_url must start with http:// or https://")
        return value

    @field_validator("token")
    @classmethod
    def _blank_token_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


def _from_env() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name, var in ENV_VARS.items():
        raw = os.getenv(var, "").strip()
        if raw:
            values[name] = raw
    return values


def load_settings(**overrides: Any) -> Settings:
    """
    Build Settings from the environment, then apply non-None overrides.

    Raises pydantic.ValidationError on invalid values from either source.
    """
    values = _from_env()
    values.update({k: v for k, v in overrides.items() if v is not None})
    values.setdefault("token_file", default_token_path())
    return Settings(**values)
