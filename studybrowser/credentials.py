"""
Session credential providers.

A credential provider is a zero-argument callable returning the bearer token
(or None). The navigator receives one at construction time and calls it for
every fetch, so a token written to disk mid-session is picked up on the
next request.

The token file looks like:

    {"token": "eyJhbGciOi..."}
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Callable, Optional

from studybrowser.config import Settings, default_token_path

CredentialProvider = Callable[[], Optional[str]]


def load_token(path: str | Path | None = None) -> Optional[str]:
    """
    Load the bearer token from a JSON token file.

    Returns None if the file does not exist or is invalid; a broken token
    file must never crash the browser.
    """
    token_path = Path(path) if path is not None else default_token_path()

    if not token_path.exists():
        return None

    try:
        data = json.loads(token_path.read_text(encoding="utf-8"))
        token = data.get("token")
        if not isinstance(token, str):
            return None
        return token.strip() or None
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return None


def save_token(token: str, path: str | Path | None = None) -> None:
    """
    Save the bearer token, creating parent directories if needed.
    """
    token_path = Path(path) if path is not None else default_token_path()
    token_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {"token": token.strip()}
    token_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def static_token(token: Optional[str]) -> CredentialProvider:
    return lambda: token


def env_token(var: str = "STUDYBROWSER_TOKEN") -> CredentialProvider:
    return lambda: os.getenv(var) or None


def file_token(path: str | Path | None = None) -> CredentialProvider:
    return lambda: load_token(path)


def chain(*providers: CredentialProvider) -> CredentialProvider:
    """
    Combine providers: the first non-empty token wins.
    """

    def _first() -> Optional[str]:
        for provider in providers:
            token = provider()
            if token:
                return token
        return None

    return _first


def provider_from_settings(settings: Settings) -> CredentialProvider:
    """
    Explicit token (CLI option or STUDYBROWSER_TOKEN) first, then the token file.
    """
    return chain(static_token(settings.token), file_token(settings.token_file))
