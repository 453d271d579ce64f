from __future__ import annotations

from typing import Optional


class FetchFailure(Exception):
    """
    A fetch from the remote API did not produce usable records.

    Covers network errors, timeouts, authentication/server errors and
    malformed payloads. It is the only error the navigator handles.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
