"""Package exception types."""

from __future__ import annotations

from typing import Any


class HttpErrorBase(Exception):
    """Base error type for failures raised by the package itself."""


class InvalidStatusError(HttpErrorBase, ValueError):
    """Raised when an error is constructed with a status outside 400-599."""

    def __init__(self, status: Any) -> None:
        super().__init__("invalid error status")
        self.status = status
