"""Error handling configuration objects."""

from __future__ import annotations

from msgspec import Struct


class ErrorHandlingConfig(Struct, frozen=True):
    """Typed configuration for :func:`~httperror.middleware.problem_details_middleware`."""

    log_client_errors: bool = False
    security_headers: bool = True
    reraise: tuple[type[BaseException], ...] = ()

    def should_reraise(self, exc: BaseException) -> bool:
        """Return ``True`` if ``exc`` must propagate instead of being rendered."""

        return bool(self.reraise) and isinstance(exc, self.reraise)
