"""Boundary handler that renders failures as problem details responses."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Protocol

from .config import ErrorHandlingConfig
from .errors import HttpError
from .http import is_server_error
from .problem import from_error
from .responses import Response, apply_default_security_headers, to_response

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[Any]]


class Middleware(Protocol):
    async def __call__(self, request: Any, handler: Handler) -> Any:  # pragma: no cover - protocol
        ...


def _describe(request: Any) -> str:
    method = getattr(request, "method", None)
    path = getattr(request, "path", None)
    if method and path:
        return f"{method} {path}"
    return type(request).__name__


def _log_error(error: HttpError, request: Any, config: ErrorHandlingConfig, exc: BaseException | None) -> None:
    if is_server_error(error.status):
        logger.error("%s failed with %s", _describe(request), error, exc_info=exc or error)
        return
    level = logging.INFO if config.log_client_errors else logging.DEBUG
    logger.log(level, "%s rejected with %s", _describe(request), error)


def render_error(error: HttpError, config: ErrorHandlingConfig | None = None) -> Response:
    """Return the response for ``error`` honoring ``config``."""

    settings = config or ErrorHandlingConfig()
    response = to_response(error)
    if settings.security_headers:
        response = apply_default_security_headers(response)
    return response


def problem_details_middleware(config: ErrorHandlingConfig | None = None) -> Middleware:
    """Create middleware that turns failures into problem details responses.

    Exceptions raised by the downstream handler, and :class:`HttpError` values
    it returns, are normalized with :func:`~httperror.problem.from_error`,
    logged, and rendered. Exception types listed in ``config.reraise``
    propagate unchanged.
    """

    settings = config or ErrorHandlingConfig()

    async def middleware(request: Any, handler: Handler) -> Any:
        try:
            result = await handler(request)
        except Exception as exc:
            if settings.should_reraise(exc):
                raise
            error = from_error(exc)
            _log_error(error, request, settings, exc)
            return render_error(error, settings)
        if isinstance(result, HttpError):
            _log_error(result, request, settings, None)
            return render_error(result, settings)
        return result

    return middleware


__all__ = ["Handler", "Middleware", "problem_details_middleware", "render_error"]
