"""Conversion between :class:`HttpError`, caught values and problem details."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Mapping, overload

import httpx

from .errors import HttpError, HttpErrorOptions
from .headers import Headers
from .http import Status, is_valid_error_status
from .responses import Response
from .serialization import DecodeError, json_decode

logger = logging.getLogger(__name__)

ProblemDetails = dict[str, Any]

PROBLEM_DETAILS_MEMBERS = ("status", "title", "detail", "type", "instance")
_PROBLEM_DETAILS_MARKERS = ("status", "title", "type")

UNEXPECTED_ERROR_TYPE = "unexpected error type"
INVALID_PROBLEM_DETAILS = "invalid problem details"
INVALID_PROBLEM_DETAILS_RESPONSE = "invalid problem details response"
UNPARSABLE_PROBLEM_DETAILS_RESPONSE = "could not parse problem details response"

TransportResponse = Response | httpx.Response


def is_problem_details(value: Any) -> bool:
    """Return ``True`` if ``value`` looks like a problem details payload."""

    return isinstance(value, Mapping) and any(key in value for key in _PROBLEM_DETAILS_MARKERS)


def _error_status(value: BaseException) -> Any:
    status = getattr(value, "status", None)
    if status is None:
        status = getattr(value, "status_code", None)
    return status


def is_http_error_like(value: Any) -> bool:
    """Return ``True`` for an :class:`HttpError` or an exception carrying an error status."""

    if isinstance(value, HttpError):
        return True
    return isinstance(value, BaseException) and is_valid_error_status(_error_status(value))


def _str_attr(value: Any, name: str) -> str | None:
    item = getattr(value, name, None)
    return item if isinstance(item, str) else None


def _exception_message(error: BaseException) -> str:
    message = _str_attr(error, "message")
    if message is not None:
        return message
    return str(error)


def _header_pairs(headers: Any) -> Headers | tuple[tuple[str, Any], ...] | None:
    if isinstance(headers, Headers):
        return headers
    if not isinstance(headers, Mapping):
        return None
    return tuple((name, value) for name, value in headers.items() if isinstance(name, str))


def _from_error_like(error: BaseException) -> HttpError:
    message = _str_attr(error, "message")
    if message is None:
        message = _str_attr(error, "detail")
    if message is None:
        message = str(error)
    expose = getattr(error, "expose", None)
    extensions = getattr(error, "extensions", None)
    headers = getattr(error, "headers", None)
    options = HttpErrorOptions(
        status=_error_status(error),
        name=_str_attr(error, "name") or type(error).__name__,
        message=message,
        expose=expose if isinstance(expose, bool) else None,
        status_text=_str_attr(error, "status_text"),
        type=_str_attr(error, "type"),
        instance=_str_attr(error, "instance"),
        extensions=extensions if isinstance(extensions, Mapping) else None,
        headers=_header_pairs(headers),
        exposed_message=_str_attr(error, "exposed_message"),
        cause=getattr(error, "cause", None),
    )
    return HttpError(options)


def _from_problem_details(
    payload: Mapping[str, Any],
    *,
    invalid_message: str,
    fallback_status: int | None = None,
) -> HttpError:
    extensions = {key: value for key, value in payload.items() if key not in PROBLEM_DETAILS_MEMBERS}
    status = payload.get("status") or fallback_status
    if status is not None and not is_valid_error_status(status):
        return HttpError(Status.INTERNAL_SERVER_ERROR, invalid_message, {"cause": payload})
    title, detail = payload.get("title"), payload.get("detail")
    problem_type, instance = payload.get("type"), payload.get("instance")
    options = HttpErrorOptions(
        status=status,
        name=title if isinstance(title, str) else None,
        message=detail if isinstance(detail, str) else None,
        type=problem_type if isinstance(problem_type, str) else None,
        instance=instance if isinstance(instance, str) else None,
        extensions=extensions,
    )
    return HttpError(options)


async def _read_response(response: TransportResponse) -> tuple[int, bytes]:
    if isinstance(response, httpx.Response):
        body = await response.aread()
        return response.status_code, body
    return response.status, response.body


async def from_response(response: TransportResponse) -> HttpError:
    """Rebuild the :class:`HttpError` described by a problem details response.

    A ``status`` inside the payload takes precedence over the transport
    status. Bodies that are not JSON, or not problem details, become 500
    errors carrying the parse failure or the parsed value as ``cause``.
    """

    status, body = await _read_response(response)
    try:
        payload = json_decode(body)
    except DecodeError as exc:
        logger.debug("Problem details response body is not JSON: %s", exc)
        return HttpError(Status.INTERNAL_SERVER_ERROR, UNPARSABLE_PROBLEM_DETAILS_RESPONSE, {"cause": exc})
    if not is_problem_details(payload):
        return HttpError(Status.INTERNAL_SERVER_ERROR, INVALID_PROBLEM_DETAILS_RESPONSE, {"cause": payload})
    return _from_problem_details(
        payload,
        invalid_message=INVALID_PROBLEM_DETAILS_RESPONSE,
        fallback_status=status,
    )


@overload
def from_error(value: TransportResponse) -> Awaitable[HttpError]: ...


@overload
def from_error(value: Any) -> HttpError: ...


def from_error(value: Any) -> HttpError | Awaitable[HttpError]:
    """Coerce any value into an :class:`HttpError` without raising.

    ``HttpError`` instances are returned unchanged. Exceptions carrying an
    error ``status`` are rebuilt field for field, other exceptions become 500
    errors with the exception as ``cause``, and problem details mappings are
    mapped back onto the error fields. Transport responses return an awaitable
    (see :func:`from_response`). Anything else becomes a 500 error with
    ``"unexpected error type"`` as its message.
    """

    if isinstance(value, HttpError):
        return value
    if is_http_error_like(value):
        return _from_error_like(value)
    if isinstance(value, BaseException):
        return HttpError(Status.INTERNAL_SERVER_ERROR, _exception_message(value), {"cause": value})
    if isinstance(value, (Response, httpx.Response)):
        return from_response(value)
    if is_problem_details(value):
        return _from_problem_details(value, invalid_message=INVALID_PROBLEM_DETAILS)
    logger.debug("Wrapping unexpected %s value in an HttpError", type(value).__name__)
    return HttpError(Status.INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_TYPE, {"cause": value})


def to_problem_details(error: HttpError) -> ProblemDetails:
    """Return the RFC 9457 payload for ``error``.

    Extensions are flattened into the payload. ``detail`` always carries the
    exposed message, never the internal one.
    """

    payload: ProblemDetails = dict(error.extensions)
    payload["status"] = error.status
    payload["title"] = error.name
    payload["detail"] = error.exposed_message
    if error.type:
        payload["type"] = error.type
    if error.instance:
        payload["instance"] = error.instance
    return payload


__all__ = [
    "INVALID_PROBLEM_DETAILS",
    "INVALID_PROBLEM_DETAILS_RESPONSE",
    "PROBLEM_DETAILS_MEMBERS",
    "ProblemDetails",
    "TransportResponse",
    "UNEXPECTED_ERROR_TYPE",
    "UNPARSABLE_PROBLEM_DETAILS_RESPONSE",
    "from_error",
    "from_response",
    "is_http_error_like",
    "is_problem_details",
    "to_problem_details",
]
