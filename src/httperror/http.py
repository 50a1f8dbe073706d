"""HTTP status helpers for error statuses."""

from __future__ import annotations

from enum import IntEnum
from http import HTTPStatus as _HTTPStatus

from .exceptions import InvalidStatusError


class Status(IntEnum):
    """Enumeration of the HTTP error status codes referenced by the package."""

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    CONFLICT = 409
    GONE = 410
    UNPROCESSABLE_CONTENT = 422
    TOO_MANY_REQUESTS = 429
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504


UNKNOWN_CLIENT_ERROR_NAME = "Unknown Client Error"
UNKNOWN_SERVER_ERROR_NAME = "Unknown Server Error"
GENERIC_CLIENT_ERROR_MESSAGE = "A client error occurred."
GENERIC_SERVER_ERROR_MESSAGE = "A server error occurred."

# Safe, externally visible descriptions for statuses whose message is not exposed.
DEFAULT_EXPOSED_MESSAGES: dict[int, str] = {
    400: "The server cannot process the request due to a client error.",
    401: "Authentication is required to access the requested resource.",
    402: "Payment is required to access the requested resource.",
    403: "Access to the requested resource is forbidden.",
    404: "The requested resource could not be found.",
    405: "The request method is not supported by the target resource.",
    406: "The server cannot produce a response matching the acceptable values.",
    407: "Authentication with the proxy is required.",
    408: "The server timed out waiting for the request.",
    409: "The request conflicts with the current state of the target resource.",
    410: "The requested resource is no longer available.",
    411: "The request did not specify the length of its content.",
    412: "One or more request preconditions failed.",
    413: "The request content is larger than the server is willing to process.",
    414: "The request URI is longer than the server is willing to interpret.",
    415: "The request content format is not supported.",
    416: "The requested range cannot be satisfied.",
    417: "The expectation given in the request could not be met.",
    418: "The server refuses to brew coffee because it is a teapot.",
    421: "The request was directed at a server that cannot produce a response.",
    422: "The request was well-formed but contains semantic errors.",
    423: "The requested resource is locked.",
    424: "The request failed because a dependent request failed.",
    425: "The server is unwilling to process a request that might be replayed.",
    426: "The client must switch to a different protocol.",
    428: "The request is required to be conditional.",
    429: "Too many requests have been sent in a given amount of time.",
    431: "The request header fields are too large.",
    451: "The requested resource is unavailable for legal reasons.",
    500: "The server encountered an unexpected condition.",
    501: "The server does not support the functionality required to fulfill the request.",
    502: "The server received an invalid response from an upstream server.",
    503: "The server is currently unavailable.",
    504: "The server did not receive a timely response from an upstream server.",
    505: "The HTTP version used in the request is not supported.",
    506: "The server has an internal configuration error.",
    507: "The server is unable to store the representation needed to complete the request.",
    508: "The server detected an infinite loop while processing the request.",
    510: "Further extensions to the request are required for the server to fulfill it.",
    511: "Network authentication is required to gain access.",
}


def is_valid_error_status(status: object) -> bool:
    """Return ``True`` if ``status`` is an integer client or server error code."""

    if isinstance(status, bool) or not isinstance(status, int):
        return False
    return 400 <= status < 600


def ensure_error_status(status: int | Status) -> int:
    """Normalize ``status`` to an ``int`` and ensure it is a 4xx or 5xx code."""

    if not is_valid_error_status(status):
        raise InvalidStatusError(status)
    return int(status)


def reason_phrase(status: int | Status) -> str | None:
    """Return the standard HTTP reason phrase for ``status`` if known."""

    try:
        return _HTTPStatus(int(status)).phrase
    except ValueError:
        return None


def default_error_name(status: int | Status) -> str:
    """Return the display name used for an error with ``status``."""

    code = ensure_error_status(status)
    phrase = reason_phrase(code)
    if phrase:
        return phrase
    return UNKNOWN_CLIENT_ERROR_NAME if code < 500 else UNKNOWN_SERVER_ERROR_NAME


def default_exposed_message(status: int | Status) -> str:
    """Return the externally safe description for ``status``."""

    code = ensure_error_status(status)
    message = DEFAULT_EXPOSED_MESSAGES.get(code)
    if message:
        return message
    return GENERIC_CLIENT_ERROR_MESSAGE if code < 500 else GENERIC_SERVER_ERROR_MESSAGE


def is_client_error(status: int | Status) -> bool:
    """Return ``True`` if ``status`` is a 4xx code."""

    code = ensure_error_status(status)
    return code < 500


def is_server_error(status: int | Status) -> bool:
    """Return ``True`` if ``status`` is a 5xx code."""

    code = ensure_error_status(status)
    return code >= 500


__all__ = [
    "DEFAULT_EXPOSED_MESSAGES",
    "GENERIC_CLIENT_ERROR_MESSAGE",
    "GENERIC_SERVER_ERROR_MESSAGE",
    "Status",
    "UNKNOWN_CLIENT_ERROR_NAME",
    "UNKNOWN_SERVER_ERROR_NAME",
    "default_error_name",
    "default_exposed_message",
    "ensure_error_status",
    "is_client_error",
    "is_server_error",
    "is_valid_error_status",
    "reason_phrase",
]
