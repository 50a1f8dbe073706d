"""Transport response primitives for problem details."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

import msgspec

from .headers import HeaderPairs
from .serialization import EncodeError, json_decode, json_encode

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from .errors import HttpError


logger = logging.getLogger(__name__)

DEFAULT_SECURITY_HEADERS: HeaderPairs = (
    ("strict-transport-security", "max-age=63072000; includeSubDomains; preload"),
    ("content-security-policy", "default-src 'none'"),
    ("x-content-type-options", "nosniff"),
    ("referrer-policy", "no-referrer"),
    ("x-frame-options", "DENY"),
    ("cross-origin-opener-policy", "same-origin"),
)


class Response(msgspec.Struct, frozen=True):
    """Immutable response payload."""

    status: int
    headers: HeaderPairs = ()
    body: bytes = b""
    status_text: str | None = None

    def with_headers(self, headers: Iterable[tuple[str, str]]) -> "Response":
        """Return a new response with ``headers`` appended."""

        return Response(
            status=self.status,
            headers=self.headers + tuple(headers),
            body=self.body,
            status_text=self.status_text,
        )

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of header ``name``, matched case-insensitively."""

        key = name.lower()
        for header, value in self.headers:
            if header.lower() == key:
                return value
        return default

    def text(self) -> str:
        return self.body.decode()

    async def json(self) -> Any:
        """Decode the JSON body using :mod:`msgspec`."""

        return json_decode(self.body)


def apply_default_security_headers(
    response: Response,
    *,
    headers: Iterable[tuple[str, str]] | None = None,
) -> Response:
    """Append default security headers to ``response`` when missing."""

    baseline = tuple(headers or DEFAULT_SECURITY_HEADERS)
    if not baseline:
        return response
    existing = {name.lower() for name, _ in response.headers}
    additions = tuple((name, value) for name, value in baseline if name.lower() not in existing)
    if not additions:
        return response
    return response.with_headers(additions)


def _encode_problem(error: "HttpError") -> bytes:
    from .problem import PROBLEM_DETAILS_MEMBERS

    payload = error.to_json()
    try:
        return json_encode(payload)
    except (EncodeError, TypeError) as exc:
        logger.warning("Dropping extensions of %r that cannot be encoded: %s", error, exc)
    standard = {
        key: value
        for key, value in payload.items()
        if key in PROBLEM_DETAILS_MEMBERS and isinstance(value, (str, int))
    }
    return json_encode(standard)


def to_response(error: "HttpError") -> Response:
    """Build the transport response for ``error``.

    The body is the JSON problem details document and the headers are the
    error's own, which always include a content type. When an extension value
    cannot be encoded the body falls back to the standard members only.
    """

    return Response(
        status=error.status,
        headers=error.headers.raw(),
        body=_encode_problem(error),
        status_text=error.status_text,
    )


__all__ = [
    "DEFAULT_SECURITY_HEADERS",
    "Response",
    "apply_default_security_headers",
    "to_response",
]
