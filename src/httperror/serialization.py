from __future__ import annotations

from typing import Any, Protocol, cast

import msgspec
from msgspec import structs


class _JSONModule(Protocol):
    def encode(self, obj: Any) -> bytes: ...

    def decode(self, data: bytes) -> Any: ...


_json = cast(_JSONModule, getattr(msgspec, "json"))

DecodeError = msgspec.DecodeError
EncodeError = msgspec.EncodeError


def _sanitize_for_json(value: Any) -> Any:
    if isinstance(value, msgspec.Struct):
        return {key: _sanitize_for_json(val) for key, val in structs.asdict(value).items()}
    if isinstance(value, dict):
        return {key: _sanitize_for_json(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_sanitize_for_json(item) for item in value]
    return value


def json_encode(value: Any) -> bytes:
    """Serialize ``value`` to JSON bytes using msgspec.

    Raises :class:`msgspec.EncodeError` or :class:`TypeError` when ``value``
    holds something msgspec cannot encode.
    """

    return _json.encode(_sanitize_for_json(value))


def json_decode(data: bytes | str) -> Any:
    """Deserialize JSON ``data`` into native Python values.

    Raises :class:`msgspec.DecodeError` when ``data`` is not valid JSON.
    """

    return _json.decode(data)


__all__ = ["DecodeError", "EncodeError", "json_decode", "json_encode"]
