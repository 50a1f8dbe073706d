"""The :class:`HttpError` type and its construction rules."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Mapping, Union, overload

import msgspec
from msgspec import UNSET, UnsetType, structs

from .headers import Headers, HeadersInit
from .http import (
    Status,
    default_error_name,
    default_exposed_message,
    ensure_error_status,
    is_client_error,
)

if TYPE_CHECKING:  # pragma: no cover - typing helpers only
    from .problem import ProblemDetails
    from .responses import Response

PROBLEM_JSON_CONTENT_TYPE = "application/problem+json"

_OPTION_ALIASES = {"statusText": "status_text", "exposedMessage": "exposed_message"}


class HttpErrorOptions(msgspec.Struct, frozen=True, kw_only=True):
    """Options accepted by :class:`HttpError`.

    Every field defaults to :data:`msgspec.UNSET`, meaning "not supplied". An
    explicit ``None``, ``False`` or ``""`` is a supplied value and replaces a
    variant default instead of falling through to it.
    """

    status: int | None | UnsetType = UNSET
    message: str | None | UnsetType = UNSET
    name: str | None | UnsetType = UNSET
    expose: bool | None | UnsetType = UNSET
    status_text: str | None | UnsetType = UNSET
    type: str | None | UnsetType = UNSET
    instance: str | None | UnsetType = UNSET
    extensions: Mapping[str, Any] | None | UnsetType = UNSET
    headers: HeadersInit | UnsetType = UNSET
    exposed_message: str | None | UnsetType = UNSET
    cause: Any = UNSET

    @classmethod
    def from_value(cls, value: "OptionsInit") -> "HttpErrorOptions":
        """Coerce ``None``, a mapping, or an options struct into options."""

        if value is None:
            return cls()
        if isinstance(value, HttpErrorOptions):
            return value
        if isinstance(value, Mapping):
            fields = set(cls.__struct_fields__)
            kwargs: dict[str, Any] = {}
            for key, item in value.items():
                field = _OPTION_ALIASES.get(key, key)
                if field not in fields:
                    raise TypeError(f"Unknown HttpError option: {key!r}")
                kwargs[field] = item
            return cls(**kwargs)
        raise TypeError(f"HttpError options must be a mapping, not {type(value).__name__}")


OptionsInit = Union[HttpErrorOptions, Mapping[str, Any], None]


def _is_status_argument(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _or_default(value: Any, default: Any) -> Any:
    # UNSET and None both select the default; "" and False are kept.
    return default if value is UNSET or value is None else value


def options_from_args(
    status_or_message_or_options: int | str | OptionsInit = None,
    message_or_options: str | OptionsInit = None,
    options: OptionsInit = None,
) -> HttpErrorOptions:
    """Resolve the positional ``HttpError`` call shapes into one options record.

    Supported shapes are ``(status, message, options)``, ``(status, options)``,
    ``(message, options)`` and ``(options)``. A positional status or message
    always wins over the same field inside the options record, which lets
    subclasses pin defaults in an options object while callers still override
    them positionally.
    """

    status: int | None = None
    message: str | None = None
    init: Any = options
    first, second = status_or_message_or_options, message_or_options

    if _is_status_argument(first):
        status = first
        if isinstance(second, str):
            message = second
        elif second is not None:
            if options is not None:
                raise TypeError("HttpError accepts a single options argument")
            init = second
    elif isinstance(first, str):
        message = first
        if options is not None:
            raise TypeError("HttpError(message, options) takes no third argument")
        init = second
    elif first is None:
        if isinstance(second, str):
            message = second
        elif second is not None:
            if options is not None:
                raise TypeError("HttpError accepts a single options argument")
            init = second
    else:
        if second is not None or options is not None:
            raise TypeError("HttpError(options) takes no further arguments")
        init = first

    resolved = HttpErrorOptions.from_value(init)
    overrides: dict[str, Any] = {}
    if status is not None:
        overrides["status"] = status
    if message is not None:
        overrides["message"] = message
    if overrides:
        resolved = structs.replace(resolved, **overrides)
    return resolved


def merge_options(defaults: HttpErrorOptions, overrides: HttpErrorOptions) -> HttpErrorOptions:
    """Layer ``overrides`` on top of ``defaults`` field by field.

    ``extensions`` is the only field merged shallowly; every other supplied
    field replaces the default outright.
    """

    merged: dict[str, Any] = {}
    for field in HttpErrorOptions.__struct_fields__:
        value = getattr(overrides, field)
        merged[field] = getattr(defaults, field) if value is UNSET else value
    layers = [
        extensions
        for extensions in (defaults.extensions, overrides.extensions)
        if isinstance(extensions, Mapping)
    ]
    if layers:
        merged["extensions"] = {key: value for layer in layers for key, value in layer.items()}
    return HttpErrorOptions(**merged)


class HttpError(Exception):
    """An HTTP error that renders as an RFC 9457 problem details document.

    The constructor accepts any of these equivalent call shapes::

        HttpError(404, "file not found")
        HttpError(404, {"message": "file not found"})
        HttpError("file not found", {"status": 404})
        HttpError({"status": 404, "message": "file not found"})

    ``status`` defaults to 500 and must be a client or server error code.
    ``expose`` defaults to ``True`` for client errors so their message may be
    shown to callers; server error messages stay internal and the response
    detail falls back to a safe description of the status.
    """

    status: int
    name: str
    message: str
    expose: bool
    exposed_message: str
    status_text: str | None
    type: str | None
    instance: str | None
    extensions: dict[str, Any]
    headers: Headers
    cause: Any

    def __init__(
        self,
        status_or_message_or_options: int | str | OptionsInit = None,
        message_or_options: str | OptionsInit = None,
        options: OptionsInit = None,
        /,
    ) -> None:
        init = options_from_args(status_or_message_or_options, message_or_options, options)
        status = ensure_error_status(_or_default(init.status, Status.INTERNAL_SERVER_ERROR))
        message = _or_default(init.message, "")
        super().__init__(*((message,) if message else ()))

        self.status = status
        self.message = message
        self.name = _or_default(init.name, default_error_name(status))
        self.expose = _or_default(init.expose, is_client_error(status))
        exposed_message = _or_default(init.exposed_message, None)
        if exposed_message is not None:
            self.exposed_message = exposed_message
        elif self.expose and message:
            self.exposed_message = message
        else:
            self.exposed_message = default_exposed_message(status)
        self.status_text = _or_default(init.status_text, None)
        self.type = _or_default(init.type, None)
        self.instance = _or_default(init.instance, None)
        self.extensions = dict(_or_default(init.extensions, {}))
        self.headers = Headers(_or_default(init.headers, None))
        if "content-type" not in self.headers:
            self.headers["content-type"] = PROBLEM_JSON_CONTENT_TYPE
        self.cause = _or_default(init.cause, None)
        if isinstance(self.cause, BaseException):
            self.__cause__ = self.cause

    def __str__(self) -> str:
        if self.message:
            return f"{self.name}: {self.message}"
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status!r}, name={self.name!r}, message={self.message!r})"

    @overload
    @staticmethod
    def from_error(value: "Response") -> Awaitable["HttpError"]: ...

    @overload
    @staticmethod
    def from_error(value: Any) -> "HttpError": ...

    @staticmethod
    def from_error(value: Any) -> "HttpError | Awaitable[HttpError]":
        """Coerce any caught value into an :class:`HttpError`.

        See :func:`httperror.problem.from_error`.
        """

        from .problem import from_error

        return from_error(value)

    def to_json(self) -> "ProblemDetails":
        """Return the problem details payload for this error."""

        from .problem import to_problem_details

        return to_problem_details(self)

    def get_response(self) -> "Response":
        """Return a transport response carrying the problem details payload."""

        from .responses import to_response

        return to_response(self)


def create_http_error_class(
    defaults: OptionsInit = None,
    *,
    name: str | None = None,
) -> type[HttpError]:
    """Create an :class:`HttpError` subclass with preset default options.

    Options given at instantiation are merged over ``defaults`` one field at a
    time. ``extensions`` are merged shallowly so default keys survive unless
    the caller sets the same key; ``headers`` given by the caller replace the
    default headers entirely.

    ::

        PaymentDeclined = create_http_error_class(
            {"status": 402, "name": "PaymentDeclined", "extensions": {"code": "DECLINED"}}
        )
        raise PaymentDeclined("card expired", {"extensions": {"retry": False}})
    """

    preset = HttpErrorOptions.from_value(defaults)
    class_name = name or _or_default(preset.name, None) or "CustomHttpError"

    class CustomHttpError(HttpError):
        __doc__ = f"HttpError variant with preset defaults ({class_name})."

        default_options: HttpErrorOptions = preset

        def __init__(
            self,
            status_or_message_or_options: int | str | OptionsInit = None,
            message_or_options: str | OptionsInit = None,
            options: OptionsInit = None,
            /,
        ) -> None:
            init = options_from_args(status_or_message_or_options, message_or_options, options)
            super().__init__(merge_options(type(self).default_options, init))

    CustomHttpError.__name__ = class_name
    CustomHttpError.__qualname__ = class_name
    return CustomHttpError


__all__ = [
    "HttpError",
    "HttpErrorOptions",
    "OptionsInit",
    "PROBLEM_JSON_CONTENT_TYPE",
    "create_http_error_class",
    "merge_options",
    "options_from_args",
]
