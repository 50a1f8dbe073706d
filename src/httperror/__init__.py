"""HTTP errors that serialize to and from RFC 9457 problem details."""

from .config import ErrorHandlingConfig
from .errors import (
    PROBLEM_JSON_CONTENT_TYPE,
    HttpError,
    HttpErrorOptions,
    create_http_error_class,
    merge_options,
    options_from_args,
)
from .exceptions import HttpErrorBase, InvalidStatusError
from .headers import Headers
from .http import Status, default_error_name, default_exposed_message, ensure_error_status, reason_phrase
from .middleware import problem_details_middleware, render_error
from .problem import (
    ProblemDetails,
    from_error,
    from_response,
    is_http_error_like,
    is_problem_details,
    to_problem_details,
)
from .responses import Response, apply_default_security_headers, to_response
from .serialization import json_decode, json_encode

__all__ = [
    "ErrorHandlingConfig",
    "Headers",
    "HttpError",
    "HttpErrorBase",
    "HttpErrorOptions",
    "InvalidStatusError",
    "PROBLEM_JSON_CONTENT_TYPE",
    "ProblemDetails",
    "Response",
    "Status",
    "apply_default_security_headers",
    "create_http_error_class",
    "default_error_name",
    "default_exposed_message",
    "ensure_error_status",
    "from_error",
    "from_response",
    "is_http_error_like",
    "is_problem_details",
    "json_decode",
    "json_encode",
    "merge_options",
    "options_from_args",
    "problem_details_middleware",
    "reason_phrase",
    "render_error",
    "to_problem_details",
    "to_response",
]
