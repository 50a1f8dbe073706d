from __future__ import annotations

import httpx
import msgspec
import pytest

from httperror.errors import HttpError, create_http_error_class
from httperror.problem import (
    INVALID_PROBLEM_DETAILS,
    from_error,
    from_response,
    is_http_error_like,
    is_problem_details,
    to_problem_details,
)
from httperror.responses import Response
from httperror.serialization import json_encode


class StatusError(Exception):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


class LegacyHTTPException(Exception):
    def __init__(self, status_code: int, detail: str, headers: dict[str, str] | None = None) -> None:
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.headers = headers


def test_is_problem_details() -> None:
    assert not is_problem_details({})
    assert is_problem_details({"status": 400})
    assert is_problem_details({"title": "Bad Request"})
    assert is_problem_details({"type": "/errors/x"})
    assert not is_problem_details({"detail": "only detail"})
    assert not is_problem_details(None)
    assert not is_problem_details([("status", 400)])


def test_is_http_error_like() -> None:
    assert is_http_error_like(HttpError(400))
    assert is_http_error_like(StatusError("fail", 400))
    assert not is_http_error_like(StatusError("fail", 302))
    assert not is_http_error_like(RuntimeError("fail"))
    assert not is_http_error_like({"status": 400})


def test_from_http_error_is_identity() -> None:
    error = HttpError(400, "bad", {"extensions": {"x": 1}})
    assert from_error(error) is error
    assert from_error(from_error(error)) is error


def test_from_variant_is_identity() -> None:
    Variant = create_http_error_class({"status": 452})
    error = Variant("custom")
    assert from_error(error) is error
    assert HttpError.from_error(error) is error


def test_from_plain_exception() -> None:
    cause = RuntimeError("boom")
    error = from_error(cause)
    assert str(error) == "Internal Server Error: boom"
    assert error.status == 500
    assert error.message == "boom"
    assert error.expose is False
    assert error.cause is cause
    assert error.__cause__ is cause
    assert error.exposed_message == "The server encountered an unexpected condition."
    assert error.to_json() == {
        "status": 500,
        "title": "Internal Server Error",
        "detail": "The server encountered an unexpected condition.",
    }


def test_from_error_like_exception() -> None:
    original = StatusError("fail", 400)
    error = from_error(original)
    assert type(error) is HttpError
    assert str(error) == "StatusError: fail"
    assert error.name == "StatusError"
    assert error.message == "fail"
    assert error.status == 400
    assert error.expose is True
    assert error.cause is None


def test_from_error_like_exception_with_status_code() -> None:
    error = from_error(LegacyHTTPException(404, "item missing", {"X-Trace": "abc"}))
    assert error.status == 404
    assert error.message == "item missing"
    assert error.name == "LegacyHTTPException"
    assert error.headers["x-trace"] == "abc"
    assert error.headers["content-type"] == "application/problem+json"


def test_from_error_like_skips_non_string_header_names() -> None:
    original = LegacyHTTPException(404, "x", {1: "x", "X-A": "1"})  # type: ignore[dict-item]
    error = from_error(original)
    assert error.status == 404
    assert error.message == "x"
    assert error.headers["x-a"] == "1"
    assert [name for name, _ in error.headers.raw()] == ["x-a", "content-type"]


def test_from_error_like_ignores_headers_that_are_not_a_mapping() -> None:
    original = LegacyHTTPException(409, "conflict")
    original.headers = ["X-A: 1"]  # type: ignore[assignment]
    error = from_error(original)
    assert error.status == 409
    assert error.headers.raw() == (("content-type", "application/problem+json"),)


def test_from_error_like_preserves_fields() -> None:
    class ForeignError(Exception):
        def __init__(self) -> None:
            super().__init__("foreign")
            self.status = 503
            self.name = "ForeignError"
            self.message = "upstream down"
            self.expose = True
            self.type = "/errors/foreign"
            self.instance = "/errors/foreign/1"
            self.extensions = {"retry": 30}
            self.headers = {"Retry-After": "30"}
            self.exposed_message = "Try again later."
            self.cause = "upstream"

    error = from_error(ForeignError())
    assert error.status == 503
    assert error.name == "ForeignError"
    assert error.message == "upstream down"
    assert error.expose is True
    assert error.type == "/errors/foreign"
    assert error.instance == "/errors/foreign/1"
    assert error.extensions == {"retry": 30}
    assert error.headers["retry-after"] == "30"
    assert error.exposed_message == "Try again later."
    assert error.cause == "upstream"


def test_exception_with_non_error_status_is_wrapped() -> None:
    original = StatusError("moved", 302)
    error = from_error(original)
    assert error.status == 500
    assert error.message == "moved"
    assert error.cause is original


@pytest.mark.parametrize(
    "value",
    [None, 0, 42, "oops", True, 3.5, object(), len, ["status"], {}, {"detail": "x"}],
)
def test_from_unexpected_values(value: object) -> None:
    error = from_error(value)
    assert isinstance(error, HttpError)
    assert error.status == 500
    assert error.message == "unexpected error type"
    assert error.cause is value


def test_from_problem_details_mapping() -> None:
    error = from_error(
        {
            "status": 404,
            "title": "ResourceNotFound",
            "detail": "The requested resource was not found.",
            "type": "/errors/not-found",
            "instance": "/items/123",
            "anotherKey": "anotherValue",
        }
    )
    assert error.status == 404
    assert error.name == "ResourceNotFound"
    assert error.message == "The requested resource was not found."
    assert error.type == "/errors/not-found"
    assert error.instance == "/items/123"
    assert error.extensions == {"anotherKey": "anotherValue"}
    assert error.expose is True


def test_from_problem_details_without_status_defaults_to_500() -> None:
    error = from_error({"title": "Mystery"})
    assert error.status == 500
    assert error.name == "Mystery"
    assert error.expose is False


def test_from_problem_details_with_invalid_status() -> None:
    payload = {"status": 200, "title": "OK"}
    error = from_error(payload)
    assert error.status == 500
    assert error.message == INVALID_PROBLEM_DETAILS
    assert error.cause is payload


def test_problem_details_round_trip() -> None:
    original = HttpError(
        403,
        "Access denied",
        {
            "name": "ForbiddenError",
            "type": "/errors/forbidden",
            "instance": "/docs/123/edit",
            "extensions": {"accountId": "user-abc"},
        },
    )
    rebuilt = from_error(to_problem_details(original))
    assert rebuilt.name == original.name
    assert rebuilt.status == original.status
    assert rebuilt.message == original.message
    assert rebuilt.type == original.type
    assert rebuilt.instance == original.instance
    assert rebuilt.extensions == original.extensions


def test_round_trip_of_hidden_server_error_carries_safe_message() -> None:
    original = HttpError(500, "SQL syntax error near 'DROP TABLE'")
    rebuilt = from_error(original.to_json())
    assert rebuilt.message == "The server encountered an unexpected condition."
    assert "SQL" not in json_encode(original.to_json()).decode()


def test_to_problem_details_shapes() -> None:
    data = {"x": 2, "y": 3}
    assert HttpError(400, "something went wrong", {"name": "CustomError", "extensions": data}).to_json() == {
        **data,
        "title": "CustomError",
        "detail": "something went wrong",
        "status": 400,
    }
    assert HttpError(500, "something went wrong", {"name": "CustomError", "extensions": data}).to_json() == {
        **data,
        "title": "CustomError",
        "status": 500,
        "detail": "The server encountered an unexpected condition.",
    }
    assert HttpError(
        400, "something went wrong", {"name": "CustomError", "expose": False, "extensions": data}
    ).to_json() == {
        **data,
        "title": "CustomError",
        "status": 400,
        "detail": "The server cannot process the request due to a client error.",
    }


def test_to_problem_details_reserved_fields_win_over_extensions() -> None:
    error = HttpError(400, "bad", {"type": "/errors/bad", "extensions": {"status": 999, "type": "ext"}})
    assert error.to_json() == {"status": 400, "title": "Bad Request", "detail": "bad", "type": "/errors/bad"}


@pytest.mark.asyncio
async def test_from_response_with_problem_details() -> None:
    response = Response(
        status=403,
        headers=(("content-type", "application/problem+json"),),
        body=json_encode(
            {
                "status": 403,
                "title": "ForbiddenError",
                "detail": "Access denied",
                "type": "/errors/forbidden",
                "instance": "/errors/forbidden/123",
                "customField": "customValue",
            }
        ),
    )
    error = await from_error(response)
    assert error.status == 403
    assert error.name == "ForbiddenError"
    assert error.message == "Access denied"
    assert error.type == "/errors/forbidden"
    assert error.instance == "/errors/forbidden/123"
    assert error.extensions == {"customField": "customValue"}
    assert error.expose is True


@pytest.mark.asyncio
async def test_from_response_payload_status_wins() -> None:
    response = Response(status=400, body=json_encode({"status": 403, "title": "ForbiddenError"}))
    error = await from_response(response)
    assert error.status == 403


@pytest.mark.asyncio
async def test_from_response_falls_back_to_transport_status() -> None:
    response = Response(status=400, body=json_encode({"title": "BadRequest", "detail": "Bad input"}))
    error = await from_response(response)
    assert error.status == 400
    assert error.name == "BadRequest"
    assert error.message == "Bad input"


@pytest.mark.asyncio
async def test_from_response_with_invalid_json() -> None:
    error = await from_error(Response(status=500, body=b"not json"))
    assert error.status == 500
    assert error.message == "could not parse problem details response"
    assert isinstance(error.cause, msgspec.DecodeError)
    assert error.exposed_message == "The server encountered an unexpected condition."


@pytest.mark.asyncio
async def test_from_response_with_non_problem_json() -> None:
    error = await from_error(Response(status=500, body=json_encode({"message": "hello"})))
    assert error.status == 500
    assert error.message == "invalid problem details response"
    assert error.cause == {"message": "hello"}


@pytest.mark.asyncio
async def test_from_response_with_success_status_and_no_payload_status() -> None:
    error = await from_response(Response(status=200, body=json_encode({"title": "Fine"})))
    assert error.status == 500
    assert error.message == "invalid problem details response"


@pytest.mark.asyncio
async def test_from_httpx_response() -> None:
    response = httpx.Response(
        422,
        json={"title": "Validation Failed", "detail": "name is required", "errors": ["name"]},
    )
    error = await from_error(response)
    assert error.status == 422
    assert error.name == "Validation Failed"
    assert error.message == "name is required"
    assert error.extensions == {"errors": ["name"]}


@pytest.mark.asyncio
async def test_from_httpx_response_with_invalid_json() -> None:
    error = await from_response(httpx.Response(502, content=b"<html>Bad Gateway</html>"))
    assert error.status == 500
    assert error.message == "could not parse problem details response"
    assert isinstance(error.cause, msgspec.DecodeError)


@pytest.mark.asyncio
async def test_from_response_round_trips_get_response() -> None:
    original = HttpError(409, "already exists", {"type": "/errors/conflict", "extensions": {"id": 7}})
    rebuilt = await from_response(original.get_response())
    assert rebuilt.status == 409
    assert rebuilt.name == "Conflict"
    assert rebuilt.message == "already exists"
    assert rebuilt.type == "/errors/conflict"
    assert rebuilt.extensions == {"id": 7}
