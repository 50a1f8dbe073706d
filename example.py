"""Minimal demonstration of problem details error handling.

Run ``python example.py`` to push a few failing handlers through
:func:`httperror.problem_details_middleware` and print the responses a client
would receive, followed by the errors a client rebuilds from them.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from httperror import (
    ErrorHandlingConfig,
    HttpError,
    Response,
    create_http_error_class,
    from_response,
    problem_details_middleware,
)

OutOfCredit = create_http_error_class(
    {
        "name": "OutOfCredit",
        "status": 403,
        "type": "https://example.com/probs/out-of-credit",
        "extensions": {"balance": 30},
    }
)


@dataclass
class DemoRequest:
    method: str
    path: str


async def plain_error(_: DemoRequest) -> Response:
    """Raise an exception that knows nothing about HTTP."""

    raise RuntimeError("This is an example of a plain Error")


async def http_error(_: DemoRequest) -> Response:
    raise HttpError(
        400,
        "This is an example of an HttpError",
        {
            "type": "/errors/http-error",
            "instance": "/errors/http-error/instance/123",
            "extensions": {"customField": "customValue"},
        },
    )


async def variant_error(_: DemoRequest) -> Response:
    raise OutOfCredit("Your current balance is 30, but that costs 50.", {"instance": "/account/12345/msgs/abc"})


ROUTES: dict[str, Callable[[DemoRequest], Awaitable[Response]]] = {
    "/error": plain_error,
    "/http-error": http_error,
    "/out-of-credit": variant_error,
}


async def main() -> None:
    middleware = problem_details_middleware(ErrorHandlingConfig(log_client_errors=True, security_headers=False))
    for path, handler in ROUTES.items():
        response = await middleware(DemoRequest("GET", path), handler)
        print(f"GET {path} -> {response.status}")
        print(f"  {response.body.decode()}")
        rebuilt = await from_response(response)
        print(f"  client sees: {rebuilt}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
