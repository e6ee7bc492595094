"""FastAPI helpers wiring structured errors into responses."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from starlette.responses import Response

from ..errors import Error
from ..logging import error_logger
from .decoder import Decoder, JSONDecoder
from .responder import JSONResponder


def create_app(
    *,
    title: str = "faultline",
    version: str = "0.0.0",
    responder: JSONResponder | None = None,
) -> FastAPI:
    """Create a FastAPI app that answers raised ``Error`` values as JSON."""
    app = FastAPI(title=title, version=version)
    register_error_handlers(app, responder)
    return app


def register_error_handlers(app: FastAPI, responder: JSONResponder | None = None) -> None:
    """Install an exception handler answering ``Error`` through ``responder``.

    Without a responder, errors are answered with the default body and logged
    through ``error_logger``.
    """
    resolved = responder or JSONResponder(err_observers=[error_logger()])

    async def handle_error(request: Request, exc: Exception) -> Response:
        return resolved.error(request, exc)

    app.add_exception_handler(Error, handle_error)


def json_body(
    model: Any,
    decoder: Decoder | None = None,
) -> Callable[[Request], Awaitable[Any]]:
    """Return a FastAPI dependency decoding the request body into ``model``.

        @app.post("/users")
        async def create_user(user: User = Depends(json_body(User))) -> ...
    """
    resolved = decoder or JSONDecoder()

    async def dependency(request: Request) -> Any:
        return await resolved.decode(request, model)

    return dependency
