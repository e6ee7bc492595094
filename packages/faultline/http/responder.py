"""JSON responses for values and errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from fastapi.encoders import jsonable_encoder
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..errors import INTERNAL, JSONer, new_error, status_code, unwrap, user_msg, with_err, with_op
from ..logging import RESPONSE_STATUS_STATE, ErrorObserver

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass
class JSONResponder:
    """Respond with values or errors encoded as JSON.

    Attributes:
        err_to_resp_body: Converts an error to the response body. Optional;
            the default body is ``{"success", "msg", "errors"}``.
        err_observers: Notified of every error answered through ``error`` or
            ``error_with_status``, and of failures to encode a body.
    """

    err_to_resp_body: Callable[[BaseException], Any] | None = None
    err_observers: list[ErrorObserver] = field(default_factory=list)

    def respond(self, request: Request, value: Any) -> Response:
        """Answer ``200 OK`` with ``value`` encoded as JSON."""
        return self.respond_with_status(request, 200, value)

    def respond_with_status(self, request: Request, status: int, value: Any) -> Response:
        """Answer with ``status`` and ``value`` encoded as JSON.

        Only the status is sent when ``value`` is ``None``. Values that
        implement ``as_json()`` are encoded through it.
        """
        if value is None:
            return Response(status_code=status)

        body = value.as_json() if isinstance(value, JSONer) else value
        try:
            return JSONResponse(
                jsonable_encoder(body),
                status_code=status,
                media_type=JSON_CONTENT_TYPE,
            )
        except (TypeError, ValueError) as exc:
            self._observe(
                request,
                status,
                new_error(with_op("JSONResponder.respond"), INTERNAL, with_err(exc)),
            )
            return Response(status_code=status, media_type=JSON_CONTENT_TYPE)

    def error(self, request: Request, err: BaseException) -> Response:
        """Answer with the status and body derived from ``err``."""
        return self.error_with_status(request, status_code(err), err)

    def error_with_status(self, request: Request, status: int, err: BaseException) -> Response:
        """Answer with ``status`` and the body derived from ``err``."""
        self._observe(request, status, err)
        return self.respond_with_status(request, status, self._error_body(err))

    def _observe(self, request: Request, status: int, err: BaseException) -> None:
        # Observers read the status being sent from the request state.
        setattr(request.state, RESPONSE_STATUS_STATE, status)
        for observer in self.err_observers:
            observer(request, err)

    def _error_body(self, err: BaseException) -> Any:
        if self.err_to_resp_body is not None:
            return self.err_to_resp_body(err)

        return {
            "success": False,
            "msg": user_msg(err),
            "errors": _errors_field(err),
        }


def _errors_field(err: BaseException | None) -> list[Any] | None:
    while err is not None:
        if isinstance(err, JSONer):
            value = err.as_json()
            if isinstance(value, (list, tuple)):
                return list(value)
            return [value]
        err = unwrap(err)
    return None
