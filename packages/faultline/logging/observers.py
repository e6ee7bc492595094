"""Error observers that log responses sent by ``JSONResponder``."""

from __future__ import annotations

import logging
from typing import Callable

from starlette.requests import Request

from ..errors import Error, status_code
from . import fields
from .context import log_context

ErrorObserver = Callable[[Request, BaseException], None]

# Request state attribute holding the status of the response being sent.
RESPONSE_STATUS_STATE = "faultline_response_status"


def error_logger(logger: logging.Logger | None = None) -> ErrorObserver:
    """Return an observer that logs each error with its internal details.

    Structured errors are logged with ``details()`` under ``error_details``.
    Other exceptions only carry their string form under ``error``. The
    logged status is the one ``JSONResponder`` sends, falling back to
    ``status_code(err)`` outside a responder. Client errors (4xx) are logged
    at warning level, everything else at error.
    """
    log = logger or logging.getLogger("faultline.http")

    def observe(request: Request, err: BaseException) -> None:
        status = getattr(request.state, RESPONSE_STATUS_STATE, None) or status_code(err)
        extra: dict[str, object] = {
            fields.EVENT: fields.ERROR_EVENT,
            fields.HTTP_STATUS: status,
        }
        if isinstance(err, Error):
            extra[fields.ERROR_DETAILS] = err.details().to_dict()
        else:
            extra[fields.ERROR] = str(err)

        level = logging.WARNING if 400 <= status < 500 else logging.ERROR
        with log_context(
            {
                fields.HTTP_METHOD: request.method,
                fields.HTTP_PATH: request.url.path,
            }
        ):
            log.log(level, "request failed", extra=extra)

    return observe
