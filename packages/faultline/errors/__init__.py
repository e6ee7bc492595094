"""Structured, chainable error values.

Errors are built in one step from options and are never updated in place:

    raise new_error(with_op("users.get"), NOT_FOUND, with_err(exc))

Accessors such as ``what_kind``, ``status_code`` and ``user_msg`` walk the
whole chain, so they work on any exception and on ``None``.
"""

from . import codes
from .capabilities import JSONer, KindGetter, StatusCoder, Unwrapper, unwrap
from .details import InternalDetails
from .error import Error, JSONFunc, new_error, walk
from .kind import (
    CANCELED,
    CONFLICT,
    DEADLINE_EXCEEDED,
    FAILED_PRECONDITION,
    INTERNAL,
    INVALID_INPUT,
    NOT_FOUND,
    PERMISSION_DENIED,
    RESOURCE_EXHAUSTED,
    UNAUTHENTICATED,
    UNAVAILABLE,
    UNIMPLEMENTED,
    UNKNOWN,
    Kind,
    kind_from_code,
    kind_from_status,
    what_kind,
)
from .match import diff, match
from .normalize import classify, from_exception
from .options import (
    Fields,
    Option,
    OptionFunc,
    is_json_content,
    options,
    with_data,
    with_err,
    with_op,
    with_resp,
    with_text,
    with_textf,
    with_to_json,
    with_user_msg,
)
from .status import status_code
from .user_msg import user_msg

__all__ = [
    "CANCELED",
    "CONFLICT",
    "DEADLINE_EXCEEDED",
    "Error",
    "FAILED_PRECONDITION",
    "Fields",
    "INTERNAL",
    "INVALID_INPUT",
    "InternalDetails",
    "JSONFunc",
    "JSONer",
    "Kind",
    "KindGetter",
    "NOT_FOUND",
    "Option",
    "OptionFunc",
    "PERMISSION_DENIED",
    "RESOURCE_EXHAUSTED",
    "StatusCoder",
    "UNAUTHENTICATED",
    "UNAVAILABLE",
    "UNIMPLEMENTED",
    "UNKNOWN",
    "Unwrapper",
    "classify",
    "codes",
    "diff",
    "from_exception",
    "is_json_content",
    "kind_from_code",
    "kind_from_status",
    "match",
    "new_error",
    "options",
    "status_code",
    "unwrap",
    "user_msg",
    "walk",
    "what_kind",
    "with_data",
    "with_err",
    "with_op",
    "with_resp",
    "with_text",
    "with_textf",
    "with_to_json",
    "with_user_msg",
]
