"""Error classification.

A ``Kind`` is the tuple of an error code and the HTTP status it maps to.
Defining custom kinds in the application domain is encouraged when the
predeclared ones are not a good fit; kinds compare structurally, so a
locally declared ``Kind("QUOTA_EXCEEDED", 429)`` needs no registration.

The predeclared kinds are adapted from the gRPC status codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from . import codes
from .capabilities import KindGetter, unwrap

if TYPE_CHECKING:
    from .error import Error


@dataclass(frozen=True)
class Kind:
    """Immutable (code, status) classification of an error."""

    code: str = ""
    status: int = 0

    def apply(self, target: Error) -> None:
        """Set this kind on ``target`` so a kind can be passed as an option."""
        target.kind = self

    def __str__(self) -> str:
        if self == UNKNOWN:
            return "unknown error"
        if self == INTERNAL:
            return "internal error"
        return " ".join(self.code.split("_")).lower()


# Unclassified error. Also used for errors from APIs that do not return
# enough information to be classified.
UNKNOWN = Kind()

# The client supplied an invalid input, regardless of system state.
INVALID_INPUT = Kind(codes.INVALID_INPUT, 400)

# The request lacks valid authentication credentials.
UNAUTHENTICATED = Kind(codes.UNAUTHENTICATED, 401)

# The caller is identified but not allowed to run the operation.
PERMISSION_DENIED = Kind(codes.PERMISSION_DENIED, 403)

NOT_FOUND = Kind(codes.NOT_FOUND, 404)

# The request conflicts with the current state of the server.
CONFLICT = Kind(codes.CONFLICT, 409)

# The system is not in the state required for the operation. Unlike
# UNAVAILABLE, the client should not retry until the state is fixed.
FAILED_PRECONDITION = Kind(codes.FAILED_PRECONDITION, 412)

# A quota or some other resource has been exhausted.
RESOURCE_EXHAUSTED = Kind(codes.RESOURCE_EXHAUSTED, 429)

# An invariant of the underlying system has been broken.
INTERNAL = Kind(codes.INTERNAL, 500)

CANCELED = Kind(codes.CANCELED, 500)

UNIMPLEMENTED = Kind(codes.UNIMPLEMENTED, 501)

# Most likely transient; retrying with backoff may help.
UNAVAILABLE = Kind(codes.UNAVAILABLE, 503)

# The operation expired before completion. State-changing operations may
# still have completed.
DEADLINE_EXCEEDED = Kind(codes.DEADLINE_EXCEEDED, 503)

_KINDS_BY_STATUS: dict[int, Kind] = {
    400: INVALID_INPUT,
    422: INVALID_INPUT,
    401: UNAUTHENTICATED,
    403: PERMISSION_DENIED,
    404: NOT_FOUND,
    409: CONFLICT,
    412: FAILED_PRECONDITION,
    429: RESOURCE_EXHAUSTED,
    500: INTERNAL,
    501: UNIMPLEMENTED,
    503: UNAVAILABLE,
}

_KINDS_BY_CODE: dict[str, Kind] = {
    kind.code: kind
    for kind in (
        INVALID_INPUT,
        UNAUTHENTICATED,
        PERMISSION_DENIED,
        NOT_FOUND,
        CONFLICT,
        FAILED_PRECONDITION,
        RESOURCE_EXHAUSTED,
        INTERNAL,
        CANCELED,
        UNIMPLEMENTED,
        UNAVAILABLE,
        DEADLINE_EXCEEDED,
    )
}


def kind_from_status(status: int) -> Kind:
    """Return the predeclared kind for an HTTP status, else ``UNKNOWN``.

    Kinds defined in the application domain are not considered.
    """
    return _KINDS_BY_STATUS.get(status, UNKNOWN)


def kind_from_code(code: str) -> Kind:
    """Return the predeclared kind for an error code, else ``UNKNOWN``."""
    return _KINDS_BY_CODE.get(code, UNKNOWN)


def what_kind(err: BaseException | None) -> Kind:
    """Return the first known kind reported along the chain of ``err``.

    ``None`` and chains where nothing reports a kind yield ``UNKNOWN``.
    """
    while err is not None:
        if isinstance(err, KindGetter):
            kind = err.get_kind()
            if kind != UNKNOWN:
                return kind
        err = unwrap(err)
    return UNKNOWN
