"""Exception normalization into structured errors."""

from __future__ import annotations

import asyncio

from .error import Error, new_error
from .kind import (
    CANCELED,
    DEADLINE_EXCEEDED,
    INTERNAL,
    INVALID_INPUT,
    NOT_FOUND,
    PERMISSION_DENIED,
    UNAVAILABLE,
    UNIMPLEMENTED,
    Kind,
)
from .options import Fields, with_op

_KINDS_BY_EXCEPTION: tuple[tuple[type[BaseException], Kind], ...] = (
    (ValueError, INVALID_INPUT),
    (FileNotFoundError, NOT_FOUND),
    (LookupError, NOT_FOUND),
    (PermissionError, PERMISSION_DENIED),
    (TimeoutError, DEADLINE_EXCEEDED),
    (ConnectionError, UNAVAILABLE),
    (NotImplementedError, UNIMPLEMENTED),
    (asyncio.CancelledError, CANCELED),
)


def from_exception(exc: BaseException, op: str = "") -> Error:
    """Normalize a Python exception into an ``Error`` wrapping it.

    This mapping is intentionally conservative and generic. Services can
    layer domain-specific classification before falling back to it.

    A structured error is returned as-is unless ``op`` is given, in which
    case it is wrapped to record the operation.
    """
    if isinstance(exc, Error):
        if not op:
            return exc
        return new_error(with_op(op), Fields(err=exc))

    return new_error(
        Fields(
            op=op,
            kind=classify(exc),
            data={"exception_type": type(exc).__name__},
            err=exc,
        )
    )


def classify(exc: BaseException) -> Kind:
    """Return the kind for a plain Python exception, ``INTERNAL`` if unmapped."""
    for exc_type, kind in _KINDS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return kind
    return INTERNAL
