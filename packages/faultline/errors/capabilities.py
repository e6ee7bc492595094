"""Narrow capability contracts shared by structured and foreign errors.

Chain-walking accessors (``what_kind``, ``status_code``, ``user_msg``) only
depend on these protocols, so any exception type can take part in
classification by implementing the relevant method.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .kind import Kind


@runtime_checkable
class KindGetter(Protocol):
    """Value that reports its error classification."""

    def get_kind(self) -> Kind:
        """Return the kind, or ``UNKNOWN`` to defer to the wrapped cause."""


@runtime_checkable
class StatusCoder(Protocol):
    """Value that maps itself to an HTTP status code."""

    def status_code(self) -> int:
        """Return the status, or ``0`` to defer to the wrapped cause."""


@runtime_checkable
class JSONer(Protocol):
    """Value that projects itself into a JSON-compatible value."""

    def as_json(self) -> Any:
        """Return a JSON-compatible representation."""


@runtime_checkable
class Unwrapper(Protocol):
    """Value that exposes the error it wraps, if any."""

    def unwrap(self) -> BaseException | None:
        """Return the wrapped cause."""


def unwrap(err: object) -> BaseException | None:
    """Return the cause wrapped by ``err``, or ``None`` at the end of a chain.

    An explicit ``unwrap()`` method takes precedence. Plain exceptions fall
    back to ``__cause__``, which is what ``raise ... from ...`` sets.
    """
    if err is None:
        return None
    if isinstance(err, Unwrapper):
        return err.unwrap()
    if isinstance(err, BaseException):
        return err.__cause__
    return None
