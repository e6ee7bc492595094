"""The structured error value.

An ``Error`` may leave any of its fields unset. When rendered, only the
fields holding non-default values appear in the result. When one ``Error``
wraps another, construction promotes fields from the inner error so that
the chain does not repeat itself (see ``Error._promote_fields``).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterator

from .details import InternalDetails
from .kind import UNKNOWN, Kind, what_kind
from .user_msg import user_msg

if TYPE_CHECKING:
    from .options import Option

JSONFunc = Callable[["Error"], Any]


@dataclass(eq=False)
class Error(Exception):
    """Structured, chainable error value.

    Attributes:
        op: Operation being performed, usually the qualified name of the
            method being invoked.
        kind: Class of error, or ``UNKNOWN`` if unclassified.
        text: Diagnostic text. Not suitable to be shown to end users.
        user_msg: Message suitable to be shown to end users.
        data: Arbitrary value associated with the error. ``None`` is absent.
        err: Underlying error that triggered this one, if any.
        to_json: Optional override for ``as_json``.
    """

    op: str = ""
    kind: Kind = UNKNOWN
    text: str = ""
    user_msg: str = ""
    data: Any = None
    err: BaseException | None = None
    to_json: JSONFunc | None = None

    def __str__(self) -> str:
        segments: list[str] = []
        for link in walk(self):
            segments.extend(
                segment
                for segment in (
                    link.op,
                    str(link.kind) if link.kind != UNKNOWN else "",
                    link.text,
                )
                if segment
            )
            if link.err is not None and not isinstance(link.err, Error):
                foreign = str(link.err)
                if foreign:
                    segments.append(foreign)

        if not segments:
            return "no error"
        return ": ".join(segments)

    def ops(self) -> list[str]:
        """Return the trail of operations from outermost to innermost."""
        return [link.op for link in walk(self) if link.op]

    def get_kind(self) -> Kind:
        """Return the kind set on this error."""
        return self.kind

    def status_code(self) -> int:
        """Return the HTTP status for this error's kind.

        ``0`` is returned for ``UNKNOWN`` so that lookups defer to errors
        further down the chain.
        """
        if self.kind != UNKNOWN:
            return self.kind.status
        return 0

    def unwrap(self) -> BaseException | None:
        """Return the wrapped cause."""
        return self.err

    def as_json(self) -> Any:
        """Return the JSON projection of the error.

        The override, when set, replaces the default entirely. The default
        exposes only the resolved kind and user message, never ``text``.
        """
        if self.to_json is not None:
            return self.to_json(self)

        kind = what_kind(self)
        return {
            "code": kind.code,
            "error": str(kind),
            "msg": user_msg(self),
        }

    def details(self) -> InternalDetails:
        """Collect the internal details of the error chain for logging."""
        payloads = [link.data for link in walk(self) if link.data is not None]

        data: Any = None
        if len(payloads) == 1:
            data = payloads[0]
        elif len(payloads) > 1:
            data = payloads

        return InternalDetails(
            ops=self.ops(),
            kind=what_kind(self),
            error=str(self),
            data=data,
        )

    def is_zero(self) -> bool:
        """Return whether every field holds its default value."""
        return (
            self.op == ""
            and self.kind == UNKNOWN
            and self.text == ""
            and self.err is None
            and self.user_msg == ""
            and self.data is None
            and self.to_json is None
        )

    def _promote_fields(self) -> None:
        prev = self.err
        if not isinstance(prev, Error):
            return

        # The previous error is also structured. Suppress duplicates so the
        # message won't contain the same op, kind etc. twice.
        if prev.op == self.op:
            prev.op = ""
        if prev.kind == self.kind:
            prev.kind = UNKNOWN
        if prev.user_msg == self.user_msg:
            prev.user_msg = ""
        if prev.text == self.text:
            prev.text = ""

        # Pull up whatever this error leaves unset.
        if self.op == "":
            self.op, prev.op = prev.op, ""
        if self.kind == UNKNOWN:
            self.kind, prev.kind = prev.kind, UNKNOWN
        if self.user_msg == "":
            self.user_msg, prev.user_msg = prev.user_msg, ""
        if self.data is None:
            self.data, prev.data = prev.data, None
        if self.to_json is None:
            self.to_json, prev.to_json = prev.to_json, None

        # An op or kind gives the inner error its own identity; neither its
        # text nor its cause may be flattened into this one.
        if prev.op != "" or prev.kind != UNKNOWN:
            return
        if self.text == "":
            self.text, prev.text = prev.text, ""

        if prev.is_zero():
            self.err = None
        elif _has_only_err(prev):
            self.err = prev.err


def new_error(opt: Option, *opts: Option) -> Error:
    """Build an error value from the given options.

    Options are applied in order, so among options targeting the same field
    the last one wins. Field promotion runs once all options are applied.

        raise new_error(with_op(op), NOT_FOUND, with_err(exc))
    """
    e = Error()
    for option in (opt, *opts):
        option.apply(e)

    e._promote_fields()
    if e.err is not None:
        e.__cause__ = e.err
    return e


def walk(e: Error | None) -> Iterator[Error]:
    """Yield ``e`` and each structured error it wraps, outermost first.

    The walk stops at the first cause that is not an ``Error``.
    """
    while e is not None:
        yield e
        cause = e.err
        e = cause if isinstance(cause, Error) else None


def _has_only_err(e: Error) -> bool:
    return e.err is not None and dataclasses.replace(e, err=None).is_zero()
