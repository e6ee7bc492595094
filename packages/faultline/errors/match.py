"""Template matching for expected errors."""

from __future__ import annotations

from .error import Error
from .kind import UNKNOWN


def match(template: BaseException | None, err: BaseException | None) -> bool:
    """Return whether ``err`` agrees with every field set on ``template``.

    Both arguments must be ``Error`` values. Fields left at their default on
    the template are ignored, as are fields present only on ``err``. If the
    template's cause is an ``Error``, matching recurs on it; otherwise the
    causes' string forms are compared.

        match(new_error(with_op("service.make_booking"), PERMISSION_DENIED), err)

    tests whether ``err`` has kind ``PERMISSION_DENIED`` and op
    ``service.make_booking``.
    """
    return not diff(template, err)


def diff(template: BaseException | None, err: BaseException | None) -> list[str]:
    """Return a description of each way ``err`` departs from ``template``.

    An empty list means the two match. Discrepancies found in the causes are
    prefixed with ``"err: "``.
    """
    if not isinstance(template, Error) or not isinstance(err, Error):
        return [
            f"type mismatch: want Error, got {type(template).__name__} "
            f"and {type(err).__name__}"
        ]

    problems: list[str] = []
    if template.op and template.op != err.op:
        problems.append(f"op: {err.op!r} != {template.op!r}")
    if template.kind != UNKNOWN and template.kind != err.kind:
        problems.append(f"kind: {err.kind!r} != {template.kind!r}")
    if template.text and template.text != err.text:
        problems.append(f"text: {err.text!r} != {template.text!r}")
    if template.user_msg and template.user_msg != err.user_msg:
        problems.append(f"user_msg: {err.user_msg!r} != {template.user_msg!r}")
    if template.data is not None and template.data != err.data:
        problems.append(f"data: {err.data!r} != {template.data!r}")

    if template.err is None:
        return problems

    if isinstance(template.err, Error):
        problems.extend(f"err: {problem}" for problem in diff(template.err, err.err))
    elif err.err is None:
        problems.append(f"err: missing, want {str(template.err)!r}")
    elif str(err.err) != str(template.err):
        problems.append(f"err: {str(err.err)!r} != {str(template.err)!r}")

    return problems
