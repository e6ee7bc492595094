"""End-user message lookup."""

from __future__ import annotations

from .capabilities import unwrap


def user_msg(err: BaseException | None) -> str:
    """Return the first message fit for the end user along the error chain.

    An empty string is returned when no error in the chain carries one.
    """
    while err is not None:
        msg = getattr(err, "user_msg", None)
        if isinstance(msg, str) and msg:
            return msg
        err = unwrap(err)
    return ""
