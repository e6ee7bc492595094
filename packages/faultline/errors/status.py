"""HTTP status lookup for arbitrary error chains."""

from __future__ import annotations

from .capabilities import unwrap

DEFAULT_STATUS = 500


def status_code(err: BaseException | None) -> int:
    """Return the HTTP status suitable for responding with ``err``.

    The first non-zero status reported along the chain wins. Errors report
    a status either through a ``status_code()`` method or, as FastAPI's
    ``HTTPException`` does, an integer ``status_code`` attribute.

    If nothing in the chain reports one, ``500`` is returned. This also
    applies to ``None``, which callers should guard against themselves.
    """
    while err is not None:
        status = _reported_status(err)
        if status != 0:
            return status
        err = unwrap(err)
    return DEFAULT_STATUS


def _reported_status(err: BaseException) -> int:
    reported = getattr(err, "status_code", None)
    if callable(reported):
        reported = reported()
    if isinstance(reported, int) and not isinstance(reported, bool):
        return reported
    return 0
