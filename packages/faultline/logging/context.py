"""Request-scoped fields attached to every log record.

Fields live in a ``ContextVar`` as a read-only mapping. Every change installs
a fresh mapping, so tasks started from a request inherit a snapshot and do
not observe later edits made by their parent.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Iterator, Mapping

_EMPTY: Mapping[str, str] = MappingProxyType({})
_FIELDS: ContextVar[Mapping[str, str]] = ContextVar("faultline_log_fields", default=_EMPTY)


def _merged(values: Mapping[str, object]) -> Mapping[str, str]:
    fields = dict(_FIELDS.get())
    fields.update((str(key), str(value)) for key, value in values.items() if value is not None)
    return MappingProxyType(fields)


def get_context() -> dict[str, str]:
    """Return the fields bound in the current context."""
    return dict(_FIELDS.get())


def bind_context(**values: object) -> None:
    """Add ``values`` to the current context as strings, skipping ``None``."""
    _FIELDS.set(_merged(values))


def clear_context(*keys: str) -> None:
    """Drop ``keys`` from the current context, or every field if none are named."""
    if not keys:
        _FIELDS.set(_EMPTY)
        return
    kept = {key: value for key, value in _FIELDS.get().items() if key not in keys}
    _FIELDS.set(MappingProxyType(kept))


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of the block only."""
    token = _FIELDS.set(_merged(values))
    try:
        yield
    finally:
        _FIELDS.reset(token)
