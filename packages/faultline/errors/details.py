"""Log-friendly projection of an error chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .kind import UNKNOWN, Kind


@dataclass(frozen=True)
class InternalDetails:
    """Internal details populated from an error chain.

    ``data`` is the single payload found in the chain, the list of all
    payloads when there are several, or ``None`` when there are none.
    """

    error: str
    ops: list[str] = field(default_factory=list)
    kind: Kind = UNKNOWN
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the structured log shape, omitting empty fields."""
        output: dict[str, Any] = {}
        if self.ops:
            output["ops"] = list(self.ops)
        if self.kind != UNKNOWN:
            output["kind"] = {"code": self.kind.code, "status": self.kind.status}
        output["error"] = self.error
        if self.data is not None:
            output["data"] = self.data
        return output
