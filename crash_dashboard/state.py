from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Mode(str, Enum):
    AGGREGATE = "aggregate"
    DRILL_DOWN = "drill_down"


@dataclass(frozen=True)
class ViewState:
    """Which chart is showing and with which parameters.

    Only the controller produces new states; the Dash layer keeps the current
    one in a ``dcc.Store`` via `to_dict` / `from_dict`.
    """

    mode: Mode = Mode.AGGREGATE
    selected_year: Optional[int] = None
    year_range: Optional[Tuple[int, int]] = None
    hovered_key: Optional[str] = None

    def evolve(self, **changes) -> "ViewState":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "selected_year": self.selected_year,
            "year_range": list(self.year_range) if self.year_range else None,
            "hovered_key": self.hovered_key,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ViewState":
        if not data:
            return cls()
        year_range = data.get("year_range")
        return cls(
            mode=Mode(data.get("mode", Mode.AGGREGATE.value)),
            selected_year=data.get("selected_year"),
            year_range=tuple(year_range) if year_range else None,
            hovered_key=data.get("hovered_key"),
        )
