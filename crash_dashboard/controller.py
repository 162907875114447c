"""
Interaction controller
======================

User actions arrive as small command objects and go through `dispatch`,
which returns the next `ViewState`. `present` turns a state into what the
page shows: aggregates, draw commands and tooltip text.

Bad year inputs are never reported to the user. A non-numeric bound falls
back to the dataset's min/max year, and an inverted range to the full range.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from .aggregator import aggregate_by_operator, aggregate_by_year, resolve_year_range
from .records import CrashRecord
from .renderer import DrawCommand, Geometry, render, tooltip_text
from .state import Mode, ViewState

logger = logging.getLogger(__name__)


# ---------------- Commands ----------------

@dataclass(frozen=True)
class RangeUpdate:
    start: Any = None
    end: Any = None


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class BarClicked:
    key: Any


@dataclass(frozen=True)
class BarHovered:
    key: Optional[str] = None


@dataclass(frozen=True)
class Back:
    pass


Command = Union[RangeUpdate, Reset, BarClicked, BarHovered, Back]


def coerce_year(value) -> Optional[int]:
    """Parse a year input; blanks and non-numbers become None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            logger.debug("Ignoring non-numeric year input %r", value)
            return None


# ---------------- Dispatch ----------------

def dispatch(records: Sequence[CrashRecord], state: ViewState, command: Command) -> ViewState:
    if isinstance(command, RangeUpdate):
        year_range = resolve_year_range(records, coerce_year(command.start), coerce_year(command.end))
        return ViewState(mode=Mode.AGGREGATE, year_range=year_range)

    if isinstance(command, Reset):
        return ViewState(mode=Mode.AGGREGATE)

    if isinstance(command, BarClicked):
        if state.mode is not Mode.AGGREGATE:
            return state
        year = coerce_year(command.key)
        if year is None:
            return state
        return state.evolve(mode=Mode.DRILL_DOWN, selected_year=year, hovered_key=None)

    if isinstance(command, BarHovered):
        if state.mode is not Mode.DRILL_DOWN:
            return state
        return state.evolve(hovered_key=command.key)

    if isinstance(command, Back):
        return state.evolve(mode=Mode.AGGREGATE, selected_year=None, hovered_key=None)

    raise TypeError(f"unknown command {command!r}")


def on_range_update(records, state, start, end) -> ViewState:
    return dispatch(records, state, RangeUpdate(start, end))


def on_reset(records, state) -> ViewState:
    return dispatch(records, state, Reset())


def on_bar_click(records, state, key) -> ViewState:
    return dispatch(records, state, BarClicked(key))


def on_back(records, state) -> ViewState:
    return dispatch(records, state, Back())


# ---------------- Presentation ----------------

@dataclass(frozen=True)
class Frame:
    state: ViewState
    aggregates: List[Any] = field(default_factory=list)
    commands: List[DrawCommand] = field(default_factory=list)
    tooltip: Optional[str] = None


def present(records: Sequence[CrashRecord], state: ViewState, geometry: Geometry = Geometry()) -> Frame:
    """Recompute the aggregates for `state` from the full record set and render them."""
    if state.mode is Mode.DRILL_DOWN:
        aggregates = aggregate_by_operator(records, state.selected_year)
    else:
        start, end = state.year_range or (None, None)
        aggregates = aggregate_by_year(records, start, end)

    tooltip = None
    if state.mode is Mode.DRILL_DOWN and state.hovered_key is not None:
        tooltip = next((tooltip_text(a) for a in aggregates if a.operator == state.hovered_key), None)

    logger.debug("Rendering %s view with %d bars", state.mode.value, len(aggregates))
    return Frame(
        state=state,
        aggregates=aggregates,
        commands=render(state, aggregates, geometry),
        tooltip=tooltip,
    )


def initial_state() -> ViewState:
    return ViewState(mode=Mode.AGGREGATE)
