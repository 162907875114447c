"""
Crash records (CSV -> CrashRecord list)
======================================

Each row of the crash CSV becomes one immutable `CrashRecord`. Records are
loaded once and shared read-only by every chart render.

A row whose `Date` cannot be parsed is rejected with `MalformedRecord`: the
year is derived from the date, so there is nothing meaningful to chart for
such a row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd

from . import settings

logger = logging.getLogger(__name__)


class MalformedRecord(ValueError):
    """A row whose date field is not a valid MM/DD/YYYY calendar date."""

    def __init__(self, value: Any, row: Optional[int] = None):
        self.value = value
        self.row = row
        where = f"row {row}: " if row is not None else ""
        super().__init__(f"{where}unparseable date {value!r}")


@dataclass(frozen=True)
class CrashRecord:
    date: date
    year: int
    operator: str
    fatalities: int
    summary: str


Result = Union[CrashRecord, MalformedRecord]


def _to_str(x) -> str:
    if x is None or pd.isna(x):
        return ""
    return str(x).strip()


def _to_fatalities(x) -> int:
    """Blank, non-numeric and negative counts become 0."""
    s = _to_str(x)
    if not s:
        return 0
    try:
        n = int(float(s))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(n, 0)


def _to_date(x) -> date:
    ts = pd.to_datetime(_to_str(x), format=settings.DATE_FORMAT, errors="coerce")
    if pd.isna(ts):
        raise MalformedRecord(x)
    return ts.date()


def parse(raw_row: Mapping[str, Any]) -> CrashRecord:
    """Convert one raw CSV row into a `CrashRecord`.

    Raises `MalformedRecord` when the date is missing or invalid.
    """
    d = _to_date(raw_row.get("Date"))
    return CrashRecord(
        date=d,
        year=d.year,
        operator=_to_str(raw_row.get("Operator")),
        fatalities=_to_fatalities(raw_row.get("Fatalities")),
        summary=_to_str(raw_row.get("Summary")),
    )


def try_parse(raw_row: Mapping[str, Any]) -> Result:
    """Like `parse`, but hands the error back instead of raising it."""
    try:
        return parse(raw_row)
    except MalformedRecord as exc:
        return exc


def parse_rows(rows: Iterable[Mapping[str, Any]], on_error: str = "raise") -> List[CrashRecord]:
    if on_error not in ("raise", "drop"):
        raise ValueError(f"on_error must be 'raise' or 'drop', got {on_error!r}")

    records: List[CrashRecord] = []
    dropped = 0
    for i, row in enumerate(rows):
        result = try_parse(row)
        if isinstance(result, MalformedRecord):
            if on_error == "raise":
                raise MalformedRecord(result.value, row=i)
            dropped += 1
            continue
        records.append(result)

    if dropped:
        logger.warning("Dropped %d row(s) with unparseable dates", dropped)
    return records


def load_records(path=None, on_error: str = "raise") -> List[CrashRecord]:
    """Read the crash CSV and parse every row.

    With ``on_error="raise"`` (default) the first malformed row aborts the
    whole load. ``on_error="drop"`` skips malformed rows instead.
    """
    path = path or settings.RAW_PATH
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)

    missing = [c for c in settings.REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Found: {df.columns.tolist()}")

    records = parse_rows(df.to_dict("records"), on_error=on_error)
    logger.info("Loaded %d crash records from %s", len(records), path)
    return records
