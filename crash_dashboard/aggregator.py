"""Group-by summaries feeding the two chart modes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd

from .records import CrashRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearAggregate:
    year: int
    crash_count: int


@dataclass(frozen=True)
class OperatorAggregate:
    operator: str
    total_fatalities: int
    crash_count: int
    deadliest_crash: CrashRecord


def records_frame(records: Sequence[CrashRecord]) -> pd.DataFrame:
    """One row per record; the index is the record's position in `records`."""
    return pd.DataFrame({
        "year": [r.year for r in records],
        "operator": [r.operator for r in records],
        "fatalities": [r.fatalities for r in records],
    })


def year_bounds(records: Sequence[CrashRecord]) -> Optional[Tuple[int, int]]:
    if not records:
        return None
    years = [r.year for r in records]
    return min(years), max(years)


def resolve_year_range(
    records: Sequence[CrashRecord],
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
) -> Optional[Tuple[int, int]]:
    """Fill missing bounds from the data; an inverted range means the full range."""
    bounds = year_bounds(records)
    if bounds is None:
        return None
    lo = bounds[0] if start_year is None else start_year
    hi = bounds[1] if end_year is None else end_year
    if lo > hi:
        logger.debug("Inverted year range %s-%s, using %s-%s", lo, hi, *bounds)
        return bounds
    return lo, hi


def aggregate_by_year(
    records: Sequence[CrashRecord],
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
) -> List[YearAggregate]:
    """Crash count per year, in order of each year's first appearance."""
    year_range = resolve_year_range(records, start_year, end_year)
    if year_range is None:
        return []

    df = records_frame(records)
    df = df[df["year"].between(*year_range)]
    counts = df.groupby("year", sort=False).size()
    return [YearAggregate(int(y), int(n)) for y, n in counts.items()]


def aggregate_by_operator(records: Sequence[CrashRecord], year: int) -> List[OperatorAggregate]:
    """Fatalities, crash count and deadliest crash per operator for one year."""
    if not records:
        return []

    df = records_frame(records)
    df = df[df["year"] == year]
    if df.empty:
        return []

    # idxmax keeps the first row among equal maxima
    by_operator = df.groupby("operator", sort=False).agg(
        total=("fatalities", "sum"),
        crashes=("fatalities", "size"),
        deadliest=("fatalities", "idxmax"),
    )
    return [
        OperatorAggregate(
            operator=str(op),
            total_fatalities=int(row["total"]),
            crash_count=int(row["crashes"]),
            deadliest_crash=records[int(row["deadliest"])],
        )
        for op, row in by_operator.iterrows()
    ]


def top_n(
    aggregates: Sequence[OperatorAggregate],
    n: int,
    key: Callable[[OperatorAggregate], int] = lambda a: a.total_fatalities,
) -> List[OperatorAggregate]:
    """Largest `n` by `key`, descending; equal keys keep their input order."""
    if n <= 0:
        return []
    return sorted(aggregates, key=key, reverse=True)[:n]
