"""
services/aggregator.py
----------------------
Folds a collection of entries into totals, chart series and sorted
table rows. Nothing here mutates its input.
"""

from functools import reduce
from typing import Iterable, Sequence

from models.cost import CostBreakdown, MonthPoint
from models.entry import Entry
from models.sorting import ASC, COST_COLUMNS, DESC, SORT_COLUMNS, SortState

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def totals(entries: Iterable[Entry]) -> CostBreakdown:
    """Componentwise sum of every entry's costs. Empty input gives all zeros."""
    return reduce(lambda acc, e: acc + e.costs, entries, CostBreakdown.zero())


def distribution(entries: Iterable[Entry]) -> list[tuple[str, float]]:
    """(name, yearly cost) per entry, in input order. Feeds the pie chart."""
    return [(e.name, e.costs.yearly) for e in entries]


def monthly_series(entries: Sequence[Entry]) -> list[MonthPoint]:
    """
    Cumulative spend per month over one calendar year.

    Each entry adds its monthly cost once per month starting in January,
    whatever its last payment date. Entries that share a name accumulate
    into the same series. ``total`` is the sum of all series at that month.
    """
    accumulated: dict[str, float] = {}
    series = []
    for month in MONTHS:
        for entry in entries:
            accumulated[entry.name] = accumulated.get(entry.name, 0.0) + entry.costs.monthly
        series.append(MonthPoint(
            month=month,
            by_name=dict(accumulated),
            total=sum(accumulated.values()),
        ))
    return series


def _sort_value(entry: Entry, key: str):
    if key in COST_COLUMNS:
        return entry.costs.period(key)
    if key == "frequency":
        return entry.frequency.value
    return getattr(entry, key)


def sort_entries(entries: Iterable[Entry], state: SortState) -> list[Entry]:
    """
    Return the entries ordered for the table.

    Cost columns are recomputed from amount and frequency; date columns
    compare as dates. Ties break on identifier, and descending order is
    the exact reverse of ascending.

    Raises:
        ValueError: If ``state.key`` is not a sortable column.
    """
    if state.key not in SORT_COLUMNS:
        raise ValueError(f"Cannot sort by {state.key!r}")
    rows = sorted(entries, key=lambda e: (_sort_value(e, state.key), e.id or 0))
    if state.direction == DESC:
        rows.reverse()
    return rows


def toggle_sort(current: SortState, key: str) -> SortState:
    """Clicking the active ascending column flips it; any other click sorts ascending."""
    if current.key == key and current.direction == ASC:
        return SortState(key, DESC)
    return SortState(key, ASC)
