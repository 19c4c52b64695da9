"""
Sort state machine and comparator for process tables.

A column header click selects that column ascending; clicking the active
ascending column flips it to descending and clicking again flips it back.
Once a column is chosen the table never returns to the unsorted order.
"""

import functools
import locale
import logging
import math
from typing import Any, Iterable, List, Optional

from ..models.process import PROCESS_STAT_FIELDS, ProcessStat, SortDirection, SortState

logger = logging.getLogger(__name__)


def next_sort_state(current: Optional[SortState], key: str) -> SortState:
    """
    Sort state after a click on column ``key``.

    Raises:
        ValueError: If ``key`` is not a ProcessStat field
    """
    if key not in PROCESS_STAT_FIELDS:
        raise ValueError(f"Unknown process table column: {key}")

    if (
        current is not None
        and current.key == key
        and current.direction is SortDirection.ASCENDING
    ):
        return SortState(key, SortDirection.DESCENDING)
    return SortState(key, SortDirection.ASCENDING)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_number(text: str) -> Optional[float]:
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) else number


def _sign(diff: float) -> int:
    return (diff > 0) - (diff < 0)


def compare_values(a: Any, b: Any) -> int:
    """
    Ascending three-way comparison of two cell values.

    Numbers compare numerically. Strings that both parse fully as numbers
    compare numerically too, so ``"10"`` sorts after ``"2"``; other strings
    use the locale collation, ignoring case first. Pairs of different types
    compare equal and keep their relative order.
    """
    if _is_number(a) and _is_number(b):
        return _sign(a - b)

    if isinstance(a, str) and isinstance(b, str):
        a_number = _parse_number(a)
        b_number = _parse_number(b)
        if a_number is not None and b_number is not None:
            return _sign(a_number - b_number)
        return _collate(a, b)

    return 0


def _collate(a: str, b: str) -> int:
    # Case-insensitive first; the "C" locale alone puts every capital first.
    folded = locale.strcoll(a.casefold(), b.casefold())
    if folded:
        return _sign(folded)
    return _sign(locale.strcoll(a, b))


def sort_process_stats(
    stats: Iterable[ProcessStat], state: Optional[SortState]
) -> List[ProcessStat]:
    """
    Sorted copy of ``stats``; the input order is kept when ``state`` is None.
    """
    items = list(stats)
    if state is None:
        return items

    sign = 1 if state.direction is SortDirection.ASCENDING else -1

    def _compare(x: ProcessStat, y: ProcessStat) -> int:
        return sign * compare_values(getattr(x, state.key), getattr(y, state.key))

    return sorted(items, key=functools.cmp_to_key(_compare))


class ProcessTableSorter:
    """
    Sort state owned by one process table view.
    """

    def __init__(self):
        self.state: Optional[SortState] = None

    def request_sort(self, key: str) -> SortState:
        """Apply a header click on ``key`` and return the new state."""
        self.state = next_sort_state(self.state, key)
        logger.debug(f"Process table sorted by {self.state.key} {self.state.direction.value}")
        return self.state

    def apply(self, stats: Iterable[ProcessStat]) -> List[ProcessStat]:
        return sort_process_stats(stats, self.state)
