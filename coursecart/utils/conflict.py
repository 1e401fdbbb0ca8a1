# coursecart/utils/conflict.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from coursecart.utils.schedule import ParsedSchedule


def conflicts(a: ParsedSchedule, b: ParsedSchedule) -> bool:
    """
    Do two schedules clash:
    1. share at least one day
    2. half-open intervals [start, end) overlap; back-to-back is fine
    """
    if a.is_empty or b.is_empty:
        return False
    if not (a.days & b.days):
        return False
    return a.start < b.end and b.start < a.end


@dataclass(frozen=True)
class ConflictCheck:
    conflict: bool
    pair: Optional[Tuple[int, int]] = None


def has_conflict(
    schedules: Sequence[ParsedSchedule],
    existing: Sequence[ParsedSchedule] = (),
) -> ConflictCheck:
    """
    Pairwise scan in ascending (i, j) order, first hit wins.

    `existing` are already-committed schedules, indexed after `schedules`
    (len(schedules) + k). They are only compared against `schedules`,
    never against each other.
    """
    combined = list(schedules) + list(existing)
    n = len(schedules)
    # O(n^2) is fine for a semester's worth of sections
    for i in range(n):
        for j in range(i + 1, len(combined)):
            if conflicts(combined[i], combined[j]):
                return ConflictCheck(True, (i, j))
    return ConflictCheck(False)
