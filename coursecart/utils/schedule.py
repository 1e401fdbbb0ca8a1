"""
Meeting-time parsing.

"M W 12:00 PM - 1:15 PM" -> days {MON, WED}, 720 -> 795 (minutes since midnight)

Anything that does not fit the grammar is a parse anomaly: it is logged and
degrades to an empty schedule, which never conflicts with anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional

from coursecart.errors import ErrorCode

logger = logging.getLogger("coursecart.schedule")

TBA = "TBA"

# "T" is Tuesday, "Th" is Thursday
DAY_TOKENS = {
    "M": "MON",
    "T": "TUE",
    "W": "WED",
    "Th": "THU",
    "F": "FRI",
    "Sa": "SAT",
}

WEEK_ORDER = ("MON", "TUE", "WED", "THU", "FRI", "SAT")

RANGE_SEP = " - "


@dataclass(frozen=True)
class ParsedSchedule:
    days: FrozenSet[str] = frozenset()
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        # a zero-length block [t, t) covers no minute
        return not self.days or self.start is None or self.end is None or self.start >= self.end

    def sorted_days(self) -> list[str]:
        return [d for d in WEEK_ORDER if d in self.days]


EMPTY = ParsedSchedule()


def to_minutes(text: str) -> int:
    """
    "1:15 PM" -> 795, "12:00 AM" -> 0, "12:30 PM" -> 750
    Raises ValueError for anything else.
    """
    parts = text.strip().split()
    if len(parts) != 2:
        raise ValueError(f"Invalid time: {text!r}")
    clock, modifier = parts
    modifier = modifier.upper()
    if modifier not in ("AM", "PM"):
        raise ValueError(f"Invalid AM/PM modifier: {text!r}")

    hh, sep, mm = clock.partition(":")
    if not sep or not hh.isdigit() or not mm.isdigit() or len(mm) != 2:
        raise ValueError(f"Invalid time: {text!r}")
    hours, minutes = int(hh), int(mm)
    if not (1 <= hours <= 12 and 0 <= minutes <= 59):
        raise ValueError(f"Invalid time value: {text!r}")

    if hours == 12:
        hours = 12 if modifier == "PM" else 0
    elif modifier == "PM":
        hours += 12
    return hours * 60 + minutes


def format_minutes(total: int) -> str:
    hours, minutes = divmod(total, 60)
    modifier = "PM" if hours >= 12 else "AM"
    hours = hours % 12 or 12
    return f"{hours}:{minutes:02d} {modifier}"


def _anomaly(text: str, reason: str) -> ParsedSchedule:
    logger.warning("%s: %s (schedule=%r)", ErrorCode.PARSE_ANOMALY.value, reason, text)
    return EMPTY


def parse_schedule(text: Optional[str]) -> ParsedSchedule:
    """Never raises; an empty result means "unscheduled"."""
    if text is None:
        return EMPTY
    text = text.strip()
    if not text or text.upper() == TBA:
        return EMPTY
    if " " not in text:
        return _anomaly(text, "no separator")

    tokens = text.split()
    boundary = next((i for i, tok in enumerate(tokens) if ":" in tok), None)
    if boundary is None:
        return _anomaly(text, "no time range")

    days = frozenset(DAY_TOKENS[tok] for tok in tokens[:boundary] if tok in DAY_TOKENS)

    time_range = " ".join(tokens[boundary:])
    if RANGE_SEP not in time_range:
        return _anomaly(text, "missing ' - ' separator")
    start_text, _, end_text = time_range.partition(RANGE_SEP)

    try:
        start = to_minutes(start_text)
        end = to_minutes(end_text)
    except ValueError as e:
        return _anomaly(text, str(e))

    # classes crossing midnight do not exist on this campus
    if end < start:
        return _anomaly(text, "end time before start time")

    return ParsedSchedule(days=days, start=start, end=end)
