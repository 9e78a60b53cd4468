"""Opening-hours period parsing.

Turns a day's periods text ("9h-13h | 14h30-19h") and an optional
last-appointment cutoff ("18h30") into slot start times ("09:00", "09:15", ...).
"""

import logging
import re
from typing import Optional

from ...config import SLOT_INTERVAL_MINUTES

logger = logging.getLogger(__name__)

PERIOD_PATTERN = re.compile(r"(\d{1,2})h(\d{2})?\s*-\s*(\d{1,2})h(\d{2})?")
CLOCK_PATTERN = re.compile(r"(\d{1,2})h(\d{2})?")


def time_to_minutes(time_str: str) -> int:
    """'HH:MM' (or 'HH:MM:SS') -> minutes since midnight"""
    hours, minutes = time_str.strip().split(":")[:2]
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Minutes since midnight -> 'HH:MM'"""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_clock(value: Optional[str]) -> Optional[int]:
    """'18h30' / '18h' -> minutes since midnight, None when unreadable"""
    if not value:
        return None
    match = CLOCK_PATTERN.search(value)
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2) or 0)


def parse_period(period: str) -> Optional[tuple[int, int]]:
    """'9h-13h' -> (540, 780), None when the text does not match"""
    match = PERIOD_PATTERN.search(period)
    if not match:
        return None
    start = int(match.group(1)) * 60 + int(match.group(2) or 0)
    end = int(match.group(3)) * 60 + int(match.group(4) or 0)
    return start, end


def generate_period_slots(
    periods: Optional[str],
    last_appointment: Optional[str] = None,
    interval: int = SLOT_INTERVAL_MINUTES,
) -> list[str]:
    """
    Generate the slot starts of every period of a day.

    A start is kept while it is strictly before the period close and at or
    before the last-appointment cutoff. The cutoff is clamped to each
    period's close, so it can only shorten a period. Periods that do not
    parse are skipped.

    Returns:
        Sorted, deduplicated 'HH:MM' strings
    """
    if not periods:
        return []

    cutoff = parse_clock(last_appointment)
    starts: set[int] = set()

    for period in periods.split("|"):
        period = period.strip()
        if not period:
            continue

        bounds = parse_period(period)
        if bounds is None:
            logger.warning(f"⚠️ Ignoring unreadable opening period: {period!r}")
            continue

        start, end = bounds
        last_start = end if cutoff is None else min(cutoff, end)

        current = start
        while current < end and current <= last_start:
            starts.add(current)
            current += interval

    return [minutes_to_time(m) for m in sorted(starts)]
