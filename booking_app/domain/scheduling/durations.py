"""Prestation duration parsing.

Catalog durations are typed by hand ("1h30", "45 min", "2h"). Parsing is
permissive: anything unreadable falls back to the default duration so that bad
catalog data never blocks the scheduler.
"""

import re
from typing import Optional, Union

from ...config import DEFAULT_DURATION_MINUTES

HOURS_PATTERN = re.compile(r"(\d+)\s*h(\d+)?")
MINUTES_PATTERN = re.compile(r"(\d+)\s*min")
INTEGER_PATTERN = re.compile(r"^\d+$")


def parse_duration_to_minutes(
    duration: Optional[Union[str, int]],
    default: int = DEFAULT_DURATION_MINUTES,
) -> int:
    """
    Convert a duration to minutes.

    Rules, in order:
        "1h30", "2h", "1 h"    -> hours * 60 + minutes
        "45min", "30 min"      -> minutes
        "45"                   -> minutes
        anything else          -> default

    A zero result also falls back to the default.
    """
    if duration is None or isinstance(duration, bool):
        return default

    if isinstance(duration, int):
        return duration if duration > 0 else default

    if not isinstance(duration, str):
        return default

    normalized = duration.lower().strip()
    if not normalized:
        return default

    total_minutes = 0

    hour_match = HOURS_PATTERN.search(normalized)
    if hour_match:
        total_minutes = int(hour_match.group(1)) * 60
        if hour_match.group(2):
            total_minutes += int(hour_match.group(2))
    else:
        minute_match = MINUTES_PATTERN.search(normalized)
        if minute_match:
            total_minutes = int(minute_match.group(1))
        elif INTEGER_PATTERN.match(normalized):
            total_minutes = int(normalized)

    return total_minutes if total_minutes > 0 else default
