"""Weekly schedule.

The business describes its week either as opening-hours periods
("9h-13h|14h-17h", subdivided into slots) or as explicit available slots
(one row per bookable start). ``WeeklySchedule`` is the single representation
the availability filter works with; each storage shape has its own constructor.
"""

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any, Optional

from ...config import SCHEDULE_SOURCE, SLOT_INTERVAL_MINUTES
from .periods import generate_period_slots, minutes_to_time, time_to_minutes

logger = logging.getLogger(__name__)

SOURCE_OPENING_HOURS = "opening_hours"
SOURCE_AVAILABLE_SLOTS = "available_slots"
SOURCE_AUTO = "auto"


def day_of_week(day: date) -> int:
    """0=Sunday .. 6=Saturday"""
    return day.isoweekday() % 7


def _is_active(row: Any) -> bool:
    # Rows without the flag set are active
    return getattr(row, "is_active", True) is not False


class WeeklySchedule:
    """Slot start times for each open weekday (0=Sunday .. 6=Saturday)"""

    def __init__(self, slots_by_day: dict[int, list[str]], source: str):
        self._slots_by_day = {day: sorted(set(slots)) for day, slots in slots_by_day.items()}
        self.source = source

    @classmethod
    def from_opening_hours(
        cls, rows: Iterable[Any], interval: int = SLOT_INTERVAL_MINUTES
    ) -> "WeeklySchedule":
        """Build from OpeningHours rows. The first active row of a day (by display_order) wins."""
        slots_by_day: dict[int, list[str]] = {}
        seen_days: set[int] = set()

        for row in sorted(rows, key=lambda r: getattr(r, "display_order", 0) or 0):
            if not _is_active(row):
                continue
            if row.day_of_week in seen_days:
                logger.warning(
                    f"⚠️ Several active opening hours for day {row.day_of_week}, keeping the first one"
                )
                continue
            seen_days.add(row.day_of_week)

            slots = generate_period_slots(row.periods, row.last_appointment, interval)
            # A day whose periods yield no slot is closed
            if slots:
                slots_by_day[row.day_of_week] = slots

        return cls(slots_by_day, SOURCE_OPENING_HOURS)

    @classmethod
    def from_available_slots(cls, rows: Iterable[Any]) -> "WeeklySchedule":
        """Build from AvailableSlot rows. Each active row contributes its own start time."""
        slots_by_day: dict[int, list[str]] = {}

        for row in rows:
            if not _is_active(row):
                continue
            try:
                start = minutes_to_time(time_to_minutes(row.start_time))
            except (AttributeError, ValueError):
                logger.warning(f"⚠️ Ignoring available slot with unreadable start time: {row.start_time!r}")
                continue
            slots_by_day.setdefault(row.day_of_week, []).append(start)

        return cls(slots_by_day, SOURCE_AVAILABLE_SLOTS)

    @property
    def is_empty(self) -> bool:
        return not self._slots_by_day

    def is_open(self, weekday: int) -> bool:
        return weekday in self._slots_by_day

    def slots_for(self, weekday: int) -> list[str]:
        return list(self._slots_by_day.get(weekday, []))

    def slots_for_date(self, day: date) -> list[str]:
        return self.slots_for(day_of_week(day))


def build_weekly_schedule(
    opening_hours: Iterable[Any],
    available_slots: Iterable[Any],
    source: Optional[str] = None,
    interval: int = SLOT_INTERVAL_MINUTES,
) -> WeeklySchedule:
    """
    Pick the authoritative schedule representation.

    "auto" uses the explicit available slots as soon as one active row exists,
    and falls back to opening-hours periods otherwise.
    """
    source = (source or SCHEDULE_SOURCE).lower()

    if source == SOURCE_AVAILABLE_SLOTS:
        return WeeklySchedule.from_available_slots(available_slots)
    if source == SOURCE_OPENING_HOURS:
        return WeeklySchedule.from_opening_hours(opening_hours, interval)
    if source != SOURCE_AUTO:
        raise ValueError(f"Unknown schedule source: {source}")

    active_slots = [row for row in available_slots if _is_active(row)]
    if active_slots:
        return WeeklySchedule.from_available_slots(active_slots)
    return WeeklySchedule.from_opening_hours(opening_hours, interval)
