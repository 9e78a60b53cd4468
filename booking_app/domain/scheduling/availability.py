"""Availability filter.

Pure functions: given a date, the weekly schedule, blocked dates/slots and the
existing appointments, decide whether the date can be booked and which slot
starts remain free. Nothing here touches the database; ``service.py`` loads
the data and calls in.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Optional

from ...config import BUFFER_MINUTES
from .conflicts import BookedRange, booked_ranges, is_blocked
from .periods import minutes_to_time, time_to_minutes
from .schedule import WeeklySchedule, day_of_week

NO_SLOT_REASON = "No slot available this day."
TOO_EARLY_REASON = "Appointments must be booked at least one day in advance."
BLOCKED_DATE_REASON = "This date is not available."


@dataclass
class AvailabilityResult:
    date: date
    times: list[str] = field(default_factory=list)
    all_times: list[str] = field(default_factory=list)
    reason: Optional[str] = None


def date_unavailability_reason(
    day: date,
    blocked_dates: Iterable[date],
    schedule: Optional[WeeklySchedule],
    today: date,
) -> Optional[str]:
    """
    Why ``day`` cannot be booked at all, or None when it can.

    Same-day booking is refused. An empty or missing schedule does not make a
    date unavailable: the booking re-check on submission is authoritative.
    """
    if day <= today:
        return TOO_EARLY_REASON

    if day in set(blocked_dates):
        return BLOCKED_DATE_REASON

    if schedule is None or schedule.is_empty:
        return None

    if not schedule.is_open(day_of_week(day)):
        return NO_SLOT_REASON

    return None


def is_date_bookable(
    day: date,
    blocked_dates: Iterable[date],
    schedule: Optional[WeeklySchedule],
    today: date,
) -> bool:
    return date_unavailability_reason(day, blocked_dates, schedule, today) is None


def blocked_slot_keys(blocked_slots: Iterable[Any]) -> set[tuple[date, str]]:
    """(date, 'HH:MM') pairs of manually blocked slots"""
    return {
        (slot.blocked_date, minutes_to_time(time_to_minutes(slot.start_time)))
        for slot in blocked_slots
    }


def filter_available_times(
    day: date,
    candidate_times: Iterable[str],
    booked: list[BookedRange],
    blocked_slots: Iterable[Any],
    duration: int,
    buffer: int = BUFFER_MINUTES,
) -> list[str]:
    """Drop the candidates that are blocked manually or by an existing appointment"""
    blocked = blocked_slot_keys(blocked_slots)
    available = {
        time_str
        for time_str in candidate_times
        if (day, time_str) not in blocked
        and not is_blocked(time_to_minutes(time_str), duration, booked, buffer)
    }
    return sorted(available)


def compute_available_times(
    day: date,
    schedule: WeeklySchedule,
    appointments: Iterable[Any],
    blocked_slots: Iterable[Any],
    blocked_dates: Iterable[date],
    duration: int,
    today: date,
    buffer: int = BUFFER_MINUTES,
) -> AvailabilityResult:
    """
    Bookable slot starts for ``day``.

    Args:
        schedule: the authoritative weekly schedule
        appointments: appointments that may block the day (other statuses and dates are ignored)
        blocked_slots: BlockedSlot-like rows (blocked_date, start_time)
        blocked_dates: whole dates closed by the admin
        duration: duration in minutes of the prestation being booked
    """
    reason = date_unavailability_reason(day, blocked_dates, schedule, today)
    if reason:
        return AvailabilityResult(date=day, reason=reason)

    all_times = schedule.slots_for_date(day)
    if not all_times:
        return AvailabilityResult(date=day, reason=NO_SLOT_REASON)

    times = filter_available_times(
        day,
        all_times,
        booked_ranges(appointments, on_date=day),
        blocked_slots,
        duration,
        buffer,
    )

    return AvailabilityResult(
        date=day,
        times=times,
        all_times=all_times,
        reason=None if times else NO_SLOT_REASON,
    )


def bookable_dates(
    today: date,
    days_ahead: int,
    blocked_dates: Iterable[date],
    schedule: Optional[WeeklySchedule],
) -> list[date]:
    """Eligible dates among the next ``days_ahead`` days, starting from today"""
    blocked = set(blocked_dates)
    return [
        today + timedelta(days=offset)
        for offset in range(days_ahead)
        if is_date_bookable(today + timedelta(days=offset), blocked, schedule, today)
    ]
