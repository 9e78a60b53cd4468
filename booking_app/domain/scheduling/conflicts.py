"""Conflict detection between a candidate appointment and existing bookings.

All times are minutes since midnight. An existing appointment occupies
[start - buffer, start + duration + buffer); a candidate [start, start + duration)
is blocked when the two ranges overlap. Equivalently, the candidate start must
not fall strictly inside (apt_start - candidate_duration - buffer,
apt_start + apt_duration + buffer). The relation is symmetric: swapping the
candidate and the existing appointment gives the same answer.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ...config import BUFFER_MINUTES
from ...models import ACTIVE_STATUSES
from .durations import parse_duration_to_minutes
from .periods import minutes_to_time, time_to_minutes


@dataclass(frozen=True)
class BookedRange:
    """An existing appointment reduced to what conflict detection needs"""

    start: int
    duration: int
    appointment_id: Optional[str] = None

    @property
    def time(self) -> str:
        return minutes_to_time(self.start)


@dataclass(frozen=True)
class Conflict:
    booked: BookedRange
    block_start: int  # Latest free start before the booked appointment
    block_end: int  # Earliest free start after it

    def describe(self) -> str:
        return (
            f"This slot is already reserved: the appointment at {self.booked.time} "
            f"blocks every start between {minutes_to_time(self.block_start)} "
            f"and {minutes_to_time(self.block_end)}"
        )

    def to_dict(self) -> dict:
        return {
            "conflicting_time": self.booked.time,
            "blocked_from": minutes_to_time(self.block_start),
            "blocked_until": minutes_to_time(self.block_end),
        }


def appointment_duration(appointment: Any) -> int:
    """Duration of an existing appointment, from its prestation"""
    prestation = getattr(appointment, "prestation", None)
    return parse_duration_to_minutes(getattr(prestation, "duration", None))


def booked_ranges(appointments: Iterable[Any], on_date: Optional[date] = None) -> list[BookedRange]:
    """Keep the pending/accepted appointments (of ``on_date`` when given) as BookedRanges"""
    ranges = []
    for apt in appointments:
        if apt.status not in ACTIVE_STATUSES:
            continue
        if on_date is not None and apt.appointment_date != on_date:
            continue
        ranges.append(
            BookedRange(
                start=time_to_minutes(apt.appointment_time),
                duration=appointment_duration(apt),
                appointment_id=getattr(apt, "id", None),
            )
        )
    return ranges


def find_conflict(
    candidate_start: int,
    candidate_duration: int,
    booked: Iterable[BookedRange],
    buffer: int = BUFFER_MINUTES,
) -> Optional[Conflict]:
    """Return the first booked range the candidate would overlap, or None"""
    for apt in booked:
        block_start = apt.start - candidate_duration - buffer
        block_end = apt.start + apt.duration + buffer

        if block_start < candidate_start < block_end:
            return Conflict(booked=apt, block_start=max(0, block_start), block_end=block_end)

    return None


def is_blocked(
    candidate_start: int,
    candidate_duration: int,
    booked: Iterable[BookedRange],
    buffer: int = BUFFER_MINUTES,
) -> bool:
    return find_conflict(candidate_start, candidate_duration, booked, buffer) is not None
