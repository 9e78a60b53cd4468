"""Appointment service - Booking submission and status workflow"""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any, Optional

from sqlalchemy.orm import Session

from ...config import SCHEDULE_SOURCE
from ...database import store_guard
from ...errors import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ScheduleUnavailableError,
    ValidationError,
)
from ...models import Appointment, Prestation
from ..scheduling.availability import BLOCKED_DATE_REASON, NO_SLOT_REASON
from ..scheduling.conflicts import booked_ranges, find_conflict
from ..scheduling.durations import parse_duration_to_minutes
from ..scheduling.periods import time_to_minutes
from ..scheduling.repository import SchedulingRepository
from ..scheduling.schedule import build_weekly_schedule
from .repository import AppointmentRepository
from .validation import (
    sanitize_appointment,
    validate_appointment_payload,
    validate_appointment_query,
    validate_status,
)

logger = logging.getLogger(__name__)

# Allowed status changes. Terminal statuses have no outgoing transition.
STATUS_TRANSITIONS = {
    "pending": {"accepted", "rejected", "cancelled"},
    "accepted": {"completed", "cancelled"},
    "completed": set(),
    "rejected": set(),
    "cancelled": set(),
}


class BookingService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session, today_provider: Callable[[], date] = date.today):
        self.db = db
        self.repo = AppointmentRepository()
        self.scheduling_repo = SchedulingRepository()
        self.today_provider = today_provider

    def submit_appointment(self, payload: dict[str, Any]) -> Appointment:
        """
        Book an appointment.

        Steps: validate (no store access), sanitize, resolve the prestation,
        check the schedule, re-check conflicts against the current bookings,
        insert as pending. The partial unique index on active (date, time)
        catches a concurrent insert that slips past the re-check.

        Raises:
            ValidationError: Malformed request or unbookable prestation
            ScheduleUnavailableError: Date or time outside the schedule
            ConflictError: The slot overlaps an active appointment
            UpstreamUnavailableError: Database failure
        """
        errors = validate_appointment_payload(payload, self.today_provider())
        if errors:
            logger.warning(f"⚠️ Appointment rejected: {[e['field'] for e in errors]}")
            raise ValidationError(errors)

        data = sanitize_appointment(payload)
        day = data["appointment_date"]
        time_str = data["appointment_time"]
        logger.info(f"📥 Appointment request for {day} at {time_str}")

        with store_guard(self.db, "booking the appointment"):
            prestation = self._get_bookable_prestation(data["prestation_id"])
            self._check_schedule(day, time_str)

            duration = parse_duration_to_minutes(prestation.duration)
            existing = booked_ranges(self.repo.list_active_appointments(self.db, day), on_date=day)
            conflict = find_conflict(time_to_minutes(time_str), duration, existing)
            if conflict:
                logger.warning(
                    f"⚠️ Slot {day} {time_str} ({duration} min) conflicts with {conflict.booked.time}"
                )
                raise ConflictError(conflict.describe(), details=conflict.to_dict())

            appointment = self.repo.insert_appointment(self.db, **data, status="pending")

        logger.info(f"✅ Appointment {appointment.id} created for {day} at {time_str}")
        return appointment

    def _get_bookable_prestation(self, prestation_id: str) -> Prestation:
        prestation = self.scheduling_repo.get_prestation(self.db, prestation_id)
        if not prestation:
            raise ValidationError([{"field": "prestation_id", "message": "Unknown prestation"}])
        if prestation.requires_contact:
            raise ValidationError(
                [
                    {
                        "field": "prestation_id",
                        "message": "This prestation cannot be booked online, please contact us",
                    }
                ]
            )
        return prestation

    def _check_schedule(self, day: date, time_str: str) -> None:
        """Server-side check that ``time_str`` is an offered, unblocked slot of ``day``"""
        if self.scheduling_repo.is_date_blocked(self.db, day):
            raise ScheduleUnavailableError(BLOCKED_DATE_REASON)

        schedule = build_weekly_schedule(
            self.scheduling_repo.list_opening_hours(self.db),
            self.scheduling_repo.list_available_slots(self.db),
            SCHEDULE_SOURCE,
        )
        slots = schedule.slots_for_date(day)
        if not slots:
            raise ScheduleUnavailableError(NO_SLOT_REASON)
        if time_str not in slots:
            raise ScheduleUnavailableError(
                "The requested time is not an available slot.", details={"available_times": slots}
            )

        requested = time_to_minutes(time_str)
        for blocked in self.scheduling_repo.list_blocked_slots(self.db, day, day):
            if time_to_minutes(blocked.start_time) == requested:
                raise ScheduleUnavailableError("This slot is not available.")

    def update_status(
        self, appointment_id: str, status: str, notes: Optional[str] = None
    ) -> Appointment:
        """
        Move an appointment along its workflow.
        Setting the current status again only updates the notes.
        """
        status = (status or "").strip().lower()
        errors = validate_status(status)
        if errors:
            raise ValidationError(errors)

        with store_guard(self.db, "updating the appointment"):
            appointment = self.repo.get_appointment(self.db, appointment_id)
            if not appointment:
                raise NotFoundError("Appointment not found")

            current = appointment.status
            if status != current and status not in STATUS_TRANSITIONS.get(current, set()):
                logger.warning(f"⚠️ Refused transition {current} -> {status} for {appointment_id}")
                raise InvalidTransitionError(
                    f"Cannot change an appointment from {current} to {status}",
                    details={"current_status": current, "requested_status": status},
                )

            appointment = self.repo.update_appointment_status(self.db, appointment, status, notes)

        logger.info(f"📝 Appointment {appointment_id}: {current} -> {status}")
        return appointment

    def list_appointments(
        self,
        status: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[Appointment]:
        """Admin listing, filtered by status and date range"""
        errors, filters = validate_appointment_query(status, start_date, end_date)
        if errors:
            raise ValidationError(errors, message="Invalid query parameters")

        with store_guard(self.db, "listing appointments"):
            return self.repo.list_appointments(self.db, **filters)
