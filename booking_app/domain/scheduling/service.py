"""Scheduling service - Availability computation and schedule maintenance"""

import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...config import BOOKING_WINDOW_DAYS, DEFAULT_DURATION_MINUTES, SCHEDULE_SOURCE
from ...database import store_guard
from ...errors import NotFoundError, ValidationError
from ...models import BlockedDate, BlockedSlot, OpeningHours, Prestation
from ...shared.validators import parse_date_string, validate_uuid
from ..appointments.repository import AppointmentRepository
from .availability import AvailabilityResult, bookable_dates, compute_available_times
from .durations import parse_duration_to_minutes
from .repository import SchedulingRepository
from .schedule import WeeklySchedule, build_weekly_schedule
from .schemas import BlockedDateCreate, BlockedSlotCreate, OpeningHoursUpdate

logger = logging.getLogger(__name__)

CONTACT_REQUIRED_REASON = "This prestation cannot be booked online, please contact us."


class AvailabilityService:
    """Service layer for availability and the admin schedule operations"""

    def __init__(self, db: Session, today_provider: Callable[[], date] = date.today):
        self.db = db
        self.repo = SchedulingRepository()
        self.today_provider = today_provider

    def load_schedule(self, source: Optional[str] = None) -> WeeklySchedule:
        """Load the authoritative weekly schedule from storage"""
        schedule = build_weekly_schedule(
            self.repo.list_opening_hours(self.db),
            self.repo.list_available_slots(self.db),
            source or SCHEDULE_SOURCE,
        )
        if schedule.is_empty:
            logger.warning(f"⚠️ Weekly schedule ({schedule.source}) has no open day")
        return schedule

    def get_prestation(self, prestation_id: str) -> Prestation:
        if not validate_uuid(prestation_id):
            raise ValidationError([{"field": "prestation_id", "message": "Invalid prestation ID"}])
        prestation = self.repo.get_prestation(self.db, prestation_id.lower())
        if not prestation:
            raise NotFoundError("Prestation not found")
        return prestation

    def get_available_times(
        self, date_str: str, prestation_id: Optional[str] = None
    ) -> tuple[AvailabilityResult, int]:
        """
        Free slot starts of a date for a prestation.

        Without a prestation the default duration is used. Unavailability is
        reported through ``AvailabilityResult.reason``, never raised.

        Returns:
            (result, duration in minutes used for the conflict checks)
        """
        try:
            day = parse_date_string(date_str, "date")
        except ValueError as e:
            raise ValidationError([{"field": "date", "message": str(e)}]) from e

        with store_guard(self.db, "computing availability"):
            duration = DEFAULT_DURATION_MINUTES
            if prestation_id:
                prestation = self.get_prestation(prestation_id)
                if prestation.requires_contact:
                    return AvailabilityResult(date=day, reason=CONTACT_REQUIRED_REASON), duration
                duration = parse_duration_to_minutes(prestation.duration)

            result = compute_available_times(
                day,
                self.load_schedule(),
                AppointmentRepository.list_active_appointments(self.db, day),
                self.repo.list_blocked_slots(self.db, day, day),
                [b.blocked_date for b in self.repo.list_blocked_dates(self.db, day)],
                duration,
                self.today_provider(),
            )

        logger.info(
            f"📅 Availability for {day} ({duration} min): "
            f"{len(result.times)}/{len(result.all_times)} slots free"
        )
        return result, duration

    def get_bookable_dates(self, days_ahead: int = BOOKING_WINDOW_DAYS) -> list[date]:
        """Dates of the booking window that are not blocked and fall on an open weekday"""
        if days_ahead < 1 or days_ahead > 366:
            raise ValidationError(
                [{"field": "days_ahead", "message": "days_ahead must be between 1 and 366"}]
            )

        today = self.today_provider()
        with store_guard(self.db, "loading bookable dates"):
            blocked = [b.blocked_date for b in self.repo.list_blocked_dates(self.db, today)]
            schedule = self.load_schedule()

        return bookable_dates(today, days_ahead, blocked, schedule)

    # ========================================================================
    # PUBLIC SCHEDULE LISTINGS
    # ========================================================================

    def list_opening_hours(self) -> list[OpeningHours]:
        with store_guard(self.db, "loading opening hours"):
            return self.repo.list_opening_hours(self.db)

    def list_available_slots(self):
        with store_guard(self.db, "loading available slots"):
            return self.repo.list_available_slots(self.db)

    def list_upcoming_blocked_dates(self) -> list[BlockedDate]:
        """Blocked dates from today on"""
        with store_guard(self.db, "loading blocked dates"):
            return self.repo.list_blocked_dates(self.db, self.today_provider())

    # ========================================================================
    # ADMIN MAINTENANCE
    # ========================================================================

    def update_opening_hours(self, opening_hours_id: str, data: OpeningHoursUpdate) -> OpeningHours:
        updates = data.model_dump(exclude_unset=True)
        # Text fields may be cleared; the others are NOT NULL
        for key in ("day_of_week", "is_active", "display_order"):
            if updates.get(key, 0) is None:
                del updates[key]
        if not updates:
            raise ValidationError([{"field": "body", "message": "No field to update"}])

        with store_guard(self.db, "updating opening hours"):
            opening_hours = self.repo.get_opening_hours(self.db, opening_hours_id)
            if not opening_hours:
                raise NotFoundError("Opening hours not found")
            opening_hours = self.repo.update_opening_hours(self.db, opening_hours, **updates)

        logger.info(f"🕒 Opening hours {opening_hours_id} updated: {', '.join(updates)}")
        return opening_hours

    def list_blocked_slots(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> list[BlockedSlot]:
        """Blocked slots in a date range, defaulting to the booking window"""
        errors = []
        start = end = None
        try:
            start = parse_date_string(start_date, "start_date") if start_date else self.today_provider()
        except ValueError as e:
            errors.append({"field": "start_date", "message": str(e)})
        try:
            end = (
                parse_date_string(end_date, "end_date")
                if end_date
                else self.today_provider() + timedelta(days=BOOKING_WINDOW_DAYS)
            )
        except ValueError as e:
            errors.append({"field": "end_date", "message": str(e)})
        if not errors and start > end:
            errors.append({"field": "end_date", "message": "end_date must be on or after start_date"})
        if errors:
            raise ValidationError(errors)

        with store_guard(self.db, "loading blocked slots"):
            return self.repo.list_blocked_slots(self.db, start, end)

    def create_blocked_slot(self, data: BlockedSlotCreate) -> BlockedSlot:
        with store_guard(self.db, "blocking a slot"):
            blocked = self.repo.create_blocked_slot(
                self.db,
                blocked_date=data.blocked_date,
                start_time=data.start_time,
                reason=data.reason,
            )
        logger.info(f"🚫 Slot blocked: {blocked.blocked_date} {blocked.start_time}")
        return blocked

    def delete_blocked_slot(self, blocked_slot_id: str) -> None:
        with store_guard(self.db, "unblocking a slot"):
            blocked = self.repo.get_blocked_slot(self.db, blocked_slot_id)
            if not blocked:
                raise NotFoundError("Blocked slot not found")
            self.repo.delete_blocked_slot(self.db, blocked)
        logger.info(f"✅ Slot unblocked: {blocked_slot_id}")

    def create_blocked_date(self, data: BlockedDateCreate) -> BlockedDate:
        with store_guard(self.db, "blocking a date"):
            existing = self.repo.list_blocked_dates(self.db, data.blocked_date)
            if existing and existing[0].blocked_date == data.blocked_date:
                logger.info(f"ℹ️ Date {data.blocked_date} already blocked")
                return existing[0]
            blocked = self.repo.create_blocked_date(
                self.db, blocked_date=data.blocked_date, reason=data.reason
            )
        logger.info(f"🚫 Date blocked: {blocked.blocked_date}")
        return blocked

    def delete_blocked_date(self, blocked_date_id: str) -> None:
        with store_guard(self.db, "unblocking a date"):
            blocked = self.repo.get_blocked_date(self.db, blocked_date_id)
            if not blocked:
                raise NotFoundError("Blocked date not found")
            self.repo.delete_blocked_date(self.db, blocked)
        logger.info(f"✅ Date unblocked: {blocked_date_id}")
