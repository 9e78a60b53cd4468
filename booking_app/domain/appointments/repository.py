"""Appointment repository - Database operations for appointments"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ...errors import ConflictError
from ...models import ACTIVE_STATUSES, Appointment

logger = logging.getLogger(__name__)


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def list_appointments(
        db: Session,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Appointment]:
        """Appointments matching the filters, ordered by date then time"""
        query = db.query(Appointment).options(joinedload(Appointment.prestation))

        if status:
            query = query.filter(Appointment.status == status)
        if start_date is not None:
            query = query.filter(Appointment.appointment_date >= start_date)
        if end_date is not None:
            query = query.filter(Appointment.appointment_date <= end_date)

        return query.order_by(Appointment.appointment_date, Appointment.appointment_time).all()

    @staticmethod
    def list_active_appointments(db: Session, day: date) -> list[Appointment]:
        """Pending and accepted appointments of a day, with their prestation loaded"""
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.prestation))
            .filter(
                Appointment.appointment_date == day,
                Appointment.status.in_(ACTIVE_STATUSES),
            )
            .order_by(Appointment.appointment_time)
            .all()
        )

    @staticmethod
    def get_appointment(db: Session, appointment_id: str) -> Optional[Appointment]:
        return (
            db.query(Appointment)
            .options(joinedload(Appointment.prestation))
            .filter(Appointment.id == appointment_id)
            .first()
        )

    @staticmethod
    def insert_appointment(db: Session, **appointment_data) -> Appointment:
        """
        Insert a new appointment.

        Raises:
            ConflictError: If an active appointment already holds the same date and time
        """
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(
                f"⚠️ Slot taken concurrently: {appointment_data.get('appointment_date')} "
                f"{appointment_data.get('appointment_time')} ({e.orig})"
            )
            raise ConflictError("This slot has just been booked by someone else") from e
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment_status(
        db: Session, appointment: Appointment, status: str, notes: Optional[str] = None
    ) -> Appointment:
        appointment.status = status
        if notes is not None:
            appointment.notes = notes
        db.commit()
        db.refresh(appointment)
        return appointment
