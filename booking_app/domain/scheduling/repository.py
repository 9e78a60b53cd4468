"""Scheduling repository - Database operations for schedules, blocked dates and blocked slots"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import AvailableSlot, BlockedDate, BlockedSlot, OpeningHours, Prestation


class SchedulingRepository:
    """Repository for schedule database operations"""

    @staticmethod
    def get_prestation(db: Session, prestation_id: str) -> Optional[Prestation]:
        return db.query(Prestation).filter(Prestation.id == prestation_id).first()

    @staticmethod
    def list_opening_hours(db: Session, active_only: bool = True) -> list[OpeningHours]:
        """Opening hours ordered for display"""
        query = db.query(OpeningHours)
        if active_only:
            query = query.filter(OpeningHours.is_active.is_(True))
        return query.order_by(OpeningHours.display_order, OpeningHours.day_of_week).all()

    @staticmethod
    def get_opening_hours(db: Session, opening_hours_id: str) -> Optional[OpeningHours]:
        return db.query(OpeningHours).filter(OpeningHours.id == opening_hours_id).first()

    @staticmethod
    def update_opening_hours(db: Session, opening_hours: OpeningHours, **updates) -> OpeningHours:
        """Update opening hours with provided fields"""
        for key, value in updates.items():
            if hasattr(opening_hours, key):
                setattr(opening_hours, key, value)

        db.commit()
        db.refresh(opening_hours)
        return opening_hours

    @staticmethod
    def list_available_slots(db: Session, active_only: bool = True) -> list[AvailableSlot]:
        query = db.query(AvailableSlot)
        if active_only:
            query = query.filter(AvailableSlot.is_active.is_(True))
        return query.order_by(AvailableSlot.day_of_week, AvailableSlot.start_time).all()

    @staticmethod
    def list_blocked_dates(db: Session, from_date: Optional[date] = None) -> list[BlockedDate]:
        """Blocked dates, optionally only those on or after ``from_date``"""
        query = db.query(BlockedDate)
        if from_date is not None:
            query = query.filter(BlockedDate.blocked_date >= from_date)
        return query.order_by(BlockedDate.blocked_date).all()

    @staticmethod
    def is_date_blocked(db: Session, day: date) -> bool:
        return db.query(BlockedDate.id).filter(BlockedDate.blocked_date == day).first() is not None

    @staticmethod
    def get_blocked_date(db: Session, blocked_date_id: str) -> Optional[BlockedDate]:
        return db.query(BlockedDate).filter(BlockedDate.id == blocked_date_id).first()

    @staticmethod
    def create_blocked_date(db: Session, **data) -> BlockedDate:
        blocked = BlockedDate(**data)
        db.add(blocked)
        db.commit()
        db.refresh(blocked)
        return blocked

    @staticmethod
    def delete_blocked_date(db: Session, blocked: BlockedDate) -> None:
        db.delete(blocked)
        db.commit()

    @staticmethod
    def list_blocked_slots(
        db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[BlockedSlot]:
        """Blocked slots between two dates (inclusive)"""
        query = db.query(BlockedSlot)
        if start_date is not None:
            query = query.filter(BlockedSlot.blocked_date >= start_date)
        if end_date is not None:
            query = query.filter(BlockedSlot.blocked_date <= end_date)
        return query.order_by(BlockedSlot.blocked_date, BlockedSlot.start_time).all()

    @staticmethod
    def get_blocked_slot(db: Session, blocked_slot_id: str) -> Optional[BlockedSlot]:
        return db.query(BlockedSlot).filter(BlockedSlot.id == blocked_slot_id).first()

    @staticmethod
    def create_blocked_slot(db: Session, **data) -> BlockedSlot:
        blocked = BlockedSlot(**data)
        db.add(blocked)
        db.commit()
        db.refresh(blocked)
        return blocked

    @staticmethod
    def delete_blocked_slot(db: Session, blocked: BlockedSlot) -> None:
        db.delete(blocked)
        db.commit()
