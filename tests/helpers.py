"""Shared fixtures for the test suite: in-memory database and seed data"""

from datetime import date, timedelta
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from booking_app import models  # noqa: F401
from booking_app.database import Base
from booking_app.models import Appointment, AvailableSlot, BlockedDate, BlockedSlot, OpeningHours, Prestation

# Tuesday. Every service test runs against this fixed "today".
TODAY = date(2030, 1, 1)
NEXT_TUESDAY = date(2030, 1, 8)
NEXT_SUNDAY = date(2030, 1, 6)
NEXT_MONDAY = date(2030, 1, 7)


def make_session_factory():
    """Fresh in-memory SQLite database shared by every session of the factory"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


def next_weekday(day_of_week: int, after: Optional[date] = None) -> date:
    """First date strictly after ``after`` falling on day_of_week (0=Sunday .. 6=Saturday)"""
    day = (after or date.today()) + timedelta(days=1)
    while day.isoweekday() % 7 != day_of_week:
        day += timedelta(days=1)
    return day


def add_prestation(db, name="Soin visage", duration="1h", requires_contact=False) -> Prestation:
    prestation = Prestation(name=name, duration=duration, price="50€", requires_contact=requires_contact)
    db.add(prestation)
    db.commit()
    db.refresh(prestation)
    return prestation


def add_opening_hours(
    db, day_of_week: int, periods: str, last_appointment=None, is_active=True, display_order=None
) -> OpeningHours:
    row = OpeningHours(
        day_of_week=day_of_week,
        day_name=["Dimanche", "Lundi", "Mardi", "Mercredi", "Jeudi", "Vendredi", "Samedi"][day_of_week],
        periods=periods,
        last_appointment=last_appointment,
        is_active=is_active,
        display_order=day_of_week if display_order is None else display_order,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def add_available_slot(db, day_of_week: int, start_time: str, end_time: str, is_active=True) -> AvailableSlot:
    row = AvailableSlot(day_of_week=day_of_week, start_time=start_time, end_time=end_time, is_active=is_active)
    db.add(row)
    db.commit()
    return row


def add_appointment(db, prestation, day: date, time_str: str, status="pending") -> Appointment:
    appointment = Appointment(
        client_name="Marie Dupont",
        client_email="marie@example.com",
        prestation_id=prestation.id if prestation else None,
        appointment_date=day,
        appointment_time=time_str,
        status=status,
    )
    db.add(appointment)
    db.commit()
    db.refresh(appointment)
    return appointment


def block_date(db, day: date, reason="Congés") -> BlockedDate:
    row = BlockedDate(blocked_date=day, reason=reason)
    db.add(row)
    db.commit()
    return row


def block_slot(db, day: date, start_time: str) -> BlockedSlot:
    row = BlockedSlot(blocked_date=day, start_time=start_time)
    db.add(row)
    db.commit()
    return row


def booking_payload(prestation_id: str, day: date, time_str: str, **overrides) -> dict:
    payload = {
        "client_name": "Jean-Pierre L'Hôte",
        "client_email": "Jean.Pierre@Example.com",
        "client_phone": "06 12 34 56 78",
        "prestation_id": prestation_id,
        "appointment_date": day.isoformat(),
        "appointment_time": time_str,
        "notes": "Première visite",
    }
    payload.update(overrides)
    return payload
