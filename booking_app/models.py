import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# Statuses that occupy a slot and block conflicting bookings
ACTIVE_STATUSES = ("pending", "accepted")
APPOINTMENT_STATUSES = ("pending", "accepted", "completed", "rejected", "cancelled")


def generate_uuid():
    """Generate a UUID primary key"""
    return str(uuid.uuid4())


class Prestation(Base):
    __tablename__ = "prestations"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    duration = Column(String(50), nullable=True)  # Free text, e.g. "1h30", "45min"
    price = Column(String(50), nullable=True)  # Display text, e.g. "45€"
    requires_contact = Column(
        Boolean, default=False, nullable=False
    )  # Contact the business instead of booking online
    short_description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    appointments = relationship("Appointment", back_populates="prestation")


class OpeningHours(Base):
    __tablename__ = "opening_hours"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    day_of_week = Column(Integer, nullable=False, index=True)  # 0=Sunday .. 6=Saturday
    day_name = Column(String(20), nullable=True)
    periods = Column(String(255), nullable=True)  # e.g. "9h-13h|14h-17h"
    last_appointment = Column(String(10), nullable=True)  # e.g. "18h30"
    is_active = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)


class AvailableSlot(Base):
    __tablename__ = "available_slots"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    day_of_week = Column(Integer, nullable=False, index=True)  # 0=Sunday .. 6=Saturday
    start_time = Column(String(8), nullable=False)  # "HH:MM" or "HH:MM:SS"
    end_time = Column(String(8), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


class BlockedSlot(Base):
    __tablename__ = "blocked_slots"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    blocked_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(8), nullable=False)
    reason = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class BlockedDate(Base):
    __tablename__ = "blocked_dates"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    blocked_date = Column(Date, unique=True, nullable=False, index=True)
    reason = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # Storage-level guarantee: two active appointments can never share a start
        Index(
            "uq_appointments_active_slot",
            "appointment_date",
            "appointment_time",
            unique=True,
            sqlite_where=text("status IN ('pending', 'accepted')"),
            postgresql_where=text("status IN ('pending', 'accepted')"),
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    client_name = Column(String(100), nullable=False)
    client_email = Column(String(255), nullable=False)
    client_phone = Column(String(20), nullable=True)
    prestation_id = Column(String(36), ForeignKey("prestations.id"), nullable=True, index=True)
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(String(5), nullable=False)  # "HH:MM"
    status = Column(String(20), default="pending", nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    prestation = relationship("Prestation", back_populates="appointments")


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    token_hash = Column(String(64), unique=True, nullable=False)  # SHA-256 of the bearer token
    created_at = Column(DateTime, server_default=func.now())
