"""Appointment router - FastAPI endpoints for booking and the admin workflow"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from ...models import Admin, Appointment
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentStatusUpdate
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


def to_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        client_name=appointment.client_name,
        client_email=appointment.client_email,
        client_phone=appointment.client_phone,
        prestation_id=appointment.prestation_id,
        prestation_name=appointment.prestation.name if appointment.prestation else None,
        appointment_date=appointment.appointment_date,
        appointment_time=appointment.appointment_time,
        status=appointment.status,
        notes=appointment.notes,
        created_at=appointment.created_at,
        updated_at=appointment.updated_at,
    )


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def submit_appointment(
    data: AppointmentCreate,
    service: BookingService = Depends(get_booking_service),
):
    """Public booking endpoint. New appointments are always pending."""
    appointment = service.submit_appointment(data.model_dump())
    return to_response(appointment)


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    status: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    admin: Admin = Depends(get_current_admin),
    service: BookingService = Depends(get_booking_service),
):
    appointments = service.list_appointments(status, start_date, end_date)
    return [to_response(a) for a in appointments]


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: str,
    data: AppointmentStatusUpdate,
    admin: Admin = Depends(get_current_admin),
    service: BookingService = Depends(get_booking_service),
):
    """Accept, reject, cancel or complete an appointment"""
    logger.info(f"📝 Admin {admin.id} updating appointment {appointment_id} to {data.status}")
    appointment = service.update_status(appointment_id, data.status, data.notes)
    return to_response(appointment)
