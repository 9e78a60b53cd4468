"""Appointment domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AppointmentCreate(BaseModel):
    """
    Public booking request.
    Fields are loosely typed here; business validation happens in the service
    so every field error is reported at once.
    """

    model_config = ConfigDict(extra="ignore")

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    prestation_id: Optional[str] = None
    appointment_date: Optional[str] = None
    appointment_time: Optional[str] = None
    notes: Optional[str] = None


class AppointmentStatusUpdate(BaseModel):
    status: str
    notes: Optional[str] = Field(None, max_length=500)


class AppointmentResponse(BaseModel):
    """Schema for appointment response"""

    id: str
    client_name: str
    client_email: str
    client_phone: Optional[str] = None
    prestation_id: Optional[str] = None
    prestation_name: Optional[str] = None
    appointment_date: date
    appointment_time: str
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
