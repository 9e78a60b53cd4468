"""Scheduling domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_time_string


class AvailableTimesResponse(BaseModel):
    """Free slot starts for one date"""

    date: date
    prestation_id: Optional[str] = None
    duration_minutes: int
    times: list[str]
    all_times: list[str]
    reason: Optional[str] = None


class BookableDatesResponse(BaseModel):
    dates: list[date]


class OpeningHoursResponse(BaseModel):
    id: str
    day_of_week: int
    day_name: Optional[str] = None
    periods: Optional[str] = None
    last_appointment: Optional[str] = None
    is_active: bool
    display_order: int

    class Config:
        from_attributes = True


class OpeningHoursUpdate(BaseModel):
    """Partial update of a day's opening hours"""

    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    day_name: Optional[str] = Field(None, max_length=20)
    periods: Optional[str] = Field(None, max_length=255)
    last_appointment: Optional[str] = Field(None, max_length=10)
    is_active: Optional[bool] = None
    display_order: Optional[int] = None


class AvailableSlotResponse(BaseModel):
    id: str
    day_of_week: int
    start_time: str
    end_time: str
    is_active: bool

    class Config:
        from_attributes = True


class BlockedDateCreate(BaseModel):
    blocked_date: date
    reason: Optional[str] = Field(None, max_length=255)


class BlockedDateResponse(BaseModel):
    id: str
    blocked_date: date
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BlockedSlotCreate(BaseModel):
    """Block a single slot start on a given date"""

    blocked_date: date
    start_time: str
    reason: Optional[str] = Field(None, max_length=255)

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v):
        return validate_time_string(v, "start_time")


class BlockedSlotResponse(BaseModel):
    id: str
    blocked_date: date
    start_time: str
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
