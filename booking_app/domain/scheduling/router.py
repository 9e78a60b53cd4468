"""Scheduling router - FastAPI endpoints for availability and schedule maintenance"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...config import BOOKING_WINDOW_DAYS
from ...database import get_db
from ...models import Admin
from .schemas import (
    AvailableSlotResponse,
    AvailableTimesResponse,
    BlockedDateCreate,
    BlockedDateResponse,
    BlockedSlotCreate,
    BlockedSlotResponse,
    BookableDatesResponse,
    OpeningHoursResponse,
    OpeningHoursUpdate,
)
from .service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scheduling"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    """Dependency injection for AvailabilityService"""
    return AvailabilityService(db)


# ============================================================================
# PUBLIC AVAILABILITY
# ============================================================================


@router.get("/availability/times", response_model=AvailableTimesResponse)
async def get_available_times(
    date: str = Query(..., description="YYYY-MM-DD"),
    prestation_id: Optional[str] = Query(None),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Free slot starts of a date for a prestation"""
    result, duration = service.get_available_times(date, prestation_id)
    return AvailableTimesResponse(
        date=result.date,
        prestation_id=prestation_id,
        duration_minutes=duration,
        times=result.times,
        all_times=result.all_times,
        reason=result.reason,
    )


@router.get("/availability/dates", response_model=BookableDatesResponse)
async def get_bookable_dates(
    days_ahead: int = Query(BOOKING_WINDOW_DAYS),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Dates of the booking window that can be offered in the calendar"""
    return BookableDatesResponse(dates=service.get_bookable_dates(days_ahead))


@router.get("/opening-hours", response_model=list[OpeningHoursResponse])
async def get_opening_hours(service: AvailabilityService = Depends(get_availability_service)):
    return service.list_opening_hours()


@router.get("/available-slots", response_model=list[AvailableSlotResponse])
async def get_available_slots(service: AvailabilityService = Depends(get_availability_service)):
    return service.list_available_slots()


@router.get("/blocked-dates", response_model=list[BlockedDateResponse])
async def get_blocked_dates(service: AvailabilityService = Depends(get_availability_service)):
    """Blocked dates from today on"""
    return service.list_upcoming_blocked_dates()


# ============================================================================
# ADMIN SCHEDULE MAINTENANCE
# ============================================================================


@router.patch("/opening-hours/{opening_hours_id}", response_model=OpeningHoursResponse)
async def update_opening_hours(
    opening_hours_id: str,
    data: OpeningHoursUpdate,
    admin: Admin = Depends(get_current_admin),
    service: AvailabilityService = Depends(get_availability_service),
):
    logger.info(f"🕒 Admin {admin.id} updating opening hours {opening_hours_id}")
    return service.update_opening_hours(opening_hours_id, data)


@router.post("/blocked-dates", response_model=BlockedDateResponse, status_code=status.HTTP_201_CREATED)
async def create_blocked_date(
    data: BlockedDateCreate,
    admin: Admin = Depends(get_current_admin),
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.create_blocked_date(data)


@router.delete("/blocked-dates/{blocked_date_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blocked_date(
    blocked_date_id: str,
    admin: Admin = Depends(get_current_admin),
    service: AvailabilityService = Depends(get_availability_service),
):
    service.delete_blocked_date(blocked_date_id)


@router.get("/blocked-slots", response_model=list[BlockedSlotResponse])
async def get_blocked_slots(
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    admin: Admin = Depends(get_current_admin),
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.list_blocked_slots(start_date, end_date)


@router.post("/blocked-slots", response_model=BlockedSlotResponse, status_code=status.HTTP_201_CREATED)
async def create_blocked_slot(
    data: BlockedSlotCreate,
    admin: Admin = Depends(get_current_admin),
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.create_blocked_slot(data)


@router.delete("/blocked-slots/{blocked_slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blocked_slot(
    blocked_slot_id: str,
    admin: Admin = Depends(get_current_admin),
    service: AvailabilityService = Depends(get_availability_service),
):
    service.delete_blocked_slot(blocked_slot_id)
