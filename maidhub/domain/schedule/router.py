"""Maid schedule router - Weekly hours, blocked slots and schedule-aware availability"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_maid
from ...config import AVAILABILITY_RATE_LIMIT, RATE_LIMIT_WINDOW_SECONDS
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from ...shared.validators import parse_query_date
from ..availability import AvailabilityService
from .schemas import (
    BlockedIntervalResponse,
    BlockSlotRequest,
    WeeklyAvailabilityResponse,
    WeeklyScheduleUpdate,
)
from .service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/maids/schedule", tags=["Maid Schedule"])

rate_limit_availability = create_rate_limiter(
    limit=AVAILABILITY_RATE_LIMIT,
    window_seconds=RATE_LIMIT_WINDOW_SECONDS,
    key_prefix="schedule_availability",
)


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    """Dependency injection for ScheduleService"""
    return ScheduleService(db)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


# ============================================================================
# PUBLIC
# ============================================================================


@router.get("/available-slots/{maid_id}")
async def get_available_slots(
    maid_id: int,
    date: Optional[str] = Query(None),
    service: AvailabilityService = Depends(get_availability_service),
    _: None = Depends(rate_limit_availability),
):
    """Hourly slots for a maid on a date, honouring weekly hours, blocks and bookings"""
    day = parse_query_date(date)
    listing = service.list_available_slots(maid_id, day)

    if listing.note:
        return {
            "success": True,
            "data": {"date": date, "availableSlots": [], "message": listing.note},
        }

    return {
        "success": True,
        "data": {
            "date": date,
            "maidSchedule": WeeklyAvailabilityResponse.from_row(listing.day_schedule).model_dump(),
            "availableSlots": listing.slots,
            "bookedSlots": listing.booked_slots,
            "blockedSlots": [
                BlockedIntervalResponse.from_row(b).model_dump(mode="json") for b in listing.blocked
            ],
        },
    }


# ============================================================================
# MAID ONLY
# ============================================================================


@router.put("/weekly")
async def set_weekly_schedule(
    data: WeeklyScheduleUpdate,
    current_user: User = Depends(require_maid),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Replace the maid's weekly working hours"""
    schedule = service.set_weekly_schedule(current_user, data.weeklySchedule)
    return {
        "success": True,
        "message": "Weekly schedule updated successfully",
        "data": [WeeklyAvailabilityResponse.from_row(row).model_dump() for row in schedule],
    }


@router.get("/weekly")
async def get_weekly_schedule(
    current_user: User = Depends(require_maid),
    service: ScheduleService = Depends(get_schedule_service),
):
    schedule = service.get_weekly_schedule(current_user)
    return {
        "success": True,
        "data": [WeeklyAvailabilityResponse.from_row(row).model_dump() for row in schedule],
    }


@router.post("/block-slot", status_code=201)
async def block_slot(
    data: BlockSlotRequest,
    current_user: User = Depends(require_maid),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Block a time range (full day when no times are given)"""
    block = service.block_slot(current_user, data)
    return {
        "success": True,
        "message": "Time slot blocked successfully",
        "data": BlockedIntervalResponse.from_row(block).model_dump(mode="json"),
    }


@router.get("/blocked-slots")
async def get_blocked_slots(
    current_user: User = Depends(require_maid),
    service: ScheduleService = Depends(get_schedule_service),
):
    blocks = service.get_blocked_slots(current_user)
    return {
        "success": True,
        "count": len(blocks),
        "data": [BlockedIntervalResponse.from_row(b).model_dump(mode="json") for b in blocks],
    }


@router.delete("/block-slot/{slot_id}")
async def unblock_slot(
    slot_id: int,
    current_user: User = Depends(require_maid),
    service: ScheduleService = Depends(get_schedule_service),
):
    service.unblock_slot(current_user, slot_id)
    return {"success": True, "message": "Blocked slot removed successfully"}
