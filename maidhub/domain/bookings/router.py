"""Booking router - FastAPI endpoints for bookings and simple availability"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_customer, require_maid
from ...config import AVAILABILITY_RATE_LIMIT, BOOKING_RATE_LIMIT, RATE_LIMIT_WINDOW_SECONDS
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from ...shared.validators import parse_query_date
from ..availability import AvailabilityService
from .schemas import BookingCreate, BookingResponse, BookingStatusUpdate, MaidSummary
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])

rate_limit_booking_create = create_rate_limiter(
    limit=BOOKING_RATE_LIMIT, window_seconds=RATE_LIMIT_WINDOW_SECONDS, key_prefix="booking_create"
)
rate_limit_availability = create_rate_limiter(
    limit=AVAILABILITY_RATE_LIMIT,
    window_seconds=RATE_LIMIT_WINDOW_SECONDS,
    key_prefix="booking_availability",
)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


# ============================================================================
# PUBLIC
# ============================================================================


@router.get("/maids")
async def get_verified_maids(service: BookingService = Depends(get_booking_service)):
    """All approved, active maids"""
    maids = service.get_verified_maids()
    return {
        "success": True,
        "count": len(maids),
        "data": [
            MaidSummary(
                id=m.id,
                name=m.name,
                email=m.email,
                phone=m.phone,
                experience=m.experience,
                skills=m.skills or [],
            ).model_dump()
            for m in maids
        ],
    }


@router.get("/availability/{maid_id}")
async def get_available_slots(
    maid_id: int,
    date: Optional[str] = Query(None),
    service: AvailabilityService = Depends(get_availability_service),
    _: None = Depends(rate_limit_availability),
):
    """Fixed 09:00-17:00 hourly slots minus slots where a booking starts"""
    day = parse_query_date(date)
    listing = service.list_simple_slots(maid_id, day)
    return {
        "success": True,
        "data": {
            "date": date,
            "availableSlots": listing.slots,
            "bookedSlots": listing.booked_slots,
        },
    }


# ============================================================================
# AUTHENTICATED
# ============================================================================


@router.post("", status_code=201)
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(require_customer),
    service: BookingService = Depends(get_booking_service),
    _: None = Depends(rate_limit_booking_create),
):
    """Create a booking; 409 when the time overlaps the maid's commitments"""
    booking = service.create_booking(data, current_user)
    return {
        "success": True,
        "message": "Booking created successfully",
        "data": BookingResponse.from_booking(booking).model_dump(mode="json"),
    }


@router.get("/my")
async def get_my_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    bookings = service.get_customer_bookings(current_user)
    return {
        "success": True,
        "count": len(bookings),
        "data": [BookingResponse.from_booking(b).model_dump(mode="json") for b in bookings],
    }


@router.get("/maid")
async def get_maid_bookings(
    current_user: User = Depends(require_maid),
    service: BookingService = Depends(get_booking_service),
):
    bookings = service.get_maid_bookings(current_user)
    return {
        "success": True,
        "count": len(bookings),
        "data": [BookingResponse.from_booking(b).model_dump(mode="json") for b in bookings],
    }


@router.get("/{booking_id}")
async def get_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    booking = service.get_booking(booking_id, current_user)
    return {"success": True, "data": BookingResponse.from_booking(booking).model_dump(mode="json")}


@router.put("/{booking_id}/status")
async def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Accept/reject/complete (maid) or cancel (customer or maid)"""
    booking = service.update_status(booking_id, data, current_user)
    return {
        "success": True,
        "message": f"Booking {booking.status} successfully",
        "data": BookingResponse.from_booking(booking).model_dump(mode="json"),
    }
