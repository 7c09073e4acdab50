"""Booking service - Business logic for booking creation and lifecycle"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...exceptions import (
    ConflictError,
    MaidHubError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from ...models import Booking, ServiceCategory, User
from ..availability import AvailabilityService
from .repository import BookingRepository
from .schemas import BookingCreate, BookingStatusUpdate

logger = logging.getLogger(__name__)

VALID_TRANSITIONS = {
    "pending": ["accepted", "rejected", "cancelled"],
    "accepted": ["completed", "cancelled"],
    "rejected": [],
    "completed": [],
    "cancelled": [],
}

# Statuses only the assigned maid may set
MAID_ONLY_STATUSES = ("accepted", "rejected", "completed")


def price_for_duration(category: ServiceCategory, duration: int) -> float:
    """Price of the matching pricing tier, else the first tier, else 0"""
    pricing = category.pricing or []
    for tier in pricing:
        if tier.get("duration") == duration:
            return float(tier.get("price", 0))
    if pricing:
        return float(pricing[0].get("price", 0))
    return 0.0


def can_transition(current: str, new: str) -> bool:
    return new in VALID_TRANSITIONS.get(current, [])


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.availability = AvailabilityService(db)

    def create_booking(self, data: BookingCreate, customer: User) -> Booking:
        """
        Create a pending booking after checking the maid's availability.

        The maid row stays locked from the availability check until commit, so
        two customers racing for the same maid are checked one after the other.
        A unique index on active (maid, date, start) catches anything that still
        slips through.
        """
        logger.info(
            f"📥 Booking request by customer {customer.id} for maid {data.maidId} "
            f"on {data.scheduledDate} at {data.scheduledTime} ({data.duration} min)"
        )
        try:
            maid = self.repo.lock_maid(self.db, data.maidId)
            if not maid or maid.role != "maid":
                raise NotFoundError("Maid not found")

            if maid.verification_status != "approved":
                raise ValidationError("Maid is not verified")

            category = self.repo.get_active_category(self.db, data.serviceCategoryId)
            if not category:
                raise NotFoundError("Service category not found")

            self.availability.ensure_bookable(
                maid.id, data.scheduledDate, data.scheduledTime, data.duration
            )

            booking = self.repo.add_booking(
                self.db,
                customer_id=customer.id,
                maid_id=maid.id,
                service_category_id=category.id,
                scheduled_date=data.scheduledDate,
                scheduled_time=data.scheduledTime,
                duration=data.duration,
                total_price=price_for_duration(category, data.duration),
                address=data.address.model_dump(exclude_none=True),
                notes=data.notes,
                status="pending",
            )
            booking = self.repo.save(self.db, booking)
        except IntegrityError:
            self.db.rollback()
            logger.warning(
                f"⚠️ Concurrent booking for maid {data.maidId} at "
                f"{data.scheduledDate} {data.scheduledTime} rejected by unique index"
            )
            raise ConflictError(
                "This time slot is not available. Please choose a different time."
            ) from None
        except MaidHubError:
            self.db.rollback()
            raise

        logger.info(f"✅ Booking {booking.id} created (pending)")
        return booking

    def get_customer_bookings(self, customer: User) -> list[Booking]:
        return self.repo.get_customer_bookings(self.db, customer.id)

    def get_maid_bookings(self, maid: User) -> list[Booking]:
        return self.repo.get_maid_bookings(self.db, maid.id)

    def get_booking(self, booking_id: int, user: User) -> Booking:
        """Get a booking visible to its customer or maid"""
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        if user.id not in (booking.customer_id, booking.maid_id):
            raise PermissionDeniedError("Not authorized to view this booking")
        return booking

    def update_status(self, booking_id: int, data: BookingStatusUpdate, user: User) -> Booking:
        """
        Move a booking through its lifecycle.

        Status changes never re-run the conflict check; only creation does.
        """
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")

        new_status = data.status
        if not can_transition(booking.status, new_status):
            raise ValidationError(f"Cannot change status from {booking.status} to {new_status}")

        is_maid = booking.maid_id == user.id
        is_customer = booking.customer_id == user.id

        if new_status in MAID_ONLY_STATUSES and not is_maid:
            raise PermissionDeniedError("Only the assigned maid can perform this action")

        if new_status == "cancelled" and not (is_customer or is_maid):
            raise PermissionDeniedError("Only the customer or maid can cancel the booking")

        booking.status = new_status
        if new_status == "rejected" and data.rejectionReason:
            booking.rejection_reason = data.rejectionReason
        if new_status == "completed":
            booking.completed_at = datetime.utcnow()

        booking = self.repo.save(self.db, booking)
        logger.info(f"🔄 Booking {booking.id} -> {new_status} by user {user.id}")
        return booking

    def get_verified_maids(self) -> list[User]:
        return self.repo.get_verified_maids(self.db)

