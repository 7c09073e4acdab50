"""Booking repository - Database operations for bookings"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import ACTIVE_BOOKING_STATUSES, Booking, ServiceCategory, User


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_active_bookings_on_date(
        db: Session, maid_id: int, day: date, exclude_booking_id: Optional[int] = None
    ) -> list[Booking]:
        """Get pending/accepted bookings of a maid on one calendar day"""
        query = db.query(Booking).filter(
            Booking.maid_id == maid_id,
            Booking.scheduled_date == day,
            Booking.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        if exclude_booking_id is not None:
            query = query.filter(Booking.id != exclude_booking_id)
        return query.order_by(Booking.scheduled_time).all()

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        return (
            db.query(Booking)
            .options(
                joinedload(Booking.customer),
                joinedload(Booking.maid),
                joinedload(Booking.service_category),
            )
            .filter(Booking.id == booking_id)
            .first()
        )

    @staticmethod
    def get_customer_bookings(db: Session, customer_id: int) -> list[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.maid), joinedload(Booking.service_category))
            .filter(Booking.customer_id == customer_id)
            .order_by(Booking.scheduled_date.desc(), Booking.scheduled_time.desc())
            .all()
        )

    @staticmethod
    def get_maid_bookings(db: Session, maid_id: int) -> list[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.customer), joinedload(Booking.service_category))
            .filter(Booking.maid_id == maid_id)
            .order_by(Booking.scheduled_date.desc(), Booking.scheduled_time.desc())
            .all()
        )

    @staticmethod
    def lock_maid(db: Session, maid_id: int) -> Optional[User]:
        """
        Load the maid row with SELECT ... FOR UPDATE.

        Serializes concurrent booking creation for the same maid until the
        surrounding transaction commits or rolls back. SQLite ignores the lock
        clause; there the engine opens every transaction with BEGIN IMMEDIATE,
        which serializes writers for the whole database instead.
        """
        return db.query(User).filter(User.id == maid_id).with_for_update().first()

    @staticmethod
    def add_booking(db: Session, **booking_data) -> Booking:
        """Stage a booking; caller owns the commit"""
        booking = Booking(**booking_data)
        db.add(booking)
        db.flush()
        return booking

    @staticmethod
    def save(db: Session, booking: Booking) -> Booking:
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def get_active_category(db: Session, category_id: int) -> Optional[ServiceCategory]:
        return (
            db.query(ServiceCategory)
            .filter(ServiceCategory.id == category_id, ServiceCategory.is_active.is_(True))
            .first()
        )

    @staticmethod
    def get_verified_maids(db: Session) -> list[User]:
        return (
            db.query(User)
            .filter(
                User.role == "maid",
                User.verification_status == "approved",
                User.is_active.is_(True),
            )
            .order_by(User.name)
            .all()
        )
