import secrets

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

BOOKING_STATUSES = ("pending", "accepted", "rejected", "completed", "cancelled")

# Only these statuses occupy time on a maid's calendar
ACTIVE_BOOKING_STATUSES = ("pending", "accepted")

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def generate_api_token():
    """Generate an opaque bearer token for API access"""
    return secrets.token_urlsafe(32)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=True)
    role = Column(String(20), default="customer", nullable=False)  # customer, maid, admin
    is_active = Column(Boolean, default=True, nullable=False)
    api_token = Column(String(255), unique=True, index=True, default=generate_api_token)

    # Maid profile fields (unused for customers)
    verification_status = Column(
        String(20), default="pending", nullable=True
    )  # pending, approved, rejected
    experience = Column(Integer, default=0, nullable=True)  # years
    skills = Column(JSON, default=list, nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    weekly_schedule = relationship(
        "WeeklyAvailability",
        back_populates="maid",
        cascade="all, delete-orphan",
        order_by="WeeklyAvailability.day_of_week",
    )
    blocked_intervals = relationship(
        "BlockedInterval", back_populates="maid", cascade="all, delete-orphan"
    )

    @property
    def is_maid(self) -> bool:
        return self.role == "maid"


class ServiceCategory(Base):
    __tablename__ = "service_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    icon = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    pricing = Column(JSON, default=list, nullable=False)  # [{"duration": 60, "price": 25.0}]

    created_at = Column(DateTime, server_default=func.now())


class WeeklyAvailability(Base):
    __tablename__ = "weekly_availability"
    __table_args__ = (UniqueConstraint("maid_id", "day_of_week", name="uq_weekly_maid_day"),)

    id = Column(Integer, primary_key=True, index=True)
    maid_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0=Monday .. 6=Sunday
    is_available = Column(Boolean, default=False, nullable=False)
    start_time = Column(String(5), nullable=True)  # HH:MM
    end_time = Column(String(5), nullable=True)  # HH:MM

    maid = relationship("User", back_populates="weekly_schedule")


class BlockedInterval(Base):
    __tablename__ = "blocked_intervals"

    id = Column(Integer, primary_key=True, index=True)
    maid_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False, default="00:00")
    end_time = Column(String(5), nullable=False, default="23:59")
    reason = Column(String(255), nullable=True, default="Unavailable")

    created_at = Column(DateTime, server_default=func.now())

    maid = relationship("User", back_populates="blocked_intervals")

    @property
    def is_full_day(self) -> bool:
        return self.start_time == "00:00" and self.end_time == "23:59"


_ACTIVE_STATUS_SQL = "status IN ('pending', 'accepted')"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("ix_bookings_customer_status", "customer_id", "status"),
        Index("ix_bookings_maid_status", "maid_id", "status"),
        # Two active bookings of one maid may never start at the same minute.
        # Interval overlap itself is checked in the service under a row lock.
        Index(
            "uq_bookings_active_start",
            "maid_id",
            "scheduled_date",
            "scheduled_time",
            unique=True,
            postgresql_where=text(_ACTIVE_STATUS_SQL),
            sqlite_where=text(_ACTIVE_STATUS_SQL),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    maid_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    service_category_id = Column(Integer, ForeignKey("service_categories.id"), nullable=False)
    scheduled_date = Column(Date, nullable=False)
    scheduled_time = Column(String(5), nullable=False)  # HH:MM (24-hour)
    duration = Column(Integer, nullable=False)  # minutes
    status = Column(String(20), default="pending", nullable=False)
    total_price = Column(Float, default=0, nullable=False)
    address = Column(JSON, nullable=False)  # street, city, state, zipCode, coordinates
    notes = Column(String(500), nullable=True)
    rejection_reason = Column(String(500), nullable=True)
    completed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    customer = relationship("User", foreign_keys=[customer_id])
    maid = relationship("User", foreign_keys=[maid_id])
    service_category = relationship("ServiceCategory")
