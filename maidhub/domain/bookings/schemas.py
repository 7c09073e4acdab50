"""Booking domain schemas - Pydantic models for validation"""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...config import MIN_BOOKING_DURATION_MINUTES
from ...shared.validators import is_valid_time, normalize_time


class Coordinates(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Address(BaseModel):
    street: str
    city: str
    state: Optional[str] = None
    zipCode: Optional[str] = None
    coordinates: Optional[Coordinates] = None


class BookingCreate(BaseModel):
    """Schema for a customer booking request"""

    maidId: int
    serviceCategoryId: int
    scheduledDate: dt.date
    scheduledTime: str
    duration: int = Field(..., ge=MIN_BOOKING_DURATION_MINUTES)
    address: Address
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("scheduledTime")
    @classmethod
    def validate_time(cls, v):
        if not is_valid_time(v):
            raise ValueError("Time must be in HH:MM format (24-hour)")
        return normalize_time(v)


class BookingStatusUpdate(BaseModel):
    status: Literal["pending", "accepted", "rejected", "completed", "cancelled"]
    rejectionReason: Optional[str] = Field(None, max_length=500)


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None


class CategorySummary(BaseModel):
    id: int
    name: str
    icon: Optional[str] = None


class BookingResponse(BaseModel):
    """Schema for booking response"""

    id: int
    customer: Optional[UserSummary] = None
    maid: Optional[UserSummary] = None
    serviceCategory: Optional[CategorySummary] = None
    scheduledDate: dt.date
    scheduledTime: str
    duration: int
    status: str
    totalPrice: float
    address: dict
    notes: Optional[str] = None
    rejectionReason: Optional[str] = None
    completedAt: Optional[dt.datetime] = None
    createdAt: Optional[dt.datetime] = None

    @classmethod
    def from_booking(cls, booking) -> "BookingResponse":
        def summary(user):
            if user is None:
                return None
            return UserSummary(id=user.id, name=user.name, email=user.email, phone=user.phone)

        category = booking.service_category
        return cls(
            id=booking.id,
            customer=summary(booking.customer),
            maid=summary(booking.maid),
            serviceCategory=(
                CategorySummary(id=category.id, name=category.name, icon=category.icon)
                if category
                else None
            ),
            scheduledDate=booking.scheduled_date,
            scheduledTime=booking.scheduled_time,
            duration=booking.duration,
            status=booking.status,
            totalPrice=booking.total_price,
            address=booking.address,
            notes=booking.notes,
            rejectionReason=booking.rejection_reason,
            completedAt=booking.completed_at,
            createdAt=booking.created_at,
        )


class MaidSummary(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    experience: Optional[int] = None
    skills: list[str] = []
