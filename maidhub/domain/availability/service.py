"""Availability service - Conflict checks and slot listings backed by the database"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...config import SIMPLE_SLOT_END_HOUR, SIMPLE_SLOT_START_HOUR
from ...exceptions import ConflictError, NotFoundError, ValidationError
from ...shared.validators import time_to_minutes
from ..bookings.repository import BookingRepository
from ..schedule.repository import ScheduleRepository
from . import engine

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


class AvailabilityService:
    """Answers "is this maid free?" questions for one request/session"""

    def __init__(self, db: Session):
        self.db = db
        self.bookings = BookingRepository()
        self.schedule = ScheduleRepository()

    def has_conflict(
        self,
        maid_id: int,
        day: date,
        start_time: str,
        duration_minutes: int,
        exclude_booking_id: Optional[int] = None,
    ) -> bool:
        """
        Check whether [start_time, start_time + duration) overlaps an active booking.

        No bookings that day, or a malformed ``start_time``, means no conflict.
        """
        if duration_minutes <= 0:
            raise ValidationError("Duration must be a positive number of minutes")

        existing = self.bookings.get_active_bookings_on_date(
            self.db, maid_id, day, exclude_booking_id
        )
        if not existing:
            return False
        return engine.conflicts_with_any(start_time, duration_minutes, existing)

    def list_simple_slots(self, maid_id: int, day: date) -> engine.SlotListing:
        """Hourly slots in the fixed business window minus exact-start bookings"""
        existing = self.bookings.get_active_bookings_on_date(self.db, maid_id, day)
        return engine.simple_slots(
            (b.scheduled_time for b in existing), SIMPLE_SLOT_START_HOUR, SIMPLE_SLOT_END_HOUR
        )

    def list_available_slots(self, maid_id: int, day: date) -> engine.SlotListing:
        """Hourly slots inside the maid's weekly window for ``day``"""
        if not self.schedule.get_maid(self.db, maid_id):
            raise NotFoundError("Maid not found")

        # date.weekday() is already Monday=0 .. Sunday=6
        day_schedule = self.schedule.get_day_schedule(self.db, maid_id, day.weekday())
        if day_schedule is None or not day_schedule.is_available:
            logger.debug(f"Maid {maid_id} has no working hours on weekday {day.weekday()}")
            return engine.schedule_slots(day_schedule, [], [])

        blocks = self.schedule.get_blocks_on_date(self.db, maid_id, day)
        existing = self.bookings.get_active_bookings_on_date(self.db, maid_id, day)
        return engine.schedule_slots(day_schedule, blocks, [b.scheduled_time for b in existing])

    def ensure_bookable(self, maid_id: int, day: date, start_time: str, duration: int) -> None:
        """
        Validate a new booking window against schedule, blocks and bookings.

        Raises ValidationError for a window running past midnight and
        ConflictError when the window is not free.
        """
        if time_to_minutes(start_time) + duration > MINUTES_PER_DAY:
            raise ValidationError("Booking must end on the same day it starts")

        # Maids without a weekly schedule are bookable at any hour
        if self.schedule.has_weekly_schedule(self.db, maid_id):
            day_schedule = self.schedule.get_day_schedule(self.db, maid_id, day.weekday())
            if not engine.within_weekly_window(day_schedule, start_time, duration):
                raise ConflictError("The maid is not working at the requested time")

        start, end = engine.booking_window(start_time, duration)
        blocks = self.schedule.get_blocks_on_date(self.db, maid_id, day)
        if engine.overlaps_block(start, end, blocks):
            raise ConflictError("The maid has blocked the requested time")

        if self.has_conflict(maid_id, day, start_time, duration):
            raise ConflictError(
                "This time slot is not available. Please choose a different time."
            )
