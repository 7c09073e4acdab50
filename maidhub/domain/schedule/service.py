"""Schedule service - Validation and persistence of maid working hours and blocked slots"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError, ValidationError
from ...models import DAY_NAMES, BlockedInterval, User, WeeklyAvailability
from ...shared.validators import normalize_time, validate_time_range
from .repository import ScheduleRepository
from .schemas import BlockSlotRequest, WeeklyAvailabilityIn

logger = logging.getLogger(__name__)

FULL_DAY_START = "00:00"
FULL_DAY_END = "23:59"


def validate_weekly_entry(entry: WeeklyAvailabilityIn) -> dict:
    """
    Validate one weekday row and return column values ready for persistence.

    Raises:
        ValidationError: On a bad weekday, missing/malformed times or an inverted range
    """
    if not isinstance(entry.dayOfWeek, int) or not 0 <= entry.dayOfWeek <= 6:
        raise ValidationError("Day of week must be between 0 (Monday) and 6 (Sunday)")

    if not entry.isAvailable:
        return {
            "day_of_week": entry.dayOfWeek,
            "is_available": False,
            "start_time": None,
            "end_time": None,
        }

    day_name = DAY_NAMES[entry.dayOfWeek]
    if not entry.startTime or not entry.endTime:
        raise ValidationError(f"Please provide start and end times for {day_name}")

    try:
        start_time = normalize_time(entry.startTime)
        end_time = normalize_time(entry.endTime)
    except ValidationError:
        raise ValidationError(f"Time must be in HH:MM format (24-hour) for {day_name}") from None

    try:
        validate_time_range(start_time, end_time)
    except ValidationError:
        raise ValidationError(f"End time must be after start time for {day_name}") from None

    return {
        "day_of_week": entry.dayOfWeek,
        "is_available": True,
        "start_time": start_time,
        "end_time": end_time,
    }


def validate_block(
    block_date: Optional[date],
    start_time: Optional[str],
    end_time: Optional[str],
    today: Optional[date] = None,
) -> tuple[date, str, str]:
    """
    Validate a block request. Missing times default to a full-day block.

    Returns the (date, start, end) triple with normalized times.
    """
    if block_date is None:
        raise ValidationError("Please provide a date")

    today = today or date.today()
    if block_date < today:
        raise ValidationError("Cannot block dates in the past")

    start = normalize_time(start_time or FULL_DAY_START)
    end = normalize_time(end_time or FULL_DAY_END)
    validate_time_range(start, end)
    return block_date, start, end


class ScheduleService:
    """Service layer for maid schedule operations"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ScheduleRepository()

    def get_weekly_schedule(self, maid: User) -> list[WeeklyAvailability]:
        return self.repo.get_weekly_schedule(self.db, maid.id)

    def set_weekly_schedule(
        self, maid: User, entries: Optional[list[WeeklyAvailabilityIn]]
    ) -> list[WeeklyAvailability]:
        """Validate every row, then replace the maid's weekly schedule wholesale"""
        if not entries:
            raise ValidationError("Please provide a valid weekly schedule")

        rows = [validate_weekly_entry(entry) for entry in entries]

        seen = set()
        for row in rows:
            if row["day_of_week"] in seen:
                raise ValidationError(
                    f"{DAY_NAMES[row['day_of_week']]} appears more than once in the schedule"
                )
            seen.add(row["day_of_week"])

        schedule = self.repo.replace_weekly_schedule(self.db, maid.id, rows)
        logger.info(f"📅 Weekly schedule updated for maid {maid.id} ({len(rows)} days)")
        return schedule

    def get_blocked_slots(self, maid: User) -> list[BlockedInterval]:
        return self.repo.get_blocked_intervals(self.db, maid.id)

    def block_slot(self, maid: User, data: BlockSlotRequest) -> BlockedInterval:
        block_date, start_time, end_time = validate_block(data.date, data.startTime, data.endTime)

        # Only exact duplicates are rejected; overlapping blocks may coexist
        if self.repo.find_block(self.db, maid.id, block_date, start_time, end_time):
            raise ValidationError("This slot is already blocked")

        block = self.repo.create_block(
            self.db,
            maid.id,
            date=block_date,
            start_time=start_time,
            end_time=end_time,
            reason=data.reason or "Unavailable",
        )
        logger.info(
            f"🚫 Maid {maid.id} blocked {block_date.isoformat()} {start_time}-{end_time}"
        )
        return block

    def unblock_slot(self, maid: User, block_id: int) -> None:
        block = self.repo.get_block_by_id(self.db, block_id, maid.id)
        if not block:
            raise NotFoundError("Blocked slot not found")
        self.repo.delete_block(self.db, block)
        logger.info(f"✅ Maid {maid.id} removed blocked slot {block_id}")
