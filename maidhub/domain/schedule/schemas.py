"""Schedule domain schemas - Pydantic models for maid schedule endpoints"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class WeeklyAvailabilityIn(BaseModel):
    """One weekday row as submitted by the maid; range checks happen in the service"""

    dayOfWeek: int
    isAvailable: bool = False
    startTime: Optional[str] = None
    endTime: Optional[str] = None


class WeeklyScheduleUpdate(BaseModel):
    weeklySchedule: Optional[list[WeeklyAvailabilityIn]] = None


class WeeklyAvailabilityResponse(BaseModel):
    id: int
    dayOfWeek: int
    isAvailable: bool
    startTime: Optional[str]
    endTime: Optional[str]

    @classmethod
    def from_row(cls, row) -> "WeeklyAvailabilityResponse":
        return cls(
            id=row.id,
            dayOfWeek=row.day_of_week,
            isAvailable=row.is_available,
            startTime=row.start_time,
            endTime=row.end_time,
        )


class BlockSlotRequest(BaseModel):
    date: Optional[dt.date] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    reason: Optional[str] = None


class BlockedIntervalResponse(BaseModel):
    id: int
    date: dt.date
    startTime: str
    endTime: str
    reason: Optional[str]

    @classmethod
    def from_row(cls, row) -> "BlockedIntervalResponse":
        return cls(
            id=row.id,
            date=row.date,
            startTime=row.start_time,
            endTime=row.end_time,
            reason=row.reason,
        )
