"""
Availability engine - pure slot and conflict computations.

Nothing in this module touches the database. Callers pass in the rows they
fetched (ORM objects or anything exposing the same attributes) and get plain
values back, which keeps the arithmetic easy to test in isolation.

Times are HH:MM strings on the wire and minute-of-day integers internally.
All intervals are half-open: [start, end).
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from ...shared.validators import is_valid_time, time_to_minutes

SLOT_MINUTES = 60

NOT_AVAILABLE_ON_DAY = "Maid is not available on this day"
UNAVAILABLE_ON_DATE = "Maid is unavailable on this date"


@dataclass
class SlotListing:
    """Result of a slot enumeration"""

    slots: list[str]
    used_weekly_schedule: bool
    note: Optional[str] = None
    booked_slots: list[str] = field(default_factory=list)
    blocked: list[Any] = field(default_factory=list)
    day_schedule: Optional[Any] = None


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open overlap test; touching endpoints do not overlap"""
    return start_a < end_b and end_a > start_b


def booking_window(start_time: str, duration: int) -> tuple[int, int]:
    start = time_to_minutes(start_time)
    return start, start + duration


def conflicts_with_any(start_time: str, duration: int, bookings: Iterable[Any]) -> bool:
    """
    Check a candidate window against existing bookings.

    Each booking needs ``scheduled_time`` and ``duration``. Returns on the first
    overlap found. A malformed candidate start never conflicts.
    """
    if not is_valid_time(start_time):
        return False
    new_start, new_end = booking_window(start_time, duration)
    for booking in bookings:
        exist_start, exist_end = booking_window(booking.scheduled_time, booking.duration)
        if intervals_overlap(new_start, new_end, exist_start, exist_end):
            return True
    return False


def overlaps_block(start: int, end: int, blocks: Iterable[Any]) -> bool:
    for block in blocks:
        if intervals_overlap(
            start, end, time_to_minutes(block.start_time), time_to_minutes(block.end_time)
        ):
            return True
    return False


def is_full_day_block(block: Any) -> bool:
    return block.start_time == "00:00" and block.end_time == "23:59"


def hourly_slots(start_hour: int, end_hour: int) -> list[str]:
    """Hourly slot labels from start_hour up to (excluding) end_hour"""
    return [f"{hour:02d}:00" for hour in range(start_hour, end_hour)]


def simple_slots(booked_times: Iterable[str], start_hour: int, end_hour: int) -> SlotListing:
    """
    Fixed-window enumeration used by the generic booking availability lookup.

    NOTE: a candidate is dropped only when an active booking starts at exactly
    the same HH:MM. A 90-minute booking at 09:00 does not remove 10:00, and a
    booking at 09:30 removes nothing. The schedule-aware mode below does a
    proper interval check for blocks but keeps the same start-match rule for
    bookings; both are kept as-is because clients rely on either shape.
    """
    booked = list(booked_times)
    slots = [slot for slot in hourly_slots(start_hour, end_hour) if slot not in booked]
    return SlotListing(slots=slots, used_weekly_schedule=False, booked_slots=booked)


def schedule_slots(
    day_schedule: Optional[Any], blocks: list[Any], booked_times: Iterable[str]
) -> SlotListing:
    """
    Enumerate hourly slots inside a maid's weekly window for one date.

    ``day_schedule`` is the WeeklyAvailability row for the date's weekday (or None),
    ``blocks`` the blocked intervals on that date and ``booked_times`` the start
    times of active bookings on that date.
    """
    if day_schedule is None or not day_schedule.is_available:
        return SlotListing(slots=[], used_weekly_schedule=True, note=NOT_AVAILABLE_ON_DAY)

    if any(is_full_day_block(block) for block in blocks):
        return SlotListing(
            slots=[],
            used_weekly_schedule=True,
            note=UNAVAILABLE_ON_DATE,
            blocked=blocks,
            day_schedule=day_schedule,
        )

    booked = list(booked_times)
    # Slots start on the hour of the window start; minutes are ignored
    start_hour = int(day_schedule.start_time.split(":")[0])
    end_hour = int(day_schedule.end_time.split(":")[0])

    slots = []
    for slot in hourly_slots(start_hour, end_hour):
        if slot in booked:
            continue
        slot_start = time_to_minutes(slot)
        if overlaps_block(slot_start, slot_start + SLOT_MINUTES, blocks):
            continue
        slots.append(slot)

    return SlotListing(
        slots=sorted(slots),
        used_weekly_schedule=True,
        booked_slots=booked,
        blocked=blocks,
        day_schedule=day_schedule,
    )


def within_weekly_window(day_schedule: Optional[Any], start_time: str, duration: int) -> bool:
    """True when [start, start+duration) lies inside the day's available window"""
    if day_schedule is None or not day_schedule.is_available:
        return False
    start, end = booking_window(start_time, duration)
    return time_to_minutes(day_schedule.start_time) <= start and end <= time_to_minutes(
        day_schedule.end_time
    )
