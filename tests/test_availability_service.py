"""Availability service against a real (SQLite) session."""

from datetime import date

import pytest

from maidhub.domain.availability import AvailabilityService
from maidhub.exceptions import ConflictError, NotFoundError, ValidationError
from tests.conftest import block, make_booking, make_user, next_weekday, set_day

WEDNESDAY = 2


@pytest.fixture
def service(db):
    return AvailabilityService(db)


@pytest.fixture
def wednesday():
    return next_weekday(WEDNESDAY)


class TestHasConflict:
    def test_no_bookings_that_day(self, service, maid):
        assert service.has_conflict(maid.id, date(2025, 6, 10), "10:00", 60) is False

    def test_longer_request_over_short_booking(self, db, service, maid, customer, category):
        make_booking(db, maid, customer, category, date(2025, 6, 10), "10:00", 30, "accepted")
        assert service.has_conflict(maid.id, date(2025, 6, 10), "10:00", 60) is True

    def test_touching_boundary(self, db, service, maid, customer, category):
        make_booking(db, maid, customer, category, date(2025, 6, 10), "09:00", 60)
        assert service.has_conflict(maid.id, date(2025, 6, 10), "10:00", 60) is False

    @pytest.mark.parametrize("status", ["cancelled", "rejected", "completed"])
    def test_inactive_bookings_never_conflict(self, db, service, maid, customer, category, status):
        make_booking(db, maid, customer, category, date(2025, 6, 10), "10:00", 120, status)
        assert service.has_conflict(maid.id, date(2025, 6, 10), "10:30", 30) is False

    def test_other_day_ignored(self, db, service, maid, customer, category):
        make_booking(db, maid, customer, category, date(2025, 6, 11), "10:00", 60)
        assert service.has_conflict(maid.id, date(2025, 6, 10), "10:00", 60) is False

    def test_other_maid_ignored(self, db, service, maid, customer, category):
        other = make_user(db, "maid", name="Other", email="other@example.com")
        make_booking(db, other, customer, category, date(2025, 6, 10), "10:00", 60)
        assert service.has_conflict(maid.id, date(2025, 6, 10), "10:00", 60) is False

    def test_excluded_booking(self, db, service, maid, customer, category):
        existing = make_booking(db, maid, customer, category, date(2025, 6, 10), "10:00", 60)
        assert service.has_conflict(
            maid.id, date(2025, 6, 10), "10:15", 30, exclude_booking_id=existing.id
        ) is False

    def test_malformed_start_without_bookings(self, service, maid):
        assert service.has_conflict(maid.id, date(2025, 6, 10), "10h00", 60) is False

    def test_malformed_start_with_bookings(self, db, service, maid, customer, category):
        make_booking(db, maid, customer, category, date(2025, 6, 10), "10:00", 60)
        assert service.has_conflict(maid.id, date(2025, 6, 10), "10h00", 60) is False

    def test_non_positive_duration(self, service, maid):
        with pytest.raises(ValidationError):
            service.has_conflict(maid.id, date(2025, 6, 10), "10:00", 0)


class TestScheduleAwareSlots:
    def test_open_morning(self, db, service, maid, wednesday):
        set_day(db, maid, WEDNESDAY, "09:00", "12:00")
        listing = service.list_available_slots(maid.id, wednesday)
        assert listing.slots == ["09:00", "10:00", "11:00"]
        assert listing.used_weekly_schedule is True

    def test_accepted_booking_removes_slot(self, db, service, maid, customer, category, wednesday):
        set_day(db, maid, WEDNESDAY, "09:00", "12:00")
        make_booking(db, maid, customer, category, wednesday, "10:00", 60, "accepted")
        assert service.list_available_slots(maid.id, wednesday).slots == ["09:00", "11:00"]

    def test_cancelled_booking_keeps_slot(self, db, service, maid, customer, category, wednesday):
        set_day(db, maid, WEDNESDAY, "09:00", "12:00")
        make_booking(db, maid, customer, category, wednesday, "10:00", 60, "cancelled")
        assert service.list_available_slots(maid.id, wednesday).slots == [
            "09:00",
            "10:00",
            "11:00",
        ]

    def test_partial_block(self, db, service, maid, wednesday):
        set_day(db, maid, WEDNESDAY, "09:00", "12:00")
        block(db, maid, wednesday, "09:30", "10:30")
        assert service.list_available_slots(maid.id, wednesday).slots == ["11:00"]

    def test_block_on_other_date_ignored(self, db, service, maid, wednesday):
        set_day(db, maid, WEDNESDAY, "09:00", "12:00")
        block(db, maid, next_weekday(3), "09:00", "12:00")
        assert service.list_available_slots(maid.id, wednesday).slots == [
            "09:00",
            "10:00",
            "11:00",
        ]

    def test_unavailable_weekday(self, db, service, maid, customer, category, wednesday):
        set_day(db, maid, WEDNESDAY, None, None)
        make_booking(db, maid, customer, category, wednesday, "10:00", 60)
        listing = service.list_available_slots(maid.id, wednesday)
        assert listing.slots == []
        assert listing.note == "Maid is not available on this day"

    def test_no_row_for_weekday(self, db, service, maid):
        set_day(db, maid, 0, "09:00", "17:00")
        listing = service.list_available_slots(maid.id, next_weekday(4))
        assert listing.slots == []
        assert listing.note

    def test_full_day_block(self, db, service, maid, wednesday):
        set_day(db, maid, WEDNESDAY, "09:00", "12:00")
        block(db, maid, wednesday)
        listing = service.list_available_slots(maid.id, wednesday)
        assert listing.slots == []
        assert listing.note == "Maid is unavailable on this date"

    def test_repeated_calls_identical(self, db, service, maid, customer, category, wednesday):
        set_day(db, maid, WEDNESDAY, "08:00", "18:00")
        block(db, maid, wednesday, "12:00", "13:30")
        make_booking(db, maid, customer, category, wednesday, "15:00", 60)
        first = service.list_available_slots(maid.id, wednesday).slots
        second = service.list_available_slots(maid.id, wednesday).slots
        assert first == second
        assert first == sorted(first)

    def test_unknown_maid(self, service):
        with pytest.raises(NotFoundError):
            service.list_available_slots(9999, date(2025, 6, 10))

    def test_customer_is_not_a_maid(self, service, customer):
        with pytest.raises(NotFoundError):
            service.list_available_slots(customer.id, date(2025, 6, 10))


class TestSimpleSlots:
    def test_fixed_window(self, service, maid):
        listing = service.list_simple_slots(maid.id, date(2025, 6, 10))
        assert listing.slots == [f"{h:02d}:00" for h in range(9, 18)]

    def test_active_booking_starts_removed(self, db, service, maid, customer, category):
        make_booking(db, maid, customer, category, date(2025, 6, 10), "11:00", 120, "pending")
        make_booking(db, maid, customer, category, date(2025, 6, 10), "14:00", 60, "rejected")
        listing = service.list_simple_slots(maid.id, date(2025, 6, 10))
        assert "11:00" not in listing.slots
        # Start-match only: the second hour of the 2h booking stays listed
        assert "12:00" in listing.slots
        assert "14:00" in listing.slots
        assert listing.booked_slots == ["11:00"]


class TestEnsureBookable:
    def test_free_maid_without_schedule(self, service, maid, wednesday):
        service.ensure_bookable(maid.id, wednesday, "07:00", 60)

    def test_outside_weekly_window(self, db, service, maid, wednesday):
        set_day(db, maid, WEDNESDAY, "09:00", "12:00")
        with pytest.raises(ConflictError, match="not working"):
            service.ensure_bookable(maid.id, wednesday, "11:30", 60)

    def test_blocked(self, db, service, maid, wednesday):
        block(db, maid, wednesday, "13:00", "14:00")
        with pytest.raises(ConflictError, match="blocked"):
            service.ensure_bookable(maid.id, wednesday, "12:30", 60)

    def test_overlapping_booking(self, db, service, maid, customer, category, wednesday):
        make_booking(db, maid, customer, category, wednesday, "10:00", 90)
        with pytest.raises(ConflictError, match="not available"):
            service.ensure_bookable(maid.id, wednesday, "11:00", 60)

    def test_past_midnight(self, service, maid, wednesday):
        with pytest.raises(ValidationError):
            service.ensure_bookable(maid.id, wednesday, "23:30", 60)
