"""Concurrent booking creation against a file-backed SQLite database."""

import threading
import time

import pytest
from sqlalchemy.orm import sessionmaker

from maidhub.database import Base, build_engine
from maidhub.domain.availability import AvailabilityService
from maidhub.domain.bookings.schemas import BookingCreate
from maidhub.domain.bookings.service import BookingService
from maidhub.exceptions import ConflictError
from maidhub.models import Booking, User
from tests.conftest import make_category, make_user, next_weekday


@pytest.fixture
def file_sessions(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'bookings.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def test_overlapping_requests_with_different_starts(file_sessions, monkeypatch):
    with file_sessions() as setup:
        maid_id = make_user(setup, "maid", name="Rina", email="rina@example.com").id
        customer_id = make_user(setup, "customer", name="Karim", email="karim@example.com").id
        category_id = make_category(setup).id

    wednesday = next_weekday(2)
    first_checked = threading.Event()
    release = threading.Event()
    outcomes = {}

    real_ensure_bookable = AvailabilityService.ensure_bookable

    def ensure_then_wait(self, *args, **kwargs):
        real_ensure_bookable(self, *args, **kwargs)
        if threading.current_thread().name == "first":
            # Hold the first request between its check and its insert
            first_checked.set()
            release.wait(timeout=5)

    monkeypatch.setattr(AvailabilityService, "ensure_bookable", ensure_then_wait)

    def book(start_time):
        data = BookingCreate(
            maidId=maid_id,
            serviceCategoryId=category_id,
            scheduledDate=wednesday,
            scheduledTime=start_time,
            duration=60,
            address={"street": "House 12, Road 5", "city": "Dhaka"},
        )
        with file_sessions() as session:
            try:
                customer = session.get(User, customer_id)
                booking = BookingService(session).create_booking(data, customer)
                outcomes[start_time] = booking.scheduled_time
            except ConflictError as e:
                outcomes[start_time] = e

    first = threading.Thread(target=book, args=("10:00",), name="first")
    second = threading.Thread(target=book, args=("10:30",), name="second")

    first.start()
    assert first_checked.wait(timeout=5)
    second.start()
    time.sleep(0.5)
    release.set()
    first.join(timeout=20)
    second.join(timeout=20)

    assert outcomes["10:00"] == "10:00"
    assert isinstance(outcomes["10:30"], ConflictError)
    with file_sessions() as check:
        assert check.query(Booking).filter(Booking.maid_id == maid_id).count() == 1
