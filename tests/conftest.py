"""Shared test fixtures and helpers."""

import os

# Must be set before maidhub.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import date, timedelta  # noqa: E402
from typing import Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from maidhub.database import Base, get_db  # noqa: E402
from maidhub.main import app  # noqa: E402
from maidhub.models import (  # noqa: E402
    BlockedInterval,
    Booking,
    ServiceCategory,
    User,
    WeeklyAvailability,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def maid(db):
    return make_user(db, "maid", name="Rina", email="rina@example.com")


@pytest.fixture
def customer(db):
    return make_user(db, "customer", name="Karim", email="karim@example.com")


@pytest.fixture
def category(db):
    return make_category(db)


def make_user(db, role: str, name: str = "User", email: Optional[str] = None, **kwargs) -> User:
    """Helper to create a user; maids default to approved"""
    if role == "maid":
        kwargs.setdefault("verification_status", "approved")
    user = User(name=name, email=email or f"{name.lower()}@example.com", role=role, **kwargs)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_category(db, name: str = "Home Cleaning", **kwargs) -> ServiceCategory:
    kwargs.setdefault("pricing", [{"duration": 60, "price": 15.0}, {"duration": 120, "price": 28.0}])
    category = ServiceCategory(name=name, **kwargs)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def make_booking(
    db,
    maid: User,
    customer: User,
    category: ServiceCategory,
    scheduled_date: date,
    scheduled_time: str,
    duration: int = 60,
    status: str = "pending",
) -> Booking:
    booking = Booking(
        customer_id=customer.id,
        maid_id=maid.id,
        service_category_id=category.id,
        scheduled_date=scheduled_date,
        scheduled_time=scheduled_time,
        duration=duration,
        status=status,
        total_price=15.0,
        address={"street": "House 12, Road 5", "city": "Dhaka"},
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking


def set_day(db, maid: User, day_of_week: int, start: Optional[str], end: Optional[str]) -> None:
    """Helper to store one weekly row; pass start=None for an unavailable day"""
    db.add(
        WeeklyAvailability(
            maid_id=maid.id,
            day_of_week=day_of_week,
            is_available=start is not None,
            start_time=start,
            end_time=end,
        )
    )
    db.commit()


def block(db, maid: User, day: date, start: str = "00:00", end: str = "23:59") -> BlockedInterval:
    interval = BlockedInterval(maid_id=maid.id, date=day, start_time=start, end_time=end)
    db.add(interval)
    db.commit()
    db.refresh(interval)
    return interval


def next_weekday(weekday: int) -> date:
    """Next date strictly after today that falls on weekday (0=Monday)"""
    today = date.today()
    days_ahead = (weekday - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def auth(user: User) -> dict:
    return {"Authorization": f"Bearer {user.api_token}"}
