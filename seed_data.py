#!/usr/bin/env python3
"""
Script to seed a local database with an admin, a verified maid, a customer
and the default service categories.

Usage: python seed_data.py
"""

from maidhub import models  # noqa: F401
from maidhub.database import Base, SessionLocal, engine
from maidhub.models import ServiceCategory, User, WeeklyAvailability

DEFAULT_CATEGORIES = [
    {
        "name": "Home Cleaning",
        "icon": "🧹",
        "description": "Regular cleaning of rooms, kitchen and bathrooms.",
        "pricing": [{"duration": 60, "price": 15.0}, {"duration": 120, "price": 28.0}],
    },
    {
        "name": "Deep Cleaning",
        "icon": "🧽",
        "description": "Thorough cleaning including appliances and hard-to-reach areas.",
        "pricing": [{"duration": 180, "price": 45.0}, {"duration": 240, "price": 58.0}],
    },
    {
        "name": "Laundry & Ironing",
        "icon": "👕",
        "description": "Washing, drying and ironing of clothes.",
        "pricing": [{"duration": 60, "price": 12.0}],
    },
]

SEED_USERS = [
    {"name": "System Admin", "email": "admin@maidhub.local", "role": "admin"},
    {
        "name": "Rina Akter",
        "email": "maid@maidhub.local",
        "role": "maid",
        "verification_status": "approved",
        "experience": 4,
        "skills": ["cleaning", "laundry"],
    },
    {"name": "Demo Customer", "email": "customer@maidhub.local", "role": "customer"},
]


def seed(db) -> dict:
    """Insert missing seed rows; returns {email: api_token} for the seed users"""
    for data in DEFAULT_CATEGORIES:
        if not db.query(ServiceCategory).filter(ServiceCategory.name == data["name"]).first():
            db.add(ServiceCategory(**data))
            print(f"   ✅ Added category '{data['name']}'")

    tokens = {}
    for data in SEED_USERS:
        user = db.query(User).filter(User.email == data["email"]).first()
        if not user:
            user = User(**data)
            db.add(user)
            db.flush()
            print(f"   ✅ Added {data['role']} {data['email']}")
            if user.role == "maid":
                # Monday to Friday, 09:00-17:00
                for day in range(7):
                    db.add(
                        WeeklyAvailability(
                            maid_id=user.id,
                            day_of_week=day,
                            is_available=day < 5,
                            start_time="09:00" if day < 5 else None,
                            end_time="17:00" if day < 5 else None,
                        )
                    )
        tokens[user.email] = user.api_token

    db.commit()
    return tokens


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        print("🔍 Seeding database...\n")
        tokens = seed(db)
        print("\n🔑 API tokens:")
        for email, token in tokens.items():
            print(f"   {email}: {token}")
    except Exception as e:
        print(f"❌ Seeding failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
