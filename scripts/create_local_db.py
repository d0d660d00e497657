#!/usr/bin/env python3
"""Create the schema and seed sample data for local development.

Targets whatever store the environment selects (SQLite file by default,
PostgreSQL when DATABASE_URL or DATABASE_BACKEND=postgres is set). Sample
users and trips are only inserted into an empty users table.

Usage:
    python scripts/create_local_db.py
"""

import datetime as dt
import sys
from pathlib import Path

from sqlalchemy import func, select

# Add src to path for core imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import get_config
from core.db import User, create_store
from core.models.enums import AvailabilityType, CapacityClass
from core.models.trip import TripCreate
from core.models.user import UserCreate
from core.services.trips import create_trip
from core.services.users import register_user

SAMPLE_USERS = [
    UserCreate(email="marie.dupont@email.com", name="Marie Dupont", phone="0612345678"),
    UserCreate(email="thomas.martin@email.com", name="Thomas Martin", phone="0623456789"),
    UserCreate(email="sophie.bernard@email.com", name="Sophie Bernard", phone="0634567890"),
]

# (owner index into SAMPLE_USERS, trip)
SAMPLE_TRIPS = [
    (0, TripCreate(
        departure_city="Paris", departure_lat=48.8566, departure_lng=2.3522,
        arrival_city="Lyon", arrival_lat=45.7640, arrival_lng=4.8357,
        date=dt.date(2025, 12, 15), time=dt.time(8, 0),
        description="Regular run, room for medium-sized parcels.",
        availability_type=AvailabilityType.BOTH, capacity=CapacityClass.MEDIUM,
    )),
    (1, TripCreate(
        departure_city="Marseille", departure_lat=43.2965, departure_lng=5.3698,
        arrival_city="Nice", arrival_lat=43.7102, arrival_lng=7.2620,
        date=dt.date(2025, 12, 16), time=dt.time(10, 30),
        description="Short coastal trip, small parcels only.",
        availability_type=AvailabilityType.DELIVERY, capacity=CapacityClass.SMALL,
    )),
    (2, TripCreate(
        departure_city="Bordeaux", departure_lat=44.8378, departure_lng=-0.5792,
        arrival_city="Toulouse", arrival_lat=43.6047, arrival_lng=1.4442,
        date=dt.date(2025, 12, 17), time=dt.time(14, 0),
        description="Big car, can carry large volumes.",
        availability_type=AvailabilityType.BOTH, capacity=CapacityClass.LARGE,
    )),
    (0, TripCreate(
        departure_city="Lyon", departure_lat=45.7640, departure_lng=4.8357,
        arrival_city="Grenoble", arrival_lat=45.1885, arrival_lng=5.7245,
        date=dt.date(2025, 12, 18), time=dt.time(9, 0),
        description="Mountain route, fragile parcels welcome.",
        availability_type=AvailabilityType.PICKUP, capacity=CapacityClass.MEDIUM,
    )),
    (1, TripCreate(
        departure_city="Lille", departure_lat=50.6292, departure_lng=3.0573,
        arrival_city="Paris", arrival_lat=48.8566, arrival_lng=2.3522,
        date=dt.date(2025, 12, 20), time=dt.time(7, 30),
        description="Early start, trunk available.",
        availability_type=AvailabilityType.BOTH, capacity=CapacityClass.LARGE,
    )),
    (2, TripCreate(
        departure_city="Nantes", departure_lat=47.2184, departure_lng=-1.5536,
        arrival_city="Rennes", arrival_lat=48.1173, arrival_lng=-1.6778,
        date=dt.date(2025, 12, 22), time=dt.time(16, 0),
        description="Late afternoon run to Rennes.",
        availability_type=AvailabilityType.DELIVERY, capacity=CapacityClass.SMALL,
    )),
]


def seed(store):
    """Insert the sample users and trips if the users table is empty."""
    with store.session() as session:
        existing = session.scalar(select(func.count(User.id)))
    if existing:
        print(f"✓ {existing} users already present, skipping sample data")
        return

    user_ids = [register_user(store, user).id for user in SAMPLE_USERS]
    print(f"✓ Inserted {len(user_ids)} sample users")
    for owner_index, trip in SAMPLE_TRIPS:
        create_trip(store, user_ids[owner_index], trip)
    print(f"✓ Inserted {len(SAMPLE_TRIPS)} sample trips")


def main():
    """Create all tables, then seed."""
    config = get_config()

    print(f"Preparing {config.database_backend} store...")
    print()

    with create_store(config) as store:
        store.create_schema()
        print("✓ Schema ready")
        seed(store)

    print()
    print("✅ Local database ready")


if __name__ == "__main__":
    main()
