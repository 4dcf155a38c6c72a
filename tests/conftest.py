"""
tests/conftest.py

Shared fixtures: a fresh store in a temporary data directory, a fixed clock,
and a low bcrypt cost so employee fixtures stay fast.
"""
import datetime

import pytest

import xl9045qi.hoteldesk.models as models
from xl9045qi.hoteldesk.config import default_job
from xl9045qi.hoteldesk.database import HDDatabase
from xl9045qi.hoteldesk.models import Department, RoomType, Shift


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """bcrypt at its minimum cost."""
    monkeypatch.setattr(models, "PASSWORD_HASH_ROUNDS", 4)


@pytest.fixture
def job(tmp_path):
    """Default job with every path inside tmp_path."""
    job = default_job()
    job['storage']['data_dir'] = str(tmp_path / "data")
    job['storage']['backup_dir'] = str(tmp_path / "backup")
    job['logging']['file'] = str(tmp_path / "logs" / "hotel.log")
    job['logging']['audit_file'] = str(tmp_path / "logs" / "audit.log")
    return job


@pytest.fixture
def db(job):
    """An empty store."""
    return HDDatabase(job)


@pytest.fixture
def now():
    """A fixed point in time."""
    return datetime.datetime(2026, 3, 10, 14, 0, 0)


@pytest.fixture
def room(db):
    """A Standard room for two at 100.00 per night."""
    return db.add_room(RoomType.STANDARD, 100.0, 2, ["WiFi", "TV"])


@pytest.fixture
def customer(db):
    """A registered customer."""
    return db.add_customer("John Smith", "john.smith@email.com", "+1-555-0101",
                           "123 Main Street, New York", "PASSPORT-XYZ123")


@pytest.fixture
def reservation(db, room, customer, now):
    """A Confirmed three-night reservation starting the day after 'now'."""
    check_in = now + datetime.timedelta(days=1)
    return db.make_reservation(customer, room, check_in, check_in + datetime.timedelta(days=3), 2,
                               "Late arrival")


@pytest.fixture
def manager(db):
    """A Management employee (admin) with the default password."""
    return db.add_employee("Robert Wilson", "Front Desk Manager", Department.MANAGEMENT, Shift.MORNING,
                           3500.0, "+1-555-0201", "101 Maple Blvd, New York", "2023-03-15")


@pytest.fixture
def receptionist(db):
    """A Front Desk employee without manager rights."""
    return db.add_employee("Lisa Taylor", "Receptionist", Department.FRONT_DESK, Shift.AFTERNOON,
                           2500.0, "+1-555-0202", "202 Cedar Lane, New York", "2023-01-10")
