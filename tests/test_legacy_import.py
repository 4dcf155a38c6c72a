"""
Tests for converting the old positional .dat files.
"""
import datetime
import os

import pytest

from xl9045qi.hoteldesk.database import HDDatabase
from xl9045qi.hoteldesk.errors import FileCorruptedError
from xl9045qi.hoteldesk.models import Department, ReservationStatus, RoomStatus, RoomType, Shift
from xl9045qi.hoteldesk.tools.legacy_import import (
    import_legacy, parse_legacy_bills, parse_legacy_customers, parse_legacy_employees,
    parse_legacy_reservations, parse_legacy_rooms,
)

CHECK_IN = 1781100000
CHECK_OUT = CHECK_IN + 3 * 86400
BOOKED = CHECK_IN - 5 * 86400

ROOMS = "2\n101 1 1 100.00 2 3 WiFi TV AC\n102 3 4 350.00 4 1 Kitchenette\n"
CUSTOMERS = (
    "1\n"
    f"1001 John Smith|john.smith@email.com|+1-555-0101|123 Main Street, New York|PASSPORT-XYZ123|{BOOKED} 2 550.50\n"
)
RESERVATIONS = f"1\n10001 1001 101 {CHECK_IN} {CHECK_OUT} 2 100.00 300.00 120.00 2 2 Early check-in please {BOOKED}\n"
EMPLOYEES = (
    "1\n"
    "201|Robert Wilson|Front Desk Manager|4|1|3500.00|+1-555-0201|101 Maple Blvd|2023-03-15|robert@hotel.com|secret1\n"
)
BILLS = (
    "2\n"
    f"5001 10001 0.10 0.00 1 Credit Card {CHECK_OUT} 2\n"
    "Room Charge|100.00|3\n"
    "Food - Breakfast|15.00|2\n"
    "5002 10001 0.10 0.05 0  0 0\n"
)


class TestParsers:
    """Test the per-file parsers."""

    def test_rooms(self):
        """Enum codes start at 1 and features are counted."""
        rooms = parse_legacy_rooms(ROOMS)
        assert [r.number for r in rooms] == [101, 102]
        assert rooms[0].type == RoomType.STANDARD
        assert rooms[0].status == RoomStatus.AVAILABLE
        assert rooms[0].features == ["WiFi", "TV", "AC"]
        assert rooms[1].type == RoomType.SUITE
        assert rooms[1].status == RoomStatus.MAINTENANCE

    def test_customers(self):
        """Pipe-separated text fields keep their spaces; the registration time comes from the epoch."""
        customer = parse_legacy_customers(CUSTOMERS)[0]
        assert customer.id == 1001
        assert customer.name == "John Smith"
        assert customer.address == "123 Main Street, New York"
        assert customer.registration_date == datetime.datetime.fromtimestamp(BOOKED)
        assert customer.total_visits == 2
        assert customer.total_spent == pytest.approx(550.5)

    def test_reservations(self):
        """Multi-word requests survive; totals are recomputed rather than read."""
        reservation = parse_legacy_reservations(RESERVATIONS)[0]
        assert reservation.check_in_date == datetime.datetime.fromtimestamp(CHECK_IN)
        assert reservation.nights == 3
        assert reservation.status == ReservationStatus.CHECKED_IN
        assert reservation.special_requests == "Early check-in please"
        assert reservation.total_amount == pytest.approx(300.0)
        assert reservation.due_amount == pytest.approx(180.0)

    def test_employees_get_hashed_passwords(self):
        """Plaintext passwords are replaced by bcrypt hashes."""
        employee = parse_legacy_employees(EMPLOYEES)[0]
        assert employee.department == Department.MANAGEMENT
        assert employee.shift == Shift.MORNING
        assert employee.password_hash != "secret1"
        assert employee.authenticate("secret1")

    def test_bills(self):
        """Payment methods may be several words; unpaid bills have no payment date."""
        paid, unpaid = parse_legacy_bills(BILLS)
        assert paid.is_paid
        assert paid.payment_method == "Credit Card"
        assert paid.payment_date == datetime.datetime.fromtimestamp(CHECK_OUT)
        assert [item.description for item in paid.items] == ["Room Charge", "Food - Breakfast"]
        assert paid.subtotal == pytest.approx(330.0)
        assert not unpaid.is_paid
        assert unpaid.payment_method == ""
        assert unpaid.payment_date is None
        assert unpaid.items == []

    def test_count_mismatch(self):
        """A header that disagrees with the records is corruption."""
        with pytest.raises(FileCorruptedError) as exc_info:
            parse_legacy_rooms("3\n101 1 1 100.00 2 0\n")
        assert "3 record(s)" in exc_info.value.message

    def test_bad_line(self):
        """Unknown enum codes are reported with their line number."""
        with pytest.raises(FileCorruptedError) as exc_info:
            parse_legacy_rooms("1\n101 9 1 100.00 2 0\n")
        assert "line 2" in exc_info.value.message


class TestImport:
    """Test import_legacy end to end."""

    def test_converted_files_load(self, tmp_path, job):
        """The converted directory is a valid store."""
        legacy = tmp_path / "legacy"
        legacy.mkdir()
        for name, text in [("rooms.dat", ROOMS), ("customers.dat", CUSTOMERS),
                           ("reservations.dat", RESERVATIONS), ("employees.dat", EMPLOYEES),
                           ("bills.dat", BILLS)]:
            (legacy / name).write_text(text)

        out = job['storage']['data_dir']
        converted = import_legacy(str(legacy), out)
        assert converted == {"rooms": 2, "customers": 1, "reservations": 1, "employees": 1, "bills": 2}

        db = HDDatabase(job)
        assert db.get_room_count() == 2
        assert db.find_reservation(10001).special_requests == "Early check-in please"
        assert db.authenticate_employee("robert@hotel.com", "secret1") is not None
        assert db.find_bill(5001).total == pytest.approx(363.0)
        # New records continue after the imported ids
        assert db.add_room(RoomType.DELUXE, 200.0, 2) == 103

    def test_missing_files_are_skipped(self, tmp_path):
        """Only files that exist are converted."""
        legacy = tmp_path / "legacy"
        legacy.mkdir()
        (legacy / "rooms.dat").write_text(ROOMS)
        out = tmp_path / "out"
        assert import_legacy(str(legacy), str(out)) == {"rooms": 2}
        assert os.path.exists(out / "rooms.dat")
        assert not os.path.exists(out / "bills.dat")
