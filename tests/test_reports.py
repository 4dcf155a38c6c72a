"""
Tests for the revenue, occupancy and customer reports.
"""
import datetime

import pytest

from xl9045qi.hoteldesk import reports
from xl9045qi.hoteldesk.models import RoomType


class TestRevenueReport:
    """Test revenue_report."""

    def test_paid_and_unpaid(self, db, reservation):
        """Paid bills count as revenue; unpaid ones as outstanding balance."""
        paid = db.create_bill(reservation, tax_rate=0.0)
        db.add_bill_item(paid, "Room Charge", 100.0, 3)
        db.process_payment(paid, "Cash")
        unpaid = db.create_bill(reservation, tax_rate=0.0)
        db.add_bill_item(unpaid, "Spa Treatment", 100.0)
        db.make_reservation_payment(reservation, 120.0)

        report = reports.revenue_report(db)
        assert report["total_revenue"] == pytest.approx(300.0)
        assert report["today_revenue"] == pytest.approx(300.0)
        assert report["paid_bills"] == 1
        assert report["unpaid_bills"] == 1
        assert report["outstanding_balance"] == pytest.approx(100.0)
        assert report["reservation_payments_received"] == pytest.approx(120.0)
        assert report["reservation_payments_due"] == pytest.approx(180.0)
        assert len(report["daily_revenue"]) == 7

    def test_empty_store(self, db):
        """An empty store reports zeros."""
        report = reports.revenue_report(db)
        assert report["total_revenue"] == 0
        assert report["unpaid_bills"] == 0


class TestOccupancyReport:
    """Test occupancy_report."""

    def test_counts(self, db, customer, now):
        """Rooms are counted by status and type."""
        standard = db.add_room(RoomType.STANDARD, 100.0, 2)
        db.add_room(RoomType.STANDARD, 100.0, 2)
        db.add_room(RoomType.SUITE, 400.0, 4)
        reservation = db.make_reservation(customer, standard, now, now + datetime.timedelta(days=1), 1)
        db.check_in(reservation)

        report = reports.occupancy_report(db)
        assert report["total_rooms"] == 3
        assert report["by_status"] == {"Available": 2, "Occupied": 1, "Reserved": 0, "Maintenance": 0}
        assert report["by_type"] == {
            "Standard": {"rooms": 2, "available": 1},
            "Suite": {"rooms": 1, "available": 1},
        }
        assert report["occupancy_rate"] == {"Standard": 50, "Suite": 0}
        assert report["overall_occupancy_percent"] == pytest.approx(100.0 / 3)
        assert report["popular_rooms"] == [("Standard", 1)]

    def test_no_rooms(self, db):
        """No rooms means zero occupancy rather than a division error."""
        assert reports.occupancy_report(db)["overall_occupancy_percent"] == 0.0


class TestCustomerReport:
    """Test customer_report."""

    def test_ranking(self, db, customer):
        """Customers are ranked by lifetime spend."""
        other = db.add_customer("Emma Johnson", "emma.j@email.com", "+1-555-0102", "456 Oak Ave", "DL-2")
        db.record_customer_visit(customer, 100.0)
        db.record_customer_visit(other, 400.0)
        db.record_customer_visit(other, 50.0)

        report = reports.customer_report(db)
        assert report["total_customers"] == 2
        assert report["returning_customers"] == 1
        assert report["new_this_month"] == 2
        assert report["total_visits"] == 3
        assert report["lifetime_spend"] == pytest.approx(550.0)
        assert [c["id"] for c in report["top_customers"]] == [other, customer]

    def test_new_this_month_uses_reference_time(self, db, customer):
        """Registrations are compared with the given month."""
        next_year = datetime.datetime.now() + datetime.timedelta(days=400)
        assert reports.customer_report(db, now=next_year)["new_this_month"] == 0
