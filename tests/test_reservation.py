"""
Tests for the Reservation entity: derived totals, payments and the status state machine.
"""
import datetime

import pytest

from xl9045qi.hoteldesk.errors import ValidationError
from xl9045qi.hoteldesk.models import PaymentStatus, Reservation, ReservationStatus


@pytest.fixture
def check_in():
    return datetime.datetime(2026, 3, 11, 14, 0)


@pytest.fixture
def booking(check_in):
    """Three nights at 100.00."""
    return Reservation(id=10001, customer_id=1001, room_number=101, check_in_date=check_in,
                       check_out_date=check_in + datetime.timedelta(days=3), guests=2, room_rate=100.0)


class TestTotals:
    """Test nights, totals and dates."""

    def test_total_is_rate_times_nights(self, booking):
        """Three nights at 100.00 is 300.00, nothing paid yet."""
        assert booking.nights == 3
        assert booking.total_amount == 300.0
        assert booking.due_amount == 300.0
        assert booking.payment_status == PaymentStatus.PENDING
        assert booking.status == ReservationStatus.CONFIRMED
        assert booking.is_valid()

    def test_partial_day_is_floored(self, check_in):
        """A stay of two days and ten hours counts as two nights."""
        booking = Reservation(id=10002, customer_id=1001, room_number=101, check_in_date=check_in,
                              check_out_date=check_in + datetime.timedelta(days=2, hours=10), guests=1,
                              room_rate=120.0)
        assert booking.nights == 2
        assert booking.total_amount == 240.0

    def test_check_out_must_follow_check_in(self, check_in):
        """Check-out on or before check-in is rejected."""
        with pytest.raises(ValidationError):
            Reservation(id=10003, customer_id=1001, room_number=101, check_in_date=check_in,
                        check_out_date=check_in, guests=1, room_rate=100.0)

    def test_stay_needs_a_full_night(self, check_in):
        """A same-day stay has zero nights and is rejected."""
        with pytest.raises(ValidationError):
            Reservation(id=10004, customer_id=1001, room_number=101, check_in_date=check_in,
                        check_out_date=check_in + datetime.timedelta(hours=20), guests=1, room_rate=100.0)

    def test_guests_must_be_positive(self, check_in):
        """Zero guests is rejected."""
        with pytest.raises(ValidationError):
            Reservation(id=10005, customer_id=1001, room_number=101, check_in_date=check_in,
                        check_out_date=check_in + datetime.timedelta(days=1), guests=0, room_rate=100.0)

    def test_set_dates_recomputes_total(self, booking, check_in):
        """New dates change nights and total."""
        booking.set_dates(check_in, check_in + datetime.timedelta(days=5))
        assert booking.nights == 5
        assert booking.total_amount == 500.0

    def test_set_dates_cannot_drop_below_paid(self, booking, check_in):
        """Shortening a stay below what was already paid is refused and nothing changes."""
        booking.make_payment(250.0)
        with pytest.raises(ValidationError):
            booking.set_dates(check_in, check_in + datetime.timedelta(days=2))
        assert booking.nights == 3

    def test_active_and_past(self, booking, check_in):
        """A reservation is active between its dates and past after check-out."""
        assert not booking.is_active(check_in - datetime.timedelta(hours=1))
        assert booking.is_active(check_in + datetime.timedelta(days=1))
        assert booking.is_past(check_in + datetime.timedelta(days=4))
        booking.cancel()
        assert not booking.is_active(check_in + datetime.timedelta(days=1))


class TestPayments:
    """Test partial and full payments."""

    def test_partial_then_full(self, booking):
        """Payment status follows the paid amount."""
        booking.make_payment(100.0)
        assert booking.payment_status == PaymentStatus.PARTIAL
        assert booking.due_amount == 200.0
        booking.make_payment(200.0)
        assert booking.payment_status == PaymentStatus.PAID
        assert booking.due_amount == 0.0

    @pytest.mark.parametrize("amount", [0.0, -5.0, 300.01])
    def test_rejected_amounts(self, booking, amount):
        """Non-positive payments and overpayments are rejected without changing the paid amount."""
        with pytest.raises(ValidationError):
            booking.make_payment(amount)
        assert booking.paid_amount == 0.0

    def test_paid_amount_bounded_on_construction(self, check_in):
        """A stored paid amount larger than the total is invalid."""
        with pytest.raises(ValidationError):
            Reservation(id=10006, customer_id=1001, room_number=101, check_in_date=check_in,
                        check_out_date=check_in + datetime.timedelta(days=1), guests=1, room_rate=100.0,
                        paid_amount=150.0)


class TestStateMachine:
    """Test the Confirmed -> Checked In -> Checked Out and Confirmed -> Cancelled transitions."""

    def test_happy_path(self, booking):
        """Check in then check out."""
        assert booking.check_in()
        assert booking.status == ReservationStatus.CHECKED_IN
        assert booking.check_out()
        assert booking.status == ReservationStatus.CHECKED_OUT

    def test_cancel_only_from_confirmed(self, booking):
        """A checked-in reservation cannot be cancelled."""
        booking.check_in()
        assert not booking.cancel()
        assert booking.status == ReservationStatus.CHECKED_IN

    def test_check_out_requires_check_in(self, booking):
        """Checking out a Confirmed reservation fails."""
        assert not booking.check_out()
        assert booking.status == ReservationStatus.CONFIRMED

    def test_terminal_states(self, booking):
        """Nothing moves a cancelled reservation."""
        assert booking.cancel()
        assert not booking.check_in()
        assert not booking.check_out()
        assert not booking.cancel()
        assert booking.status == ReservationStatus.CANCELLED

    def test_payment_is_independent_of_status(self, booking):
        """Payments are accepted after check-out and leave the status alone."""
        booking.check_in()
        booking.check_out()
        booking.make_payment(300.0)
        assert booking.status == ReservationStatus.CHECKED_OUT
        assert booking.payment_status == PaymentStatus.PAID


class TestNumbersAndZones:
    """Test non-finite amounts and mixed time zones."""

    def test_mixed_time_zones(self, check_in):
        """A zone-aware check-in with a local check-out is a ValidationError, not a TypeError."""
        aware = check_in.replace(tzinfo=datetime.timezone.utc)
        with pytest.raises(ValidationError):
            Reservation(id=10006, customer_id=1001, room_number=101, check_in_date=aware,
                        check_out_date=check_in + datetime.timedelta(days=2), guests=1, room_rate=100.0)

    @pytest.mark.parametrize("amount", [float("nan"), float("inf")])
    def test_non_finite_payment(self, booking, amount):
        """A NaN or infinite payment is refused and nothing is recorded."""
        with pytest.raises(ValidationError):
            booking.make_payment(amount)
        assert booking.paid_amount == 0.0
