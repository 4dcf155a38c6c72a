"""
Tests for console rendering of stored text.
"""
import io

import pytest
from rich.console import Console

from xl9045qi.hoteldesk.console import HotelConsole
from xl9045qi.hoteldesk.errors import ValidationError


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def desk(db, output):
    return HotelConsole(db, console=Console(file=output, width=200, color_system=None))


class TestMarkupInUserText:
    """Text typed by operators is shown as-is, never read as rich markup."""

    def test_customer_table(self, db, desk, output):
        """Brackets in a name are printed literally."""
        db.add_customer("[bold]Eve[/] Adams", "eve@email.com", "+1-555-0199", "1 [red]Main[/] St", "DL-1")
        desk.show_customers(db.customers)
        assert "[bold]Eve[/] Adams" in output.getvalue()

    def test_bill_items_and_payment_method(self, db, desk, output, reservation):
        """Item descriptions and payment methods with markup do not break the bill view."""
        bill_id = db.create_bill(reservation)
        db.add_bill_item(bill_id, "Minibar [/]", 12.0)
        db.process_payment(bill_id, "[link]Voucher")
        desk.show_bill(db.find_bill(bill_id))
        text = output.getvalue()
        assert "Minibar [/]" in text
        assert "[link]Voucher" in text

    def test_error_message(self, desk, output):
        """A closing tag in an error message is shown, not parsed."""
        desk.error(ValidationError("bad value [/]", "name"))
        assert "[/]" in output.getvalue()
