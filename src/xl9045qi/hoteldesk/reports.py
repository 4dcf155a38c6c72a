import datetime
from typing import Optional

from xl9045qi.hoteldesk.models import ReservationStatus, RoomStatus, RoomType


def revenue_report(db, today: Optional[datetime.date] = None) -> dict:
    """Revenue figures for the reports menu.

    Returns:
        dict: total and today's revenue from paid bills, the outstanding balance of
        unpaid bills, the last seven days by payment date, and reservation payments
        still due.
    """
    today = today or datetime.date.today()
    unpaid = db.find_unpaid_bills()
    open_reservations = [
        r for r in db.reservations
        if r.status in (ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN)
    ]
    return {
        "total_revenue": db.calculate_total_revenue(),
        "today_revenue": db.calculate_today_revenue(today),
        "daily_revenue": db.get_daily_revenue(7, today),
        "paid_bills": db.get_bill_count() - len(unpaid),
        "unpaid_bills": len(unpaid),
        "outstanding_balance": sum(bill.balance_due for bill in unpaid),
        "reservation_payments_received": sum(r.paid_amount for r in open_reservations),
        "reservation_payments_due": sum(r.due_amount for r in open_reservations),
    }

def occupancy_report(db) -> dict:
    rooms = db.rooms
    by_status = {status.value: 0 for status in RoomStatus}
    by_type = {}
    for room in rooms:
        by_status[room.status.value] += 1
        entry = by_type.setdefault(room.type.value, {"rooms": 0, "available": 0})
        entry["rooms"] += 1
        if room.is_available():
            entry["available"] += 1

    # Keep room types in their natural order
    by_type = {t.value: by_type[t.value] for t in RoomType if t.value in by_type}

    total = len(rooms)
    return {
        "total_rooms": total,
        "by_status": by_status,
        "by_type": by_type,
        "occupancy_rate": db.get_occupancy_rate(),
        "overall_occupancy_percent": 100.0 * by_status[RoomStatus.OCCUPIED.value] / total if total else 0.0,
        "popular_rooms": db.get_popular_rooms(),
    }

def customer_report(db, now: Optional[datetime.datetime] = None, top: int = 5) -> dict:
    now = now or datetime.datetime.now()
    customers = db.customers
    ranked = sorted(customers, key=lambda c: (-c.total_spent, c.id))
    new_this_month = [
        c for c in customers
        if c.registration_date.year == now.year and c.registration_date.month == now.month
    ]
    return {
        "total_customers": len(customers),
        "returning_customers": sum(1 for c in customers if c.total_visits > 1),
        "new_this_month": len(new_this_month),
        "total_visits": sum(c.total_visits for c in customers),
        "lifetime_spend": sum(c.total_spent for c in customers),
        "top_customers": [
            {"id": c.id, "name": c.name, "visits": c.total_visits, "spent": c.total_spent}
            for c in ranked[:top]
        ],
    }
