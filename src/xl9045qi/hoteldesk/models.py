import datetime
import math
from dataclasses import field
from enum import Enum
from typing import Optional

import bcrypt
from pydantic.dataclasses import dataclass

from xl9045qi.hoteldesk import data, is_valid_email, is_valid_phone, nights_between
from xl9045qi.hoteldesk.errors import ValidationError, BillAlreadyPaidError

# bcrypt work factor used when hashing employee passwords
PASSWORD_HASH_ROUNDS = data.job['security']['bcrypt_rounds']

# Tolerance for comparing money amounts built from float arithmetic
EPSILON = 1e-9


class RoomType(str, Enum):
    STANDARD = "Standard"
    DELUXE = "Deluxe"
    SUITE = "Suite"
    PRESIDENTIAL = "Presidential"


class RoomStatus(str, Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    RESERVED = "Reserved"
    MAINTENANCE = "Maintenance"


class ReservationStatus(str, Enum):
    CONFIRMED = "Confirmed"
    CHECKED_IN = "Checked In"
    CHECKED_OUT = "Checked Out"
    CANCELLED = "Cancelled"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PARTIAL = "Partial"
    PAID = "Paid"


class Department(str, Enum):
    FRONT_DESK = "Front Desk"
    HOUSEKEEPING = "Housekeeping"
    KITCHEN = "Kitchen"
    MANAGEMENT = "Management"


class Shift(str, Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    NIGHT = "Night"


SHIFT_HOURS = {
    Shift.MORNING: "8AM-4PM",
    Shift.AFTERNOON: "4PM-12AM",
    Shift.NIGHT: "12AM-8AM",
}


def _require_text(value: str, field_name: str):
    if not value or not value.strip():
        raise ValidationError("cannot be empty", field_name)

def _require_finite(value, field_name: str):
    # NaN compares False against everything
    if not math.isfinite(value):
        raise ValidationError("must be a finite number", field_name, value)

def _require_positive(value, field_name: str):
    _require_finite(value, field_name)
    if value <= 0:
        raise ValidationError("must be positive", field_name, value)

def _require_non_negative(value, field_name: str):
    _require_finite(value, field_name)
    if value < 0:
        raise ValidationError("cannot be negative", field_name, value)

def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


@dataclass
class Room:
    """A bookable room."""
    number: int
    type: RoomType
    price_per_night: float
    capacity: int
    features: list[str] = field(default_factory=list)
    status: RoomStatus = RoomStatus.AVAILABLE

    def __post_init__(self):
        _require_positive(self.number, "number")
        _require_positive(self.price_per_night, "price_per_night")
        _require_positive(self.capacity, "capacity")

    @property
    def features_string(self) -> str:
        return ", ".join(self.features) if self.features else "None"

    def is_available(self) -> bool:
        return self.status == RoomStatus.AVAILABLE

    def can_accommodate(self, guests: int) -> bool:
        return guests <= self.capacity

    def calculate_stay_cost(self, nights: int) -> float:
        _require_positive(nights, "nights")
        return self.price_per_night * nights

    def set_price(self, price: float):
        _require_positive(price, "price_per_night")
        self.price_per_night = price

    def add_feature(self, feature: str):
        if feature:
            self.features.append(feature)

    def set_features(self, features):
        self.features = list(features)

    def is_valid(self) -> bool:
        return self.number > 0 and self.price_per_night > 0 and self.capacity > 0


@dataclass
class Customer:
    """A registered guest."""
    id: int
    name: str
    email: str
    phone: str
    address: str
    id_proof: str
    registration_date: datetime.datetime = field(default_factory=datetime.datetime.now)
    total_visits: int = 0
    total_spent: float = 0.0

    def __post_init__(self):
        _require_positive(self.id, "id")
        _require_text(self.name, "name")
        _check_email(self.email)
        _check_phone(self.phone)
        _require_text(self.address, "address")
        _require_text(self.id_proof, "id_proof")
        _require_non_negative(self.total_visits, "total_visits")
        _require_non_negative(self.total_spent, "total_spent")

    def add_visit(self, amount: float):
        """Record one completed visit and what was spent on it."""
        _require_non_negative(amount, "amount")
        self.total_visits += 1
        self.total_spent += amount

    def update_info(self, phone: str, email: str, address: str):
        # Check everything first so a bad field leaves the record untouched
        _check_phone(phone)
        _check_email(email)
        _require_text(address, "address")
        self.phone = phone
        self.email = email
        self.address = address

    def is_valid(self) -> bool:
        return self.id > 0 and bool(self.name.strip()) and is_valid_email(self.email) and \
            is_valid_phone(self.phone) and bool(self.address.strip()) and bool(self.id_proof.strip())


def _check_email(email: str):
    if not is_valid_email(email):
        raise ValidationError("invalid email format", "email", email)

def _check_phone(phone: str):
    if not is_valid_phone(phone):
        raise ValidationError("invalid phone number format", "phone", phone)


@dataclass
class Employee:
    """A staff member who can log in to the desk."""
    id: int
    name: str
    position: str
    department: Department
    shift: Shift
    salary: float
    contact_number: str
    address: str
    join_date: str
    email: str = ""
    password_hash: str = ""

    def __post_init__(self):
        _require_positive(self.id, "id")
        _require_text(self.name, "name")
        _require_text(self.position, "position")
        _require_positive(self.salary, "salary")
        _check_phone(self.contact_number)
        _require_text(self.address, "address")
        _require_text(self.join_date, "join_date")

        if not self.email:
            first_name = self.name.strip().split(" ")[0].lower()
            self.email = f"{first_name}@{data.employees['email_domain']}"
        _check_email(self.email)

        if not self.password_hash:
            self.password_hash = hash_password(data.employees['default_password'])

    @property
    def department_string(self) -> str:
        return self.department.value

    @property
    def shift_string(self) -> str:
        return f"{self.shift.value} ({SHIFT_HOURS[self.shift]})"

    @property
    def monthly_salary(self) -> float:
        # Salaries are stored as monthly figures
        return self.salary

    def set_password(self, new_password: str, confirm_password: str):
        if not new_password:
            raise ValidationError("cannot be empty", "password")
        min_length = data.employees['min_password_length']
        if len(new_password) < min_length:
            raise ValidationError(f"must be at least {min_length} characters", "password")
        if new_password != confirm_password:
            raise ValidationError("passwords do not match", "password")
        self.password_hash = hash_password(new_password)

    def authenticate(self, password: str) -> bool:
        if not password or not self.password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))
        except ValueError:
            # Stored hash is not a bcrypt hash
            return False

    def is_manager(self) -> bool:
        return "Manager" in self.position or "Supervisor" in self.position or \
            self.department == Department.MANAGEMENT

    def is_valid(self) -> bool:
        return self.id > 0 and bool(self.name.strip()) and bool(self.position.strip()) and \
            self.salary > 0 and is_valid_phone(self.contact_number) and \
            bool(self.address.strip()) and bool(self.join_date.strip()) and is_valid_email(self.email)


@dataclass
class Reservation:
    """A booking of one room by one customer.

    The room rate is copied from the room when the booking is made, so later
    price changes on the room do not affect it. Totals are always derived from
    rate and nights, never stored.
    """
    id: int
    customer_id: int
    room_number: int
    check_in_date: datetime.datetime
    check_out_date: datetime.datetime
    guests: int
    room_rate: float
    paid_amount: float = 0.0
    status: ReservationStatus = ReservationStatus.CONFIRMED
    special_requests: str = ""
    booking_date: datetime.datetime = field(default_factory=datetime.datetime.now)

    def __post_init__(self):
        _require_positive(self.id, "id")
        _require_positive(self.customer_id, "customer_id")
        _require_positive(self.room_number, "room_number")
        _check_dates(self.check_in_date, self.check_out_date)
        _require_positive(self.guests, "guests")
        _require_positive(self.room_rate, "room_rate")
        _require_non_negative(self.paid_amount, "paid_amount")
        if self.paid_amount > self.total_amount + EPSILON:
            raise ValidationError("must be between 0 and the reservation total", "paid_amount", self.paid_amount)

    @property
    def nights(self) -> int:
        return nights_between(self.check_in_date, self.check_out_date)

    @property
    def total_amount(self) -> float:
        return self.room_rate * self.nights

    @property
    def due_amount(self) -> float:
        return self.total_amount - self.paid_amount

    @property
    def payment_status(self) -> PaymentStatus:
        if self.paid_amount <= 0:
            return PaymentStatus.PENDING
        if self.paid_amount >= self.total_amount - EPSILON:
            return PaymentStatus.PAID
        return PaymentStatus.PARTIAL

    # State machine: Confirmed -> Checked In -> Checked Out, Confirmed -> Cancelled

    def check_in(self) -> bool:
        if self.status != ReservationStatus.CONFIRMED:
            return False
        self.status = ReservationStatus.CHECKED_IN
        return True

    def check_out(self) -> bool:
        if self.status != ReservationStatus.CHECKED_IN:
            return False
        self.status = ReservationStatus.CHECKED_OUT
        return True

    def cancel(self) -> bool:
        if self.status != ReservationStatus.CONFIRMED:
            return False
        self.status = ReservationStatus.CANCELLED
        return True

    def make_payment(self, amount: float) -> bool:
        _require_positive(amount, "payment amount")
        if amount > self.due_amount + EPSILON:
            raise ValidationError("payment exceeds due amount", "payment amount", amount)
        self.paid_amount += amount
        return True

    def set_dates(self, check_in: datetime.datetime, check_out: datetime.datetime):
        _check_dates(check_in, check_out)
        if self.paid_amount > self.room_rate * nights_between(check_in, check_out) + EPSILON:
            raise ValidationError("new dates would make the total lower than the amount already paid", "dates")
        self.check_in_date = check_in
        self.check_out_date = check_out

    def set_guests(self, guests: int):
        _require_positive(guests, "guests")
        self.guests = guests

    def set_room_rate(self, rate: float):
        _require_positive(rate, "room_rate")
        self.room_rate = rate

    def set_special_requests(self, requests: str):
        self.special_requests = requests

    def is_active(self, now: Optional[datetime.datetime] = None) -> bool:
        now = now or datetime.datetime.now()
        return self.status in (ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN) and \
            self.check_in_date <= now <= self.check_out_date

    def is_past(self, now: Optional[datetime.datetime] = None) -> bool:
        now = now or datetime.datetime.now()
        return now > self.check_out_date

    def is_valid(self) -> bool:
        return self.id > 0 and self.customer_id > 0 and self.room_number > 0 and \
            self.check_in_date < self.check_out_date and self.guests > 0 and \
            self.room_rate > 0 and self.total_amount > 0


def _check_dates(check_in: datetime.datetime, check_out: datetime.datetime):
    if (check_in.tzinfo is None) != (check_out.tzinfo is None):
        raise ValidationError("check-in and check-out must both be local times or both carry a time zone", "dates")
    if check_out <= check_in:
        raise ValidationError(
            f"check-out ({check_out:%Y-%m-%d %H:%M}) must be after check-in ({check_in:%Y-%m-%d %H:%M})",
            "dates")
    if nights_between(check_in, check_out) < 1:
        raise ValidationError("a stay must cover at least one night", "dates")


@dataclass
class BillItem:
    """A line item on a bill."""
    description: str
    amount: float
    quantity: int = 1

    def __post_init__(self):
        _require_text(self.description, "description")
        _require_non_negative(self.amount, "amount")
        _require_positive(self.quantity, "quantity")

    @property
    def total(self) -> float:
        return self.amount * self.quantity


@dataclass
class Bill:
    """The bill for a reservation.

    Subtotal, tax, discount and total are recomputed on every read:
        subtotal = sum(amount * quantity)
        tax = subtotal * tax_rate
        discount_amount = (subtotal + tax) * discount
        total = subtotal + tax - discount_amount
    """
    id: int
    reservation_id: int
    tax_rate: float = 0.10
    discount: float = 0.0
    items: list[BillItem] = field(default_factory=list)
    is_paid: bool = False
    payment_method: str = ""
    payment_date: Optional[datetime.datetime] = None

    def __post_init__(self):
        _require_positive(self.id, "id")
        _require_positive(self.reservation_id, "reservation_id")
        _require_non_negative(self.tax_rate, "tax_rate")
        _require_finite(self.discount, "discount")
        if self.discount < 0 or self.discount > 1:
            raise ValidationError("must be between 0 and 1", "discount", self.discount)

    def add_item(self, description: str, amount: float, quantity: int = 1):
        self.items.append(BillItem(description=description, amount=amount, quantity=quantity))

    def add_room_charge(self, amount: float, nights: int):
        self.add_item(f"Room Charge ({nights} nights)", amount, nights)

    def add_food_charge(self, item: str, amount: float, quantity: int = 1):
        self.add_item(f"Food - {item}", amount, quantity)

    def add_service_charge(self, service: str, amount: float):
        self.add_item(f"Service - {service}", amount)

    def remove_item(self, index: int):
        if index < 0 or index >= len(self.items):
            raise ValidationError("invalid item index", "index", index)
        del self.items[index]

    def clear_items(self):
        self.items.clear()

    @property
    def subtotal(self) -> float:
        return sum(item.total for item in self.items)

    @property
    def tax(self) -> float:
        return self.subtotal * self.tax_rate

    @property
    def discount_amount(self) -> float:
        return (self.subtotal + self.tax) * self.discount

    @property
    def total(self) -> float:
        return self.subtotal + self.tax - self.discount_amount

    @property
    def balance_due(self) -> float:
        return 0.0 if self.is_paid else self.total

    def process_payment(self, method: str, when: Optional[datetime.datetime] = None) -> bool:
        """Settle the bill in full. A bill can only be paid once."""
        if not method or not method.strip():
            raise ValidationError("cannot be empty", "payment method")
        if self.is_paid:
            raise BillAlreadyPaidError(self.id)
        self.payment_method = method
        self.payment_date = when or datetime.datetime.now()
        self.is_paid = True
        return True

    def is_valid(self) -> bool:
        return self.id > 0 and self.reservation_id > 0 and self.tax_rate >= 0 and 0 <= self.discount <= 1
