import copy
import datetime
import logging
import math
import os
import os.path
import shutil
from contextlib import contextmanager
from typing import Optional

import pydantic

from xl9045qi.hoteldesk import codec, data
from xl9045qi.hoteldesk.config import AUDIT_LOGGER, default_job
from xl9045qi.hoteldesk.errors import (
    ConflictError, FileError, FileCorruptedError, FileReadError, FileWriteError,
    NotFoundError, ValidationError,
)
from xl9045qi.hoteldesk.models import (
    Bill, Customer, Department, Employee, Reservation, ReservationStatus,
    Room, RoomStatus, RoomType, Shift,
)

logger = logging.getLogger(__name__)
audit = logging.getLogger(AUDIT_LOGGER)

# collection name -> (file name, model, key attribute, sequence name)
COLLECTIONS = {
    'rooms': ("rooms.dat", Room, "number", "room"),
    'customers': ("customers.dat", Customer, "id", "customer"),
    'reservations': ("reservations.dat", Reservation, "id", "reservation"),
    'employees': ("employees.dat", Employee, "id", "employee"),
    'bills': ("bills.dat", Bill, "id", "bill"),
}
SEQUENCES_FILE = "sequences.dat"


def _read_directory(directory: str) -> tuple[dict, dict]:
    """Parse every store file in 'directory' without touching any store.

    Returns:
        tuple: The records per collection name, and the persisted id counters (empty if absent).

    Raises:
        FileReadError: A file could not be read.
        FileCorruptedError: A file is malformed or holds duplicate keys.
    """
    loaded = {}
    for name, (file_name, model, key, _) in COLLECTIONS.items():
        path = os.path.join(directory, file_name)
        records = codec.load_collection(path, model)
        seen = set()
        for record in records:
            record_key = getattr(record, key)
            if record_key in seen:
                raise FileCorruptedError(path, f"duplicate {key} {record_key}")
            seen.add(record_key)
        loaded[name] = records
    sequences_path = os.path.join(directory, SEQUENCES_FILE)
    persisted = {}
    for sequence, value in (codec.load_document(sequences_path) or {}).items():
        try:
            persisted[sequence] = int(value)
        except (TypeError, ValueError):
            raise FileCorruptedError(sequences_path, f"bad counter for {sequence}")
    return loaded, persisted


class HDDatabase:
    """The store: owns every entity collection and keeps the data directory in sync.

    Lookups hand back the store-owned record (or None). Changes go through the
    store's methods, which validate, apply, and persist only the collections
    they touched. If validation or a write fails, the affected collections and
    id counters are put back the way they were and the error is re-raised.
    """

    def __init__(self, job: Optional[dict] = None, data_dir: Optional[str] = None):
        self.job = job if job is not None else default_job()
        self.data_dir = data_dir or self.job['storage']['data_dir']
        self.state = {}
        for name in COLLECTIONS:
            self.state[name] = []
        self.state['sequences'] = dict(self.job['ids'])
        self.load_all_data()

    # ==================== INTERNALS ====================

    def path_for(self, name: str) -> str:
        file_name = SEQUENCES_FILE if name == 'sequences' else COLLECTIONS[name][0]
        return os.path.join(self.data_dir, file_name)

    def _save(self, name: str):
        if name == 'sequences':
            codec.save_document(self.path_for(name), self.state['sequences'])
        else:
            codec.save_collection(self.path_for(name), self.state[name], COLLECTIONS[name][1])

    @contextmanager
    def _changes(self, *names, append_only: bool = False):
        """Apply a change to the named collections as one unit.

        The body mutates self.state; on normal exit the named collections are
        written out. Any exception inside the body restores the in-memory
        snapshot. A failed write also rewrites the collections already saved
        during this change so disk matches memory again.

        Args:
            names: Collection names touched by the change ('sequences' included).
            append_only (bool): The body only appends records, so a shallow copy is enough to undo it.
        """
        if append_only:
            snapshot = {name: copy.copy(self.state[name]) for name in names}
        else:
            snapshot = {name: copy.deepcopy(self.state[name]) for name in names}

        try:
            yield
        except Exception:
            self.state.update(snapshot)
            raise

        written = []
        try:
            for name in names:
                self._save(name)
                written.append(name)
        except FileError as e:
            logger.error("Write failed, rolling back %s: %s", ", ".join(names), e.message)
            self.state.update(snapshot)
            for name in written:
                try:
                    self._save(name)
                except FileError as rollback_error:
                    logger.error("Could not restore %s on disk: %s", self.path_for(name), rollback_error.message)
            raise

    def _next_id(self, sequence: str) -> int:
        next_id = self.state['sequences'][sequence]
        self.state['sequences'][sequence] = next_id + 1
        return next_id

    @staticmethod
    def _build(model, **kwargs):
        """Construct an entity, reporting pydantic type errors as ValidationError."""
        try:
            return model(**kwargs)
        except pydantic.ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" if err['loc'] else err['msg']
                for err in e.errors()
            )
            raise ValidationError(details) from e

    @staticmethod
    def _enum(enum_class, value, field_name: str):
        if isinstance(value, enum_class):
            return value
        try:
            return enum_class(value)
        except ValueError:
            choices = ", ".join(member.value for member in enum_class)
            raise ValidationError(f"must be one of: {choices}", field_name, value)

    # ==================== ROOM OPERATIONS ====================

    @property
    def rooms(self) -> list[Room]:
        return list(self.state['rooms'])

    def add_room(self, room_type, price: float, capacity: int, features=()) -> int:
        """Create a room with the next room number and return that number."""
        room_type = self._enum(RoomType, room_type, "type")
        with self._changes('rooms', 'sequences', append_only=True):
            room = self._build(Room, number=self._next_id('room'), type=room_type,
                               price_per_night=price, capacity=capacity, features=list(features))
            self.state['rooms'].append(room)
        logger.info("Added room #%d (%s, %.2f/night, capacity %d)", room.number, room.type.value,
                    room.price_per_night, room.capacity)
        return room.number

    def find_room(self, number: int) -> Optional[Room]:
        for room in self.state['rooms']:
            if room.number == number:
                return room
        return None

    def find_available_rooms(self, room_type=None, min_capacity: int = 1) -> list[Room]:
        if room_type is not None:
            room_type = self._enum(RoomType, room_type, "type")
        return [
            room for room in self.state['rooms']
            if room.is_available()
            and room.capacity >= min_capacity
            and (room_type is None or room.type == room_type)
        ]

    def update_room_status(self, number: int, status) -> bool:
        status = self._enum(RoomStatus, status, "status")
        room = self.find_room(number)
        if room is None:
            return False
        with self._changes('rooms'):
            room.status = status
        logger.info("Room #%d status set to %s", number, status.value)
        return True

    def modify_room(self, number: int, price: float, features) -> bool:
        room = self.find_room(number)
        if room is None:
            return False
        with self._changes('rooms'):
            room.set_price(price)
            room.set_features(features)
        logger.info("Room #%d updated (%.2f/night)", number, price)
        return True

    def get_room_count(self) -> int:
        return len(self.state['rooms'])

    def get_available_room_count(self) -> int:
        return sum(1 for room in self.state['rooms'] if room.is_available())

    # ==================== CUSTOMER OPERATIONS ====================

    @property
    def customers(self) -> list[Customer]:
        return list(self.state['customers'])

    def add_customer(self, name: str, email: str, phone: str, address: str, id_proof: str) -> int:
        with self._changes('customers', 'sequences', append_only=True):
            customer = self._build(Customer, id=self._next_id('customer'), name=name, email=email,
                                   phone=phone, address=address, id_proof=id_proof)
            self.state['customers'].append(customer)
        logger.info("Registered customer #%d", customer.id)
        return customer.id

    def find_customer(self, customer_id: int) -> Optional[Customer]:
        for customer in self.state['customers']:
            if customer.id == customer_id:
                return customer
        return None

    def find_customer_by_name(self, name: str) -> Optional[Customer]:
        """First customer whose name contains 'name', ignoring case."""
        needle = name.lower()
        for customer in self.state['customers']:
            if needle in customer.name.lower():
                return customer
        return None

    def find_customers_by_phone(self, phone: str) -> list[Customer]:
        return [c for c in self.state['customers'] if phone in c.phone]

    def update_customer_info(self, customer_id: int, phone: str, email: str, address: str) -> bool:
        customer = self.find_customer(customer_id)
        if customer is None:
            return False
        with self._changes('customers'):
            customer.update_info(phone, email, address)
        logger.info("Updated contact details of customer #%d", customer_id)
        return True

    def record_customer_visit(self, customer_id: int, amount: float) -> bool:
        customer = self.find_customer(customer_id)
        if customer is None:
            return False
        with self._changes('customers'):
            customer.add_visit(amount)
        return True

    def get_customer_count(self) -> int:
        return len(self.state['customers'])

    # ==================== RESERVATION OPERATIONS ====================

    @property
    def reservations(self) -> list[Reservation]:
        return list(self.state['reservations'])

    def make_reservation(self, customer_id: int, room_number: int, check_in: datetime.datetime,
                         check_out: datetime.datetime, guests: int, requests: str = "") -> int:
        """Book a room for a customer.

        Args:
            customer_id (int): An existing customer.
            room_number (int): An existing room that is currently Available.
            check_in (datetime): Start of the stay.
            check_out (datetime): End of the stay; at least one night after check_in.
            guests (int): Number of guests, no more than the room's capacity.
            requests (str, optional): Free-text special requests.

        Returns:
            int: The new reservation id.

        Raises:
            NotFoundError: The customer or room does not exist.
            ConflictError: The room is not Available.
            ValidationError: Too many guests, or bad dates.

        Remarks:
            The room's current price is copied into the reservation as its rate, and
            the room becomes Reserved. Both changes are saved together.
        """
        if self.find_customer(customer_id) is None:
            raise NotFoundError("Customer", customer_id)
        room = self.find_room(room_number)
        if room is None:
            raise NotFoundError("Room", room_number)
        if not room.is_available():
            raise ConflictError(f"Room #{room_number} is not available (currently {room.status.value})")
        if not room.can_accommodate(guests):
            raise ValidationError(
                f"Room #{room_number} can accommodate {room.capacity} guests (requested: {guests})",
                "guests", guests)

        with self._changes('reservations', 'rooms', 'sequences'):
            reservation = self._build(Reservation, id=self._next_id('reservation'), customer_id=customer_id,
                                      room_number=room_number, check_in_date=check_in,
                                      check_out_date=check_out, guests=guests,
                                      room_rate=room.price_per_night, special_requests=requests or "")
            self.state['reservations'].append(reservation)
            room.status = RoomStatus.RESERVED

        audit.info("Reservation #%d made: customer #%d, room #%d, %s to %s, %d night(s) @ %.2f",
                   reservation.id, customer_id, room_number, check_in.date(), check_out.date(),
                   reservation.nights, reservation.room_rate)
        return reservation.id

    def find_reservation(self, reservation_id: int) -> Optional[Reservation]:
        for reservation in self.state['reservations']:
            if reservation.id == reservation_id:
                return reservation
        return None

    def find_reservations_by_customer(self, customer_id: int) -> list[Reservation]:
        return [r for r in self.state['reservations'] if r.customer_id == customer_id]

    def find_active_reservations(self, now: Optional[datetime.datetime] = None) -> list[Reservation]:
        now = now or datetime.datetime.now()
        return [r for r in self.state['reservations'] if r.is_active(now)]

    def find_today_check_ins(self, today: Optional[datetime.date] = None) -> list[Reservation]:
        today = today or datetime.date.today()
        return [
            r for r in self.state['reservations']
            if r.status == ReservationStatus.CONFIRMED and r.check_in_date.date() == today
        ]

    def find_today_check_outs(self, today: Optional[datetime.date] = None) -> list[Reservation]:
        today = today or datetime.date.today()
        return [
            r for r in self.state['reservations']
            if r.status == ReservationStatus.CHECKED_IN and r.check_out_date.date() == today
        ]

    def modify_reservation(self, reservation_id: int, check_in: Optional[datetime.datetime] = None,
                           check_out: Optional[datetime.datetime] = None, guests: Optional[int] = None,
                           requests: Optional[str] = None) -> bool:
        """Change dates, guest count or requests of a Confirmed reservation. Returns False if it cannot be changed."""
        reservation = self.find_reservation(reservation_id)
        if reservation is None or reservation.status != ReservationStatus.CONFIRMED:
            return False

        with self._changes('reservations'):
            if check_in is not None or check_out is not None:
                reservation.set_dates(check_in or reservation.check_in_date,
                                      check_out or reservation.check_out_date)
            if guests is not None:
                room = self.find_room(reservation.room_number)
                if room is not None and not room.can_accommodate(guests):
                    raise ValidationError(
                        f"Room #{room.number} can accommodate {room.capacity} guests (requested: {guests})",
                        "guests", guests)
                reservation.set_guests(guests)
            if requests is not None:
                reservation.set_special_requests(requests)

        audit.info("Reservation #%d modified", reservation_id)
        return True

    def cancel_reservation(self, reservation_id: int) -> bool:
        reservation = self.find_reservation(reservation_id)
        if reservation is None or reservation.status != ReservationStatus.CONFIRMED:
            return False
        with self._changes('reservations', 'rooms'):
            reservation.cancel()
            self._set_room_status(reservation.room_number, RoomStatus.AVAILABLE)
        audit.info("Reservation #%d cancelled, room #%d released", reservation_id, reservation.room_number)
        return True

    def check_in(self, reservation_id: int) -> bool:
        reservation = self.find_reservation(reservation_id)
        if reservation is None or reservation.status != ReservationStatus.CONFIRMED:
            return False
        with self._changes('reservations', 'rooms'):
            reservation.check_in()
            self._set_room_status(reservation.room_number, RoomStatus.OCCUPIED)
        audit.info("Reservation #%d checked in to room #%d", reservation_id, reservation.room_number)
        return True

    def check_out(self, reservation_id: int) -> bool:
        """Check a guest out, free the room and count the stay on the customer's history."""
        reservation = self.find_reservation(reservation_id)
        if reservation is None or reservation.status != ReservationStatus.CHECKED_IN:
            return False
        with self._changes('reservations', 'rooms', 'customers'):
            reservation.check_out()
            self._set_room_status(reservation.room_number, RoomStatus.AVAILABLE)
            customer = self.find_customer(reservation.customer_id)
            if customer is not None:
                customer.add_visit(reservation.total_amount)
        audit.info("Reservation #%d checked out of room #%d", reservation_id, reservation.room_number)
        return True

    def _set_room_status(self, number: int, status: RoomStatus):
        room = self.find_room(number)
        if room is not None:
            room.status = status
        else:
            logger.warning("Reservation refers to missing room #%d", number)

    def make_reservation_payment(self, reservation_id: int, amount: float) -> bool:
        reservation = self.find_reservation(reservation_id)
        if reservation is None:
            return False
        with self._changes('reservations'):
            reservation.make_payment(amount)
        audit.info("Payment of %.2f recorded on reservation #%d (%s)", amount, reservation_id,
                   reservation.payment_status.value)
        return True

    def get_reservation_count(self) -> int:
        return len(self.state['reservations'])

    def get_active_reservation_count(self, now: Optional[datetime.datetime] = None) -> int:
        return len(self.find_active_reservations(now))

    # ==================== EMPLOYEE OPERATIONS ====================

    @property
    def employees(self) -> list[Employee]:
        return list(self.state['employees'])

    def add_employee(self, name: str, position: str, department, shift, salary: float,
                     contact: str, address: str, join_date: str) -> int:
        department = self._enum(Department, department, "department")
        shift = self._enum(Shift, shift, "shift")
        with self._changes('employees', 'sequences', append_only=True):
            employee_id = self._next_id('employee')
            employee = self._build(Employee, id=employee_id, name=name, position=position,
                                   department=department, shift=shift, salary=salary,
                                   contact_number=contact, address=address, join_date=join_date,
                                   email=self._unique_employee_email(name, employee_id))
            self.state['employees'].append(employee)
        audit.info("Employee #%d added (%s, %s)", employee.id, employee.position, employee.department.value)
        return employee.id

    def _unique_employee_email(self, name: str, employee_id: int) -> str:
        """Login emails come from the first name; a clash gets the employee id appended."""
        first_name = name.strip().split(" ")[0].lower() if name and name.strip() else ""
        if not first_name:
            # Let the model report the empty name
            return ""
        domain = data.employees['email_domain']
        email = f"{first_name}@{domain}"
        if any(e.email.lower() == email for e in self.state['employees']):
            email = f"{first_name}{employee_id}@{domain}"
        return email

    def find_employee(self, employee_id: int) -> Optional[Employee]:
        for employee in self.state['employees']:
            if employee.id == employee_id:
                return employee
        return None

    def authenticate_employee(self, email: str, password: str) -> Optional[Employee]:
        email = email.strip().lower()
        for employee in self.state['employees']:
            if employee.email.lower() == email and employee.authenticate(password):
                return employee
        return None

    def find_employees_by_department(self, department) -> list[Employee]:
        department = self._enum(Department, department, "department")
        return [e for e in self.state['employees'] if e.department == department]

    def update_employee_info(self, employee_id: int, position: str, department, shift, salary: float) -> bool:
        department = self._enum(Department, department, "department")
        shift = self._enum(Shift, shift, "shift")
        employee = self.find_employee(employee_id)
        if employee is None:
            return False
        if not position or not position.strip():
            raise ValidationError("cannot be empty", "position")
        if not math.isfinite(salary) or salary <= 0:
            raise ValidationError("must be positive", "salary", salary)
        with self._changes('employees'):
            employee.position = position
            employee.department = department
            employee.shift = shift
            employee.salary = salary
        audit.info("Employee #%d updated (%s, %s, %s shift)", employee_id, position, department.value, shift.value)
        return True

    def change_employee_password(self, employee_id: int, new_password: str, confirm_password: str) -> bool:
        employee = self.find_employee(employee_id)
        if employee is None:
            return False
        with self._changes('employees'):
            employee.set_password(new_password, confirm_password)
        audit.info("Password changed for employee #%d", employee_id)
        return True

    def get_employee_count(self) -> int:
        return len(self.state['employees'])

    # ==================== BILLING OPERATIONS ====================

    @property
    def bills(self) -> list[Bill]:
        return list(self.state['bills'])

    def create_bill(self, reservation_id: int, tax_rate: Optional[float] = None, discount: float = 0.0) -> int:
        if self.find_reservation(reservation_id) is None:
            raise NotFoundError("Reservation", reservation_id)
        if tax_rate is None:
            tax_rate = self.job['billing']['tax_rate']
        with self._changes('bills', 'sequences', append_only=True):
            bill = self._build(Bill, id=self._next_id('bill'), reservation_id=reservation_id,
                               tax_rate=tax_rate, discount=discount)
            self.state['bills'].append(bill)
        logger.info("Created bill #%d for reservation #%d", bill.id, reservation_id)
        return bill.id

    def find_bill(self, bill_id: int) -> Optional[Bill]:
        for bill in self.state['bills']:
            if bill.id == bill_id:
                return bill
        return None

    def find_bill_by_reservation(self, reservation_id: int) -> Optional[Bill]:
        for bill in self.state['bills']:
            if bill.reservation_id == reservation_id:
                return bill
        return None

    def find_unpaid_bills(self) -> list[Bill]:
        return [b for b in self.state['bills'] if not b.is_paid]

    def add_bill_item(self, bill_id: int, description: str, amount: float, quantity: int = 1) -> bool:
        bill = self.find_bill(bill_id)
        if bill is None:
            return False
        with self._changes('bills'):
            bill.add_item(description, amount, quantity)
        return True

    def add_room_charge(self, bill_id: int) -> bool:
        """Add the reservation's room charge (rate x nights) as a line on the bill."""
        bill = self.find_bill(bill_id)
        if bill is None:
            return False
        reservation = self.find_reservation(bill.reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation", bill.reservation_id)
        with self._changes('bills'):
            bill.add_room_charge(reservation.room_rate, reservation.nights)
        return True

    def remove_bill_item(self, bill_id: int, index: int) -> bool:
        bill = self.find_bill(bill_id)
        if bill is None:
            return False
        with self._changes('bills'):
            bill.remove_item(index)
        return True

    def process_payment(self, bill_id: int, payment_method: str) -> bool:
        bill = self.find_bill(bill_id)
        if bill is None:
            return False
        with self._changes('bills'):
            bill.process_payment(payment_method)
        audit.info("Bill #%d paid by %s: %.2f", bill_id, payment_method, bill.total)
        return True

    def calculate_total_revenue(self) -> float:
        return sum(bill.total for bill in self.state['bills'] if bill.is_paid)

    def calculate_today_revenue(self, today: Optional[datetime.date] = None) -> float:
        today = today or datetime.date.today()
        return sum(
            bill.total for bill in self.state['bills']
            if bill.is_paid and bill.payment_date is not None and bill.payment_date.date() == today
        )

    def get_bill_count(self) -> int:
        return len(self.state['bills'])

    # ==================== SEARCH OPERATIONS ====================

    def search_rooms(self, max_price: Optional[float] = None, min_capacity: int = 1, room_type=None) -> list[Room]:
        """Available rooms within a price limit that fit the party, optionally of one type."""
        if room_type is not None:
            room_type = self._enum(RoomType, room_type, "type")
        return [
            room for room in self.state['rooms']
            if room.is_available()
            and (max_price is None or room.price_per_night <= max_price)
            and room.can_accommodate(min_capacity)
            and (room_type is None or room.type == room_type)
        ]

    def search_customers(self, keyword: str) -> list[Customer]:
        needle = keyword.lower()
        return [
            c for c in self.state['customers']
            if needle in c.name.lower() or needle in c.email.lower() or keyword in c.phone
        ]

    def search_reservations_by_date_range(self, start: datetime.datetime, end: datetime.datetime) -> list[Reservation]:
        """Reservations lying entirely inside [start, end]."""
        return [
            r for r in self.state['reservations']
            if r.check_in_date >= start and r.check_out_date <= end
        ]

    # ==================== STATISTICS ====================

    def get_daily_revenue(self, days: int = 7, today: Optional[datetime.date] = None) -> dict[str, float]:
        """Paid bill totals per payment date for the last 'days' days, oldest first."""
        today = today or datetime.date.today()
        revenue = {}
        for offset in range(days - 1, -1, -1):
            day = today - datetime.timedelta(days=offset)
            revenue[day.isoformat()] = 0.0
        for bill in self.state['bills']:
            if bill.is_paid and bill.payment_date is not None:
                key = bill.payment_date.date().isoformat()
                if key in revenue:
                    revenue[key] += bill.total
        return revenue

    def get_occupancy_rate(self) -> dict[str, int]:
        """Percentage of rooms of each type that are Occupied. Types with no rooms are left out."""
        totals = {}
        occupied = {}
        for room in self.state['rooms']:
            totals[room.type] = totals.get(room.type, 0) + 1
            if room.status == RoomStatus.OCCUPIED:
                occupied[room.type] = occupied.get(room.type, 0) + 1
        return {
            room_type.value: int(round(100 * occupied.get(room_type, 0) / totals[room_type]))
            for room_type in RoomType if room_type in totals
        }

    def get_popular_rooms(self) -> list[tuple[str, int]]:
        """Room types ranked by how many non-cancelled reservations they have."""
        counts = {}
        for reservation in self.state['reservations']:
            if reservation.status == ReservationStatus.CANCELLED:
                continue
            room = self.find_room(reservation.room_number)
            if room is None:
                continue
            counts[room.type.value] = counts.get(room.type.value, 0) + 1
        return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

    def get_statistics(self, now: Optional[datetime.datetime] = None) -> dict:
        now = now or datetime.datetime.now()
        room_count = self.get_room_count()
        available = self.get_available_room_count()
        return {
            "rooms": room_count,
            "available_rooms": available,
            "occupancy_percent": (1.0 - available / room_count) * 100 if room_count else 0.0,
            "customers": self.get_customer_count(),
            "reservations": self.get_reservation_count(),
            "active_reservations": self.get_active_reservation_count(now),
            "employees": self.get_employee_count(),
            "bills": self.get_bill_count(),
            "unpaid_bills": len(self.find_unpaid_bills()),
            "total_revenue": self.calculate_total_revenue(),
            "today_revenue": self.calculate_today_revenue(now.date()),
        }

    # ==================== FILE OPERATIONS ====================

    def save_all_data(self):
        for name in COLLECTIONS:
            self._save(name)
        self._save('sequences')
        logger.info("Saved all collections to %s", self.data_dir)

    def load_all_data(self):
        """Load every collection from the data directory and reseed the id counters.

        Nothing in memory changes unless every file loads cleanly.

        Raises:
            FileReadError: A file could not be read.
            FileCorruptedError: A file is malformed or holds duplicate keys.
        """
        loaded, persisted = _read_directory(self.data_dir)

        sequences = {}
        for name, (_, _, key, sequence) in COLLECTIONS.items():
            highest = max((getattr(r, key) for r in loaded[name]), default=0)
            sequences[sequence] = max(int(self.job['ids'][sequence]), persisted.get(sequence, 0), highest + 1)

        self.state.update(loaded)
        self.state['sequences'] = sequences
        logger.info("Loaded %s from %s", ", ".join(f"{len(loaded[n])} {n}" for n in COLLECTIONS), self.data_dir)

    def is_empty(self) -> bool:
        return not (self.state['rooms'] or self.state['customers'] or self.state['employees'])

    def backup_data(self, backup_root: Optional[str] = None) -> str:
        """Copy every store file into a new timestamped directory.

        Returns:
            str: The backup directory that was created.
        """
        self.save_all_data()
        backup_root = backup_root or self.job['storage']['backup_dir']
        stamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_dir = os.path.join(backup_root, f"backup_{stamp}")
        suffix = 1
        while os.path.exists(backup_dir):
            backup_dir = os.path.join(backup_root, f"backup_{stamp}_{suffix}")
            suffix += 1

        try:
            os.makedirs(backup_dir)
            for name in list(COLLECTIONS) + ['sequences']:
                source = self.path_for(name)
                if os.path.exists(source):
                    shutil.copy2(source, os.path.join(backup_dir, os.path.basename(source)))
        except OSError as e:
            raise FileWriteError(backup_dir, str(e)) from e

        audit.info("Backup written to %s", backup_dir)
        return backup_dir

    def restore_data(self, backup_dir: str):
        """Replace the store files with those in 'backup_dir' and reload.

        Every file in the backup is parsed first; if any is unreadable or corrupted
        nothing is copied. Collections missing from the backup are restored as empty.
        """
        if not os.path.isdir(backup_dir):
            raise FileReadError(backup_dir, "backup directory does not exist")

        _read_directory(backup_dir)

        try:
            os.makedirs(self.data_dir, exist_ok=True)
            for name in list(COLLECTIONS) + ['sequences']:
                target = self.path_for(name)
                source = os.path.join(backup_dir, os.path.basename(target))
                if os.path.exists(source):
                    tmp_target = target + ".restore"
                    shutil.copy2(source, tmp_target)
                    os.replace(tmp_target, target)
                elif os.path.exists(target):
                    os.remove(target)
        except OSError as e:
            raise FileWriteError(self.data_dir, str(e)) from e

        self.load_all_data()
        audit.info("Data restored from %s", backup_dir)
