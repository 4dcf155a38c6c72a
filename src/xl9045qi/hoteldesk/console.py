# Interactive front desk console.
#
# Every menu is a numbered list where 0 goes back (or logs out from the main
# menu). Actions call HDDatabase operations; a HotelError raised by an action
# is shown with its code and the menu is offered again.

import datetime
import logging
import os.path
from collections import deque
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from xl9045qi.hoteldesk import data, format_currency, parse_date
from xl9045qi.hoteldesk import reports
from xl9045qi.hoteldesk.database import HDDatabase
from xl9045qi.hoteldesk.errors import AuthenticationError, HotelError, ValidationError
from xl9045qi.hoteldesk.models import Department, RoomStatus, RoomType, Shift
from xl9045qi.hoteldesk.session import Session, login, logout, require_admin, require_manager

logger = logging.getLogger(__name__)


class HotelConsole:

    def __init__(self, db: HDDatabase, job: Optional[dict] = None, console: Optional[Console] = None):
        self.db = db
        self.job = job if job is not None else db.job
        self.console = console or Console()
        self.session: Optional[Session] = None

    # ==================== HELPERS ====================

    def money(self, amount: float) -> str:
        return format_currency(amount, self.job['billing']['currency_symbol'])

    def error(self, e: HotelError):
        self.console.print(f"[bold red]Error {e.code}:[/] {escape(e.message)}")

    def ok(self, message: str):
        self.console.print(f"[green]{escape(message)}[/]")

    def menu(self, title: str, options: list[str]) -> int:
        self.console.print()
        self.console.rule(f"[bold]{escape(title)}")
        for idx, label in enumerate(options, start=1):
            self.console.print(f"  [cyan]{idx}[/]. {label}")
        self.console.print("  [cyan]0[/]. Back")
        return IntPrompt.ask("Choice", choices=[str(i) for i in range(len(options) + 1)],
                             show_choices=False, console=self.console)

    def run_menu(self, title: str, actions: list[tuple]):
        """Show a menu of (label, callable) pairs until the user picks 0."""
        while True:
            choice = self.menu(title, [label for label, _ in actions])
            if choice == 0:
                return
            self.guard(actions[choice - 1][1])

    def guard(self, action):
        try:
            action()
        except HotelError as e:
            logger.debug("Action failed: %s", e.full_message())
            self.error(e)

    def ask(self, prompt_class, label: str, default=None, **kwargs):
        # rich returns the default as-is, so None must not be passed through
        if default is not None:
            kwargs["default"] = default
        return prompt_class.ask(label, console=self.console, **kwargs)

    def ask_text(self, label: str, default: Optional[str] = None) -> str:
        return self.ask(Prompt, label, default).strip()

    def ask_int(self, label: str, default: Optional[int] = None) -> int:
        return self.ask(IntPrompt, label, default)

    def ask_float(self, label: str, default: Optional[float] = None) -> float:
        return self.ask(FloatPrompt, label, default)

    def ask_choice(self, label: str, enum_class, default=None):
        values = [m.value for m in enum_class]
        answer = self.ask(Prompt, label, getattr(default, "value", default), choices=values)
        return enum_class(answer)

    def ask_date(self, label: str, default: Optional[datetime.date] = None) -> datetime.datetime:
        text = self.ask_text(f"{label} (YYYY-MM-DD)", default.isoformat() if default else None)
        try:
            return parse_date(text)
        except ValueError:
            raise ValidationError("expected a date as YYYY-MM-DD", label, text)

    def ask_features(self, default: str = "") -> list[str]:
        text = self.ask_text("Features (comma separated)", default)
        return [feature.strip() for feature in text.split(",") if feature.strip()]

    # ==================== MAIN LOOP ====================

    def banner(self):
        hotel = self.job['hotel']
        self.console.print(Panel.fit(
            f"[bold]{escape(hotel['name'])}[/]\n{escape(hotel['address'])}\n"
            f"{escape(hotel['contact'])}  |  {escape(hotel['email'])}",
            title="Hotel Desk"))

    def login(self) -> bool:
        attempts = self.job['security']['max_login_attempts']
        for attempt in range(1, attempts + 1):
            email = self.ask_text("Email")
            password = Prompt.ask("Password", password=True, console=self.console)
            try:
                self.session = login(self.db, email, password)
            except AuthenticationError as e:
                self.error(e)
                self.console.print(f"{attempts - attempt} attempt(s) left.")
                continue
            self.ok(f"Welcome, {self.session.name}!")
            return True
        self.console.print("[bold red]Too many failed login attempts.[/]")
        return False

    def run(self):
        self.banner()
        if not self.login():
            return
        self.run_menu(f"Main Menu ({self.session.name})", [
            ("Room Management", self.rooms_menu),
            ("Customer Management", self.customers_menu),
            ("Reservations", self.reservations_menu),
            ("Employee Management", self.employees_menu),
            ("Billing", self.billing_menu),
            ("Reports", self.reports_menu),
            ("Settings", self.settings_menu),
        ])
        logout(self.session)
        self.session = None
        self.console.print("Logged out. Goodbye!")

    # ==================== ROOMS ====================

    def rooms_menu(self):
        self.run_menu("Room Management", [
            ("View all rooms", lambda: self.show_rooms(self.db.rooms)),
            ("View available rooms", self.available_rooms),
            ("Add room", self.add_room),
            ("Update room status", self.update_room_status),
            ("Modify room", self.modify_room),
            ("Search rooms", self.search_rooms),
        ])

    def show_rooms(self, rooms):
        table = Table(title=f"Rooms ({len(rooms)})")
        for column in ("Room", "Type", "Status", "Price/Night", "Capacity", "Features"):
            table.add_column(column)
        for room in rooms:
            color = "green" if room.is_available() else "yellow"
            table.add_row(str(room.number), room.type.value, f"[{color}]{room.status.value}[/]",
                          self.money(room.price_per_night), str(room.capacity), escape(room.features_string))
        self.console.print(table)

    def available_rooms(self):
        room_type = None
        if Confirm.ask("Filter by room type?", default=False, console=self.console):
            room_type = self.ask_choice("Room type", RoomType)
        self.show_rooms(self.db.find_available_rooms(room_type, self.ask_int("Minimum capacity", 1)))

    def add_room(self):
        require_manager(self.session, "add room")
        room_type = self.ask_choice("Room type", RoomType)
        band = data.room_type_band(room_type)
        price = self.ask_float("Price per night", band['min_price'])
        capacity = self.ask_int("Capacity", band['capacity'])
        number = self.db.add_room(room_type, price, capacity, self.ask_features("WiFi, TV, AC"))
        self.ok(f"Room #{number} added.")

    def update_room_status(self):
        number = self.ask_int("Room number")
        status = self.ask_choice("New status", RoomStatus)
        if self.db.update_room_status(number, status):
            self.ok(f"Room #{number} is now {status.value}.")
        else:
            self.console.print(f"Room #{number} not found.")

    def modify_room(self):
        require_manager(self.session, "modify room")
        room = self.db.find_room(self.ask_int("Room number"))
        if room is None:
            self.console.print("Room not found.")
            return
        price = self.ask_float("Price per night", room.price_per_night)
        features = self.ask_features(", ".join(room.features))
        self.db.modify_room(room.number, price, features)
        self.ok(f"Room #{room.number} updated.")

    def search_rooms(self):
        max_price = self.ask_float("Maximum price per night", 10000.0)
        guests = self.ask_int("Guests", 1)
        self.show_rooms(self.db.search_rooms(max_price, guests))

    # ==================== CUSTOMERS ====================

    def customers_menu(self):
        self.run_menu("Customer Management", [
            ("View all customers", lambda: self.show_customers(self.db.customers)),
            ("Register customer", self.add_customer),
            ("Customer details", self.customer_details),
            ("Search customers", self.search_customers),
            ("Update contact details", self.update_customer),
        ])

    def show_customers(self, customers):
        table = Table(title=f"Customers ({len(customers)})")
        for column in ("ID", "Name", "Email", "Phone", "Visits", "Spent"):
            table.add_column(column)
        for c in customers:
            table.add_row(str(c.id), escape(c.name), escape(c.email), escape(c.phone), str(c.total_visits),
                          self.money(c.total_spent))
        self.console.print(table)

    def add_customer(self):
        customer_id = self.db.add_customer(
            self.ask_text("Name"), self.ask_text("Email"), self.ask_text("Phone"),
            self.ask_text("Address"), self.ask_text("ID proof"))
        self.ok(f"Customer registered with ID {customer_id}.")

    def customer_details(self):
        customer = self.db.find_customer(self.ask_int("Customer ID"))
        if customer is None:
            self.console.print("Customer not found.")
            return
        self.console.print(Panel.fit(
            f"[bold]{escape(customer.name)}[/] (#{customer.id})\n"
            f"Email: {escape(customer.email)}\nPhone: {escape(customer.phone)}\nAddress: {escape(customer.address)}\n"
            f"ID proof: {escape(customer.id_proof)}\n"
            f"Registered: {customer.registration_date:%Y-%m-%d}\n"
            f"Visits: {customer.total_visits}  Spent: {self.money(customer.total_spent)}"))
        self.show_reservations(self.db.find_reservations_by_customer(customer.id))

    def search_customers(self):
        self.show_customers(self.db.search_customers(self.ask_text("Name, email or phone")))

    def update_customer(self):
        customer = self.db.find_customer(self.ask_int("Customer ID"))
        if customer is None:
            self.console.print("Customer not found.")
            return
        self.db.update_customer_info(customer.id, self.ask_text("Phone", customer.phone),
                                     self.ask_text("Email", customer.email),
                                     self.ask_text("Address", customer.address))
        self.ok("Customer updated.")

    # ==================== RESERVATIONS ====================

    def reservations_menu(self):
        self.run_menu("Reservations", [
            ("View all reservations", lambda: self.show_reservations(self.db.reservations)),
            ("New reservation", self.new_reservation),
            ("Check in", lambda: self.transition("check in", self.db.check_in)),
            ("Check out", lambda: self.transition("check out", self.db.check_out)),
            ("Cancel reservation", lambda: self.transition("cancel", self.db.cancel_reservation)),
            ("Modify reservation", self.modify_reservation),
            ("Take payment", self.reservation_payment),
            ("Today's arrivals and departures", self.today),
            ("Search by date range", self.reservations_by_range),
        ])

    def show_reservations(self, reservations):
        table = Table(title=f"Reservations ({len(reservations)})")
        for column in ("ID", "Customer", "Room", "Check-in", "Check-out", "Nights", "Guests",
                       "Total", "Paid", "Status", "Payment"):
            table.add_column(column)
        for r in reservations:
            table.add_row(str(r.id), str(r.customer_id), str(r.room_number),
                          f"{r.check_in_date:%Y-%m-%d}", f"{r.check_out_date:%Y-%m-%d}", str(r.nights),
                          str(r.guests), self.money(r.total_amount), self.money(r.paid_amount),
                          r.status.value, r.payment_status.value)
        self.console.print(table)

    def new_reservation(self):
        customer_id = self.ask_int("Customer ID")
        tomorrow = datetime.date.today() + datetime.timedelta(days=1)
        check_in = self.ask_date("Check-in date", tomorrow)
        check_out = self.ask_date("Check-out date", check_in.date() + datetime.timedelta(days=1))
        guests = self.ask_int("Guests", 1)
        candidates = self.db.search_rooms(min_capacity=guests)
        self.show_rooms(candidates)
        if not candidates:
            return
        room_number = self.ask_int("Room number", candidates[0].number)
        requests = self.ask_text("Special requests", "")
        reservation_id = self.db.make_reservation(customer_id, room_number, check_in, check_out, guests, requests)
        reservation = self.db.find_reservation(reservation_id)
        self.ok(f"Reservation #{reservation_id} confirmed: {reservation.nights} night(s), "
                f"total {self.money(reservation.total_amount)}.")

    def transition(self, verb: str, operation):
        reservation_id = self.ask_int("Reservation ID")
        if operation(reservation_id):
            self.ok(f"Reservation #{reservation_id}: {verb} done.")
        else:
            reservation = self.db.find_reservation(reservation_id)
            if reservation is None:
                self.console.print(f"Reservation #{reservation_id} not found.")
            else:
                self.console.print(f"Cannot {verb} a reservation that is {reservation.status.value}.")

    def modify_reservation(self):
        reservation = self.db.find_reservation(self.ask_int("Reservation ID"))
        if reservation is None:
            self.console.print("Reservation not found.")
            return
        check_in = self.ask_date("Check-in date", reservation.check_in_date.date())
        check_out = self.ask_date("Check-out date", reservation.check_out_date.date())
        guests = self.ask_int("Guests", reservation.guests)
        requests = self.ask_text("Special requests", reservation.special_requests)
        if self.db.modify_reservation(reservation.id, check_in, check_out, guests, requests):
            self.ok("Reservation updated.")
        else:
            self.console.print(f"Only Confirmed reservations can be modified ({reservation.status.value}).")

    def reservation_payment(self):
        reservation = self.db.find_reservation(self.ask_int("Reservation ID"))
        if reservation is None:
            self.console.print("Reservation not found.")
            return
        self.console.print(f"Due: {self.money(reservation.due_amount)}")
        self.db.make_reservation_payment(reservation.id, self.ask_float("Amount", reservation.due_amount))
        reservation = self.db.find_reservation(reservation.id)
        self.ok(f"Payment recorded. Status: {reservation.payment_status.value}, "
                f"due {self.money(reservation.due_amount)}.")

    def today(self):
        self.console.print("[bold]Arrivals[/]")
        self.show_reservations(self.db.find_today_check_ins())
        self.console.print("[bold]Departures[/]")
        self.show_reservations(self.db.find_today_check_outs())

    def reservations_by_range(self):
        start = self.ask_date("From", datetime.date.today())
        end = self.ask_date("To", datetime.date.today() + datetime.timedelta(days=30))
        # Include stays that end during the last day
        self.show_reservations(self.db.search_reservations_by_date_range(start, end + datetime.timedelta(days=1)))

    # ==================== EMPLOYEES ====================

    def employees_menu(self):
        self.run_menu("Employee Management", [
            ("View all employees", lambda: self.show_employees(self.db.employees)),
            ("Add employee", self.add_employee),
            ("Update employee", self.update_employee),
            ("Employees by department", self.employees_by_department),
            ("Change my password", self.change_password),
        ])

    def show_employees(self, employees):
        table = Table(title=f"Employees ({len(employees)})")
        for column in ("ID", "Name", "Position", "Department", "Shift", "Salary", "Email"):
            table.add_column(column)
        for e in employees:
            table.add_row(str(e.id), escape(e.name), escape(e.position), e.department_string, e.shift_string,
                          self.money(e.monthly_salary), escape(e.email))
        self.console.print(table)

    def add_employee(self):
        require_admin(self.session, "add employee")
        employee_id = self.db.add_employee(
            self.ask_text("Name"), self.ask_text("Position"), self.ask_choice("Department", Department),
            self.ask_choice("Shift", Shift), self.ask_float("Monthly salary"), self.ask_text("Contact number"),
            self.ask_text("Address"), self.ask_text("Join date", datetime.date.today().isoformat()))
        employee = self.db.find_employee(employee_id)
        self.ok(f"Employee #{employee_id} added. Login: {employee.email} "
                f"(default password '{data.employees['default_password']}').")

    def update_employee(self):
        require_admin(self.session, "update employee")
        employee = self.db.find_employee(self.ask_int("Employee ID"))
        if employee is None:
            self.console.print("Employee not found.")
            return
        self.db.update_employee_info(employee.id, self.ask_text("Position", employee.position),
                                     self.ask_choice("Department", Department, employee.department),
                                     self.ask_choice("Shift", Shift, employee.shift),
                                     self.ask_float("Monthly salary", employee.salary))
        self.ok("Employee updated.")

    def employees_by_department(self):
        self.show_employees(self.db.find_employees_by_department(self.ask_choice("Department", Department)))

    def change_password(self):
        new_password = Prompt.ask("New password", password=True, console=self.console)
        confirm = Prompt.ask("Confirm password", password=True, console=self.console)
        self.db.change_employee_password(self.session.employee_id, new_password, confirm)
        self.ok("Password changed.")

    # ==================== BILLING ====================

    def billing_menu(self):
        self.run_menu("Billing", [
            ("Create bill", self.create_bill),
            ("View bill", self.view_bill),
            ("Add room charge", self.add_room_charge),
            ("Add food order", self.add_food),
            ("Add service", self.add_service),
            ("Add other item", self.add_other_item),
            ("Remove item", self.remove_item),
            ("Process payment", self.pay_bill),
            ("Unpaid bills", self.unpaid_bills),
        ])

    def ask_bill(self):
        bill = self.db.find_bill(self.ask_int("Bill ID"))
        if bill is None:
            self.console.print("Bill not found.")
        return bill

    def show_bill(self, bill):
        table = Table(title=f"Bill #{bill.id} (reservation #{bill.reservation_id})")
        for column in ("#", "Description", "Amount", "Qty", "Total"):
            table.add_column(column)
        for idx, item in enumerate(bill.items):
            table.add_row(str(idx), escape(item.description), self.money(item.amount), str(item.quantity),
                          self.money(item.total))
        table.add_section()
        table.add_row("", "Subtotal", "", "", self.money(bill.subtotal))
        table.add_row("", f"Tax ({bill.tax_rate * 100:.0f}%)", "", "", self.money(bill.tax))
        if bill.discount > 0:
            table.add_row("", f"Discount ({bill.discount * 100:.0f}%)", "", "", f"-{self.money(bill.discount_amount)}")
        table.add_row("", "[bold]Total[/]", "", "", f"[bold]{self.money(bill.total)}[/]")
        self.console.print(table)
        if bill.is_paid:
            self.console.print(f"[green]Paid[/] by {escape(bill.payment_method)} on {bill.payment_date:%Y-%m-%d %H:%M}")
        else:
            self.console.print(f"[yellow]Balance due: {self.money(bill.balance_due)}[/]")

    def create_bill(self):
        reservation_id = self.ask_int("Reservation ID")
        discount = self.ask_float("Discount (0-1)", 0.0)
        bill_id = self.db.create_bill(reservation_id, discount=discount)
        if Confirm.ask("Add room charge now?", default=True, console=self.console):
            self.db.add_room_charge(bill_id)
        self.ok(f"Bill #{bill_id} created.")
        self.show_bill(self.db.find_bill(bill_id))

    def view_bill(self):
        bill = self.ask_bill()
        if bill is not None:
            self.show_bill(bill)

    def add_room_charge(self):
        bill = self.ask_bill()
        if bill is not None and self.db.add_room_charge(bill.id):
            self.ok("Room charge added.")

    def add_food(self):
        bill = self.ask_bill()
        if bill is None:
            return
        item = Prompt.ask("Item", choices=list(data.food_items), console=self.console)
        quantity = self.ask_int("Quantity", 1)
        self.db.add_bill_item(bill.id, f"Food - {item}", data.food_items[item], quantity)
        self.ok(f"{quantity} x {item} added.")

    def add_service(self):
        bill = self.ask_bill()
        if bill is None:
            return
        service = Prompt.ask("Service", choices=list(data.services), console=self.console)
        self.db.add_bill_item(bill.id, f"Service - {service}", data.services[service])
        self.ok(f"{service} added.")

    def add_other_item(self):
        bill = self.ask_bill()
        if bill is not None:
            self.db.add_bill_item(bill.id, self.ask_text("Description"), self.ask_float("Amount"),
                                  self.ask_int("Quantity", 1))
            self.ok("Item added.")

    def remove_item(self):
        bill = self.ask_bill()
        if bill is None:
            return
        self.show_bill(bill)
        self.db.remove_bill_item(bill.id, self.ask_int("Item #"))
        self.ok("Item removed.")

    def pay_bill(self):
        bill = self.ask_bill()
        if bill is None:
            return
        self.show_bill(bill)
        method = Prompt.ask("Payment method", choices=data.payment_methods, default=data.payment_methods[0],
                            console=self.console)
        self.db.process_payment(bill.id, method)
        self.ok(f"Bill #{bill.id} paid ({self.money(bill.total)}).")

    def unpaid_bills(self):
        table = Table(title="Unpaid bills")
        for column in ("Bill", "Reservation", "Items", "Balance due"):
            table.add_column(column)
        for bill in self.db.find_unpaid_bills():
            table.add_row(str(bill.id), str(bill.reservation_id), str(len(bill.items)), self.money(bill.balance_due))
        self.console.print(table)

    # ==================== REPORTS ====================

    def reports_menu(self):
        self.run_menu("Reports", [
            ("Hotel statistics", self.statistics),
            ("Revenue report", self.revenue_report),
            ("Occupancy report", self.occupancy_report),
            ("Customer report", self.customer_report),
        ])

    def key_values(self, title: str, rows):
        table = Table(title=title, show_header=False)
        table.add_column()
        table.add_column(justify="right")
        for key, value in rows:
            table.add_row(escape(str(key)), escape(str(value)))
        self.console.print(table)

    def statistics(self):
        stats = self.db.get_statistics()
        self.key_values("Hotel statistics", [
            ("Rooms", stats["rooms"]),
            ("Available rooms", stats["available_rooms"]),
            ("Occupancy", f"{stats['occupancy_percent']:.1f}%"),
            ("Customers", stats["customers"]),
            ("Reservations", stats["reservations"]),
            ("Active reservations", stats["active_reservations"]),
            ("Employees", stats["employees"]),
            ("Bills (unpaid)", f"{stats['bills']} ({stats['unpaid_bills']})"),
            ("Total revenue", self.money(stats["total_revenue"])),
            ("Today's revenue", self.money(stats["today_revenue"])),
        ])

    def revenue_report(self):
        require_manager(self.session, "revenue report")
        report = reports.revenue_report(self.db)
        self.key_values("Revenue", [
            ("Total revenue", self.money(report["total_revenue"])),
            ("Today's revenue", self.money(report["today_revenue"])),
            ("Paid bills", report["paid_bills"]),
            ("Unpaid bills", report["unpaid_bills"]),
            ("Outstanding balance", self.money(report["outstanding_balance"])),
            ("Reservation payments received", self.money(report["reservation_payments_received"])),
            ("Reservation payments due", self.money(report["reservation_payments_due"])),
        ])
        self.key_values("Last 7 days", [(day, self.money(v)) for day, v in report["daily_revenue"].items()])

    def occupancy_report(self):
        report = reports.occupancy_report(self.db)
        self.key_values("Rooms by status", report["by_status"].items())
        table = Table(title="Rooms by type")
        for column in ("Type", "Rooms", "Available", "Occupied %"):
            table.add_column(column)
        for room_type, entry in report["by_type"].items():
            table.add_row(room_type, str(entry["rooms"]), str(entry["available"]),
                          f"{report['occupancy_rate'].get(room_type, 0)}%")
        self.console.print(table)
        self.key_values("Most booked room types", report["popular_rooms"])

    def customer_report(self):
        report = reports.customer_report(self.db)
        self.key_values("Customers", [
            ("Total customers", report["total_customers"]),
            ("Returning customers", report["returning_customers"]),
            ("New this month", report["new_this_month"]),
            ("Total visits", report["total_visits"]),
            ("Lifetime spend", self.money(report["lifetime_spend"])),
        ])
        table = Table(title="Top customers")
        for column in ("ID", "Name", "Visits", "Spent"):
            table.add_column(column)
        for c in report["top_customers"]:
            table.add_row(str(c["id"]), escape(c["name"]), str(c["visits"]), self.money(c["spent"]))
        self.console.print(table)

    # ==================== SETTINGS ====================

    def settings_menu(self):
        self.run_menu("Settings", [
            ("Hotel information", self.hotel_info),
            ("Backup data", self.backup),
            ("Restore data", self.restore),
            ("View system log", self.view_logs),
        ])

    def hotel_info(self):
        hotel = self.job['hotel']
        self.key_values("Hotel information", [
            ("Name", hotel['name']),
            ("Address", hotel['address']),
            ("Contact", hotel['contact']),
            ("Email", hotel['email']),
            ("Website", hotel['website']),
            ("Data directory", os.path.abspath(self.db.data_dir)),
        ])

    def backup(self):
        require_admin(self.session, "backup data")
        self.ok(f"Backup written to {self.db.backup_data()}")

    def restore(self):
        require_admin(self.session, "restore data")
        backup_dir = self.ask_text("Backup directory")
        if Confirm.ask(f"Replace all current data with {backup_dir}?", default=False, console=self.console):
            self.db.restore_data(backup_dir)
            self.ok("Data restored.")

    def view_logs(self, lines: int = 20):
        require_manager(self.session, "view logs")
        log_file = self.job['logging'].get('file')
        if not log_file or not os.path.exists(log_file):
            self.console.print("No log file yet.")
            return
        with open(log_file, "r", encoding="utf-8", errors="replace") as f:
            tail = deque(f, maxlen=lines)
        self.console.print(Panel(escape("".join(tail).rstrip()), title=escape(log_file)))
