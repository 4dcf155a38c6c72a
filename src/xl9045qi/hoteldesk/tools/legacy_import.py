# Convert the positional .dat files of the old front desk program into the current format

import argparse
import datetime
import os.path
import sys
from typing import Optional

import tqdm
from rich import print

from xl9045qi.hoteldesk import codec
from xl9045qi.hoteldesk.database import COLLECTIONS
from xl9045qi.hoteldesk.errors import FileCorruptedError, HotelError, ValidationError
from xl9045qi.hoteldesk.models import (
    Bill, BillItem, Customer, Department, Employee, Reservation, ReservationStatus,
    Room, RoomStatus, RoomType, Shift, hash_password,
)

# Legacy files store enums as their 1-based position
LEGACY_ROOM_TYPES = dict(enumerate(RoomType, start=1))
LEGACY_ROOM_STATUSES = dict(enumerate(RoomStatus, start=1))
LEGACY_RESERVATION_STATUSES = dict(enumerate(ReservationStatus, start=1))
LEGACY_DEPARTMENTS = dict(enumerate(Department, start=1))
LEGACY_SHIFTS = dict(enumerate(Shift, start=1))


def from_epoch(value: str) -> Optional[datetime.datetime]:
    """Legacy timestamps are seconds since the epoch in local time; 0 means unset."""
    seconds = int(value)
    return datetime.datetime.fromtimestamp(seconds) if seconds > 0 else None

def _enum(mapping: dict, value: str, what: str):
    try:
        return mapping[int(value)]
    except (KeyError, ValueError):
        raise ValueError(f"unknown {what} code '{value}'")

def _records(text: str, source: str) -> tuple[int, list[str]]:
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise FileCorruptedError(source, "missing record count")
    try:
        count = int(lines[0].split()[0])
    except ValueError:
        raise FileCorruptedError(source, f"line 1: record count '{lines[0].strip()}' is not a number")
    return count, lines[1:]

def _parse_lines(text: str, source: str, parse_line) -> list:
    """Apply parse_line to each non-blank record line, checking the count header."""
    count, lines = _records(text, source)
    records = []
    for line_no, line in enumerate(lines, start=2):
        if not line.strip():
            continue
        try:
            records.append(parse_line(line))
        except (ValueError, IndexError, ValidationError) as e:
            raise FileCorruptedError(source, f"line {line_no}: {e}") from e
    if len(records) != count:
        raise FileCorruptedError(source, f"header says {count} record(s) but {len(records)} found")
    return records

def parse_legacy_rooms(text: str, source: str = "rooms.dat") -> list[Room]:
    """Rooms: 'number type status price capacity feature_count feature...' (features are single words)."""
    def parse(line):
        tokens = line.split()
        feature_count = int(tokens[5])
        features = tokens[6:6 + feature_count]
        if len(features) != feature_count:
            raise ValueError(f"expected {feature_count} feature(s), found {len(features)}")
        return Room(number=int(tokens[0]), type=_enum(LEGACY_ROOM_TYPES, tokens[1], "room type"),
                    status=_enum(LEGACY_ROOM_STATUSES, tokens[2], "room status"),
                    price_per_night=float(tokens[3]), capacity=int(tokens[4]), features=features)
    return _parse_lines(text, source, parse)

def parse_legacy_customers(text: str, source: str = "customers.dat") -> list[Customer]:
    """Customers: 'id name|email|phone|address|id_proof|registered visits spent'."""
    def parse(line):
        customer_id, rest = line.strip().split(" ", 1)
        parts = rest.split("|")
        if len(parts) != 6:
            raise ValueError("expected 5 '|'-separated text fields")
        name, email, phone, address, id_proof, tail = parts
        registered, visits, spent = tail.split()
        return Customer(id=int(customer_id), name=name.strip(), email=email.strip(), phone=phone.strip(),
                        address=address.strip(), id_proof=id_proof.strip(),
                        registration_date=from_epoch(registered) or datetime.datetime.now(),
                        total_visits=int(visits), total_spent=float(spent))
    return _parse_lines(text, source, parse)

def parse_legacy_reservations(text: str, source: str = "reservations.dat") -> list[Reservation]:
    """Reservations: 11 numeric fields, free-text requests, then the booking timestamp.

    The stored total and payment status are dropped; both are derived from rate,
    nights and the paid amount.
    """
    def parse(line):
        tokens = line.split()
        if len(tokens) < 12:
            raise ValueError("expected at least 12 fields")
        head, booked = tokens[:11], tokens[-1]
        requests = " ".join(tokens[11:-1]).strip().rstrip("|").strip()
        return Reservation(id=int(head[0]), customer_id=int(head[1]), room_number=int(head[2]),
                           check_in_date=from_epoch(head[3]), check_out_date=from_epoch(head[4]),
                           guests=int(head[5]), room_rate=float(head[6]), paid_amount=float(head[8]),
                           status=_enum(LEGACY_RESERVATION_STATUSES, head[9], "reservation status"),
                           special_requests=requests,
                           booking_date=from_epoch(booked) or datetime.datetime.now())
    return _parse_lines(text, source, parse)

def parse_legacy_employees(text: str, source: str = "employees.dat") -> list[Employee]:
    """Employees: 11 '|'-separated fields ending in email and plaintext password. Passwords are hashed."""
    def parse(line):
        fields = line.rstrip("\n").split("|")
        if len(fields) < 11:
            raise ValueError("expected 11 '|'-separated fields")
        password = fields[10]
        return Employee(id=int(fields[0]), name=fields[1], position=fields[2],
                        department=_enum(LEGACY_DEPARTMENTS, fields[3], "department"),
                        shift=_enum(LEGACY_SHIFTS, fields[4], "shift"), salary=float(fields[5]),
                        contact_number=fields[6], address=fields[7], join_date=fields[8],
                        email=fields[9], password_hash=hash_password(password) if password else "")
    count, lines = _records(text, source)
    records = []
    for line_no, line in tqdm.tqdm(list(enumerate(lines, start=2)), desc="Employees"):
        if not line.strip():
            continue
        try:
            records.append(parse(line))
        except (ValueError, ValidationError) as e:
            raise FileCorruptedError(source, f"line {line_no}: {e}") from e
    if len(records) != count:
        raise FileCorruptedError(source, f"header says {count} record(s) but {len(records)} found")
    return records

def parse_legacy_bills(text: str, source: str = "bills.dat") -> list[Bill]:
    """Bills: a header 'id reservation tax discount paid method paid_at item_count' followed by
    item_count lines of 'description|amount|quantity'. The method may be several words or empty."""
    count, lines = _records(text, source)
    lines = [(line_no, line) for line_no, line in enumerate(lines, start=2) if line.strip()]
    bills = []
    pos = 0
    while pos < len(lines):
        line_no, header = lines[pos]
        try:
            tokens = header.split()
            if len(tokens) < 6:
                raise ValueError("bill header needs at least 6 fields")
            item_count = int(tokens[-1])
            bill = Bill(id=int(tokens[0]), reservation_id=int(tokens[1]), tax_rate=float(tokens[2]),
                        discount=float(tokens[3]), is_paid=tokens[4] == "1",
                        payment_method=" ".join(tokens[5:-2]), payment_date=from_epoch(tokens[-2]))
            items = lines[pos + 1:pos + 1 + item_count]
            if len(items) != item_count:
                raise ValueError(f"expected {item_count} item line(s), found {len(items)}")
            for line_no, item_line in items:
                description, amount, quantity = item_line.rsplit("|", 2)
                bill.items.append(BillItem(description=description, amount=float(amount), quantity=int(quantity)))
        except (ValueError, ValidationError) as e:
            raise FileCorruptedError(source, f"line {line_no}: {e}") from e
        bills.append(bill)
        pos += 1 + item_count
    if len(bills) != count:
        raise FileCorruptedError(source, f"header says {count} record(s) but {len(bills)} found")
    return bills

PARSERS = {
    'rooms': parse_legacy_rooms,
    'customers': parse_legacy_customers,
    'reservations': parse_legacy_reservations,
    'employees': parse_legacy_employees,
    'bills': parse_legacy_bills,
}

def import_legacy(input_dir: str, output_dir: str) -> dict:
    """Convert every legacy file found in input_dir and write the result to output_dir.

    Returns:
        dict: Number of records converted per collection. Missing files are skipped.
    """
    converted = {}
    for name, parse in PARSERS.items():
        file_name, model = COLLECTIONS[name][0], COLLECTIONS[name][1]
        source = os.path.join(input_dir, file_name)
        if not os.path.exists(source):
            print(f"  {file_name}: not found, skipping")
            continue
        with open(source, "r", encoding="utf-8", errors="replace") as f:
            records = parse(f.read(), source)
        codec.save_collection(os.path.join(output_dir, file_name), records, model)
        converted[name] = len(records)
        print(f"  {file_name}: {len(records)} record(s)")
    return converted

def main():

    print()
    print("  Hotel Desk  --  Legacy Data Import Tool  v0.1")
    print()

    parser = argparse.ArgumentParser(description="Convert legacy hotel .dat files to the current format")

    parser.add_argument("INPUT_DIR", type=str, help="Directory with the legacy .dat files")
    parser.add_argument("-o", "--output", type=str, default="data", help="Directory to write converted files to")

    args = parser.parse_args()

    input_dir = os.path.abspath(args.INPUT_DIR)
    output_dir = os.path.abspath(args.output)
    if input_dir == output_dir:
        print("Error: output directory must differ from the input directory.")
        sys.exit(1)

    print(f"Reading legacy files from: {input_dir}")
    try:
        converted = import_legacy(input_dir, output_dir)
    except HotelError as e:
        print(f"Error: {e.full_message()}")
        sys.exit(1)

    if not converted:
        print("No legacy files found.")
        sys.exit(1)
    print(f"Import completed. Results are in {output_dir}")

if __name__ == "__main__":
    main()
