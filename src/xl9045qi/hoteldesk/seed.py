import datetime
import logging
from typing import Optional

import tqdm
from rich import print

from xl9045qi.hoteldesk import data
from xl9045qi.hoteldesk.generators import r

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from xl9045qi.hoteldesk.database import HDDatabase

logger = logging.getLogger(__name__)


def seed_sample_data(db: 'HDDatabase', now: Optional[datetime.datetime] = None) -> dict:
    """Insert the packaged sample hotel into the store.

    Rooms, customers and employees come from data.sample. Reservations start
    'days_ahead' days after 'now' and refer to sample rooms and customers by
    position; bills refer to sample reservations the same way. A bill with a
    'payment' entry is settled with that method.

    Args:
        db (HDDatabase): The store to fill. Usually empty.
        now (datetime, optional): Reference time for reservation dates.

    Returns:
        dict: Lists of the created ids, keyed by collection name.
    """
    now = now or datetime.datetime.now()
    sample = data.sample
    created = {"rooms": [], "customers": [], "employees": [], "reservations": [], "bills": []}

    for room in sample['rooms']:
        created["rooms"].append(db.add_room(room['type'], room['price'], room['capacity'], room['features']))

    for customer in sample['customers']:
        created["customers"].append(db.add_customer(**customer))

    for employee in sample['employees']:
        created["employees"].append(db.add_employee(**employee))

    for res in sample['reservations']:
        check_in = now + datetime.timedelta(days=res['days_ahead'])
        check_out = check_in + datetime.timedelta(days=res['nights'])
        created["reservations"].append(db.make_reservation(
            created["customers"][res['customer']], created["rooms"][res['room']],
            check_in, check_out, res['guests'], res.get('requests', "")))

    for bill in sample['bills']:
        bill_id = db.create_bill(created["reservations"][bill['reservation']],
                                 bill.get('tax_rate'), bill.get('discount', 0.0))
        for item in bill['items']:
            db.add_bill_item(bill_id, item['description'], item['amount'], item.get('quantity', 1))
        if bill.get('payment'):
            db.process_payment(bill_id, bill['payment'])
        created["bills"].append(bill_id)

    logger.info("Sample data loaded: %s", ", ".join(f"{len(v)} {k}" for k, v in created.items()))
    return created

def generate_demo_data(db: 'HDDatabase', rooms: int, customers: int, employees: int, progress: bool = True) -> dict:
    """Add randomly generated rooms, customers and employees to the store.

    Returns:
        dict: Lists of the created ids, keyed by collection name.
    """
    from xl9045qi.hoteldesk.generators.room import generate_room
    from xl9045qi.hoteldesk.generators.customer import generate_customer
    from xl9045qi.hoteldesk.generators.employee import generate_employee
    from xl9045qi.hoteldesk.models import Department

    created = {"rooms": [], "customers": [], "employees": []}

    for _ in tqdm.tqdm(range(rooms), desc="Generating rooms", disable=not progress):
        created["rooms"].append(db.add_room(**generate_room()))

    for _ in tqdm.tqdm(range(customers), desc="Generating customers", disable=not progress):
        created["customers"].append(db.add_customer(**generate_customer()))

    # Make sure every department has somebody before filling the rest at random
    departments = list(Department)
    r.shuffle(departments)
    with tqdm.tqdm(total=employees, desc="Generating employees", disable=not progress) as pbar:
        for idx in range(employees):
            department = departments[idx] if idx < len(departments) else None
            created["employees"].append(db.add_employee(**generate_employee(department)))
            pbar.update(1)

    if progress:
        print(f"{rooms} rooms, {customers} customers and {employees} employees generated successfully.")
    return created
