# Generates individual employee records

import datetime

from xl9045qi.hoteldesk import data
from xl9045qi.hoteldesk.generators import r, generate_address, generate_us_phone, bounded_normal as rand
from xl9045qi.hoteldesk.generators import get_first_name, get_last_name
from xl9045qi.hoteldesk.models import Department, Shift


def generate_employee(department: Department = None, today: datetime.date = None) -> dict:
    """Generate the details of a random employee.

    Args:
        department (Department, optional): Department to hire into. Random if None.
        today (date, optional): Reference date for the join date; defaults to today.

    Returns:
        dict: Keyword arguments for HDDatabase.add_employee().
    """
    department = Department(department) if department is not None else r.choice(list(Department))
    today = today or datetime.date.today()

    salary_cfg = data.employees['salary'][department.value]
    salary = round(rand(salary_cfg['mean'], salary_cfg['sd'], salary_cfg['min']), 2)

    join_date = today - datetime.timedelta(days=r.randrange(30, 365 * 8))

    return {
        "name": f"{get_first_name()} {get_last_name()}",
        "position": r.choice(data.employees['positions'][department.value]),
        "department": department,
        "shift": r.choice(list(Shift)),
        "salary": float(salary),
        "contact": generate_us_phone(),
        "address": generate_address(),
        "join_date": join_date.isoformat(),
    }
