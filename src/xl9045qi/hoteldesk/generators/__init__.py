import random

import numpy as np
from faker import Faker

from xl9045qi.hoteldesk import normalized_random_bounded

r = random.Random()
f = Faker()
_np_rng = np.random.default_rng()

# Name pools are filled once on first use; calling Faker per record is slow for bulk demo data
_POOL_SIZE = 2000
_first_names = None
_last_names = None
_street_names = None
_cities = None

def _init_name_pools():
    """Lazily initialize name pools on first use."""
    global _first_names, _last_names, _street_names, _cities
    if _first_names is None:
        _first_names = [f.first_name() for _ in range(_POOL_SIZE)]
        _last_names = [f.last_name() for _ in range(_POOL_SIZE)]
        _street_names = [f.street_name() for _ in range(_POOL_SIZE)]
        _cities = [f.city() for _ in range(_POOL_SIZE // 10)]

def seed(value: int):
    """Make the generators repeatable. The name pools are rebuilt from the seeded Faker."""
    global _np_rng, _first_names
    r.seed(value)
    Faker.seed(value)
    _np_rng = np.random.default_rng(value)
    _first_names = None

def bounded_normal(mean, sd, min_val=None, max_val=None) -> float:
    return normalized_random_bounded(mean, sd, min_val, max_val, rng=_np_rng)

def get_first_name():
    _init_name_pools()
    return r.choice(_first_names)

def get_last_name():
    _init_name_pools()
    return r.choice(_last_names)

def get_street_name():
    _init_name_pools()
    return r.choice(_street_names)

def get_city():
    _init_name_pools()
    return r.choice(_cities)

def generate_us_phone():
    """Generate a standard, valid US phone number in the format NXX-NXX-XXXX"""
    # Area and exchange codes don't start with 0 or 1
    area_code = r.randint(200, 999)
    exchange = r.randint(200, 999)
    subscriber = r.randint(0, 9999)
    return f"{area_code}-{exchange}-{subscriber:04d}"

def generate_street_number():
    """Generate a street number between 1 and 9999, with realistic distribution."""
    street_range = r.randrange(0, 3)
    if street_range == 0:
        street = r.randrange(1,10)
    elif street_range == 1:
        street = r.randrange(10,100)
    else:
        street = r.randrange(100,10000)
    return street

def generate_address() -> str:
    return f"{generate_street_number()} {get_street_name()}, {get_city()}"
