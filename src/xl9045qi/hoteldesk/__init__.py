import datetime

import numpy as np

SECONDS_PER_DAY = 60 * 60 * 24

_PHONE_CHARS = set("0123456789+- ()")

def normalized_random_bounded(mean, sd, min_val=None, max_val=None, rng=None) -> float:
    value = (rng if rng is not None else np.random).normal(mean, sd)
    if min_val is not None:
        value = max(value, min_val)
    if max_val is not None:
        value = min(value, max_val)
    return value

def is_valid_email(email: str) -> bool:
    """An email needs an '@' and a '.' somewhere after it, but not directly after it."""
    at_pos = email.find("@")
    if at_pos == -1:
        return False
    dot_pos = email.find(".", at_pos)
    return dot_pos != -1 and dot_pos > at_pos + 1

def is_valid_phone(phone: str) -> bool:
    """At least 10 characters, made only of digits, '+', '-', spaces and parentheses."""
    return len(phone) >= 10 and all(c in _PHONE_CHARS for c in phone)

def nights_between(start: datetime.datetime, end: datetime.datetime) -> int:
    """Count whole 24-hour periods between two timestamps.

    Args:
        start (datetime): The earlier timestamp (check-in).
        end (datetime): The later timestamp (check-out).

    Returns:
        int: floor((end - start) / 86400 seconds). Negative if end is before start.
    """
    return int((end - start).total_seconds() // SECONDS_PER_DAY)

def format_currency(amount: float, symbol: str = "$") -> str:
    return f"{symbol}{amount:,.2f}"

def parse_date(value: str) -> datetime.datetime:
    """Parse a YYYY-MM-DD string into a midnight datetime."""
    return datetime.datetime.strptime(value.strip(), "%Y-%m-%d")
