import re
from datetime import date, timedelta

DAY_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Upper bound on consecutive non-working days before a classifier is
# considered broken.
MAX_CALENDAR_SCAN = 3660


class CalendarError(ValueError):
    """Exception raised when a work-day classifier yields no working day."""

    pass


def parse_day(text):
    """
    Parse a YYYY-MM-DD string into a date.

    Raises:
        ValueError: If the text is not a valid calendar day
    """
    match = DAY_PATTERN.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise ValueError(f"Invalid date format: {text}. Expected YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def format_day(day):
    return day.strftime("%Y-%m-%d")


def add_days(day, days):
    return day + timedelta(days=days)


def is_day_between(day, start, end):
    """Inclusive range check."""
    return start <= day <= end


def next_work_day(day, is_work_day):
    """Return the first working day strictly after the given day."""
    current = add_days(day, 1)
    scanned = 1
    while not is_work_day(current):
        if scanned >= MAX_CALENDAR_SCAN:
            raise CalendarError(f"No working day found within {MAX_CALENDAR_SCAN} days of {day}")
        current = add_days(current, 1)
        scanned += 1
    return current


def add_work_days(start, count, is_work_day):
    """
    Advance a date by a number of working days.

    Non-working days still advance the calendar but do not count
    towards the total. A count of zero returns the start date.
    """
    current = start
    remaining = count
    while remaining > 0:
        current = next_work_day(current, is_work_day)
        remaining -= 1
    return current
