"""
Work-day classifiers.

A classifier is a plain callable taking a date and returning True when
that date counts as a working day. The simulator and analyzer treat it
as an opaque predicate.
"""

from datetime import date, timedelta

SATURDAY = 5
SUNDAY = 6
MONDAY = 0


def classify_all_weekdays(day):
    """Monday through Friday are working days."""
    return day.weekday() not in (SATURDAY, SUNDAY)


def observed_date(year, month, day_of_month):
    """A fixed-date holiday falling on a weekend is observed the following Monday."""
    designated = date(year, month, day_of_month)
    if designated.weekday() == SUNDAY:
        return designated + timedelta(days=1)
    if designated.weekday() == SATURDAY:
        return designated + timedelta(days=2)
    return designated


def nth_weekday(year, month, weekday, n):
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def easter_sunday(year):
    """Anonymous Gregorian computus."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day_of_month = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day_of_month + 1)


def nova_scotia_holidays(year):
    return {
        observed_date(year, 1, 1),  # New Year's Day
        nth_weekday(year, 2, MONDAY, 3),  # Heritage Day
        easter_sunday(year) - timedelta(days=2),  # Good Friday
        observed_date(year, 7, 1),  # Canada Day
        nth_weekday(year, 9, MONDAY, 1),  # Labour Day
        observed_date(year, 12, 25),  # Christmas Day
    }


def classify_nova_scotia(day):
    """Weekdays, minus the Nova Scotia statutory holidays."""
    return classify_all_weekdays(day) and day not in nova_scotia_holidays(day.year)


WORK_DAY_CLASSIFIERS = {
    "weekdays": classify_all_weekdays,
    "nova_scotia": classify_nova_scotia,
}


def get_work_day_classifier(name=None):
    """
    Retrieve a work-day classifier given a known name.

    Unknown or missing names fall back to all weekdays.
    """
    return WORK_DAY_CLASSIFIERS.get(name, classify_all_weekdays)
