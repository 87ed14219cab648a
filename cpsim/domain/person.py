from datetime import date

from cpsim.utils.days import is_day_between


class PersonError(Exception):
    """Exception raised for invalid person or availability definitions."""

    pass


class Availability:
    """
    A date range, inclusive at both ends, during which a person works a
    fixed number of hours per day on the project.
    """

    def __init__(self, start_date, end_date, hours_per_day):
        if not isinstance(start_date, date) or not isinstance(end_date, date):
            raise PersonError("Availability dates must be dates")
        if end_date < start_date:
            raise PersonError(
                f"Availability ends ({end_date}) before it starts ({start_date})"
            )
        if not isinstance(hours_per_day, (int, float)) or hours_per_day < 0:
            raise PersonError("Hours per day must be a non-negative number")

        self.start_date = start_date
        self.end_date = end_date
        self.hours_per_day = float(hours_per_day)

    def covers(self, day):
        return is_day_between(day, self.start_date, self.end_date)

    def __repr__(self):
        return (
            f"Availability({self.start_date.isoformat()} to "
            f"{self.end_date.isoformat()} at {self.hours_per_day:g} hours)"
        )


class Person:
    """
    A person who may be assigned to tasks.

    Availability windows are kept in declaration order. Overlaps are not
    rejected: on any given day the first window covering it wins.
    """

    def __init__(self, id, availability=None):
        if not id or not isinstance(id, str):
            raise PersonError("Person ID must be a non-empty string")
        self.id = id
        self.availability = list(availability) if availability else []

    def add_availability(self, start_date, end_date, hours_per_day):
        """Append an availability window and return self for chaining."""
        self.availability.append(Availability(start_date, end_date, hours_per_day))
        return self

    def hours_on(self, day):
        """
        Get the hours this person is available on a specific day.

        Args:
            day: The date to check

        Returns:
            float: Hours from the first window covering the day, or 0
        """
        for window in self.availability:
            if window.covers(day):
                return window.hours_per_day
        return 0.0

    def __repr__(self):
        return f"Person(id={self.id!r}, windows={len(self.availability)})"
