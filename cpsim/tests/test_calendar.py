import unittest
from datetime import date

from cpsim.services.calendar import (
    classify_all_weekdays,
    classify_nova_scotia,
    easter_sunday,
    get_work_day_classifier,
    nova_scotia_holidays,
)
from cpsim.utils.days import CalendarError, add_work_days, format_day, next_work_day, parse_day


class WeekdayClassifierTestCase(unittest.TestCase):
    def test_weekdays(self):
        # 2025-01-06 is a Monday
        week = [date(2025, 1, day) for day in range(6, 13)]
        self.assertEqual(
            [classify_all_weekdays(day) for day in week],
            [True, True, True, True, True, False, False],
        )

    def test_lookup_by_name(self):
        self.assertIs(get_work_day_classifier("weekdays"), classify_all_weekdays)
        self.assertIs(get_work_day_classifier("nova_scotia"), classify_nova_scotia)
        self.assertIs(get_work_day_classifier("mars"), classify_all_weekdays)
        self.assertIs(get_work_day_classifier(), classify_all_weekdays)


class NovaScotiaClassifierTestCase(unittest.TestCase):
    def test_2025_holidays(self):
        self.assertEqual(
            nova_scotia_holidays(2025),
            {
                date(2025, 1, 1),
                date(2025, 2, 17),
                date(2025, 4, 18),
                date(2025, 7, 1),
                date(2025, 9, 1),
                date(2025, 12, 25),
            },
        )
        for holiday in nova_scotia_holidays(2025):
            self.assertFalse(classify_nova_scotia(holiday))

    def test_weekend_holidays_move_to_monday(self):
        # 2022-01-01 was a Saturday and 2022-12-25 a Sunday
        self.assertFalse(classify_nova_scotia(date(2022, 1, 3)))
        self.assertFalse(classify_nova_scotia(date(2022, 12, 26)))
        self.assertTrue(classify_nova_scotia(date(2022, 1, 4)))

    def test_ordinary_days(self):
        self.assertTrue(classify_nova_scotia(date(2025, 1, 2)))
        self.assertFalse(classify_nova_scotia(date(2025, 1, 4)))

    def test_easter(self):
        self.assertEqual(easter_sunday(2024), date(2024, 3, 31))
        self.assertEqual(easter_sunday(2025), date(2025, 4, 20))
        self.assertEqual(easter_sunday(2026), date(2026, 4, 5))


class DayUtilitiesTestCase(unittest.TestCase):
    def test_parse_and_format(self):
        self.assertEqual(parse_day("2024-02-29"), date(2024, 2, 29))
        self.assertEqual(format_day(date(2025, 3, 4)), "2025-03-04")
        for text in ("2025-1-01", "2025/01/01", "not a date", None):
            with self.assertRaises(ValueError):
                parse_day(text)
        with self.assertRaises(ValueError):
            parse_day("2025-02-30")

    def test_next_work_day(self):
        self.assertEqual(next_work_day(date(2025, 1, 3), classify_all_weekdays), date(2025, 1, 6))
        self.assertEqual(next_work_day(date(2024, 2, 28), lambda day: True), date(2024, 2, 29))
        with self.assertRaises(CalendarError):
            next_work_day(date(2025, 1, 1), lambda day: False)

    def test_add_work_days(self):
        self.assertEqual(add_work_days(date(2025, 1, 1), 0, classify_all_weekdays), date(2025, 1, 1))
        self.assertEqual(add_work_days(date(2025, 1, 1), 5, classify_all_weekdays), date(2025, 1, 8))
        self.assertEqual(add_work_days(date(2024, 12, 31), 1, classify_nova_scotia), date(2025, 1, 2))


if __name__ == "__main__":
    unittest.main()
