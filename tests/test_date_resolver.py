import unittest
import datetime
from unittest.mock import patch

from notiontasks.date_resolver import DateDetails, get_current_date_details, reminder_time, week_of_month


class TestDateDetails(unittest.TestCase):

    def test_fixed_date(self):
        """2024-10-15 is a Tuesday in the third week of October."""
        details = get_current_date_details(datetime.datetime(2024, 10, 15, 9, 30))
        self.assertEqual(details, DateDetails(year=2024, month="October", week=3, day="Tuesday"))

    def test_week_boundaries(self):
        for day_of_month, expected_week in [(1, 1), (7, 1), (8, 2), (14, 2), (15, 3), (28, 4), (29, 5), (31, 5)]:
            self.assertEqual(week_of_month(day_of_month), expected_week, f"day {day_of_month}")

    def test_month_end(self):
        details = get_current_date_details(datetime.datetime(2024, 12, 31))
        self.assertEqual(details.month, "December")
        self.assertEqual(details.week, 5)
        self.assertEqual(details.day, "Tuesday")

    def test_defaults_to_now(self):
        fixed_now = datetime.datetime(2024, 2, 29, 23, 59, 59)
        with patch('notiontasks.date_resolver.datetime.datetime') as mock_datetime:
            mock_datetime.now.return_value = fixed_now
            details = get_current_date_details()
        self.assertEqual(details, DateDetails(year=2024, month="February", week=5, day="Thursday"))


class TestReminderTime(unittest.TestCase):

    def test_aware_datetime_is_converted_to_utc(self):
        plus_two = datetime.timezone(datetime.timedelta(hours=2))
        now = datetime.datetime(2024, 10, 15, 9, 30, 12, 345000, tzinfo=plus_two)
        self.assertEqual(reminder_time(now), "2024-10-15T21:00:00.000Z")

    def test_utc_datetime(self):
        now = datetime.datetime(2024, 10, 15, 1, 0, tzinfo=datetime.timezone.utc)
        self.assertEqual(reminder_time(now), "2024-10-15T23:00:00.000Z")

    def test_negative_offset_rolls_into_next_utc_day(self):
        minus_five = datetime.timezone(datetime.timedelta(hours=-5))
        now = datetime.datetime(2024, 10, 15, 8, 0, tzinfo=minus_five)
        self.assertEqual(reminder_time(now), "2024-10-16T04:00:00.000Z")

    def test_naive_datetime_uses_local_timezone(self):
        now = datetime.datetime(2024, 10, 15, 8, 0)
        expected = datetime.datetime(2024, 10, 15, 23).astimezone().astimezone(datetime.timezone.utc)
        self.assertEqual(reminder_time(now), expected.strftime("%Y-%m-%dT%H:%M:%S.000Z"))

    def test_custom_hour(self):
        now = datetime.datetime(2024, 10, 15, 8, 0, tzinfo=datetime.timezone.utc)
        self.assertEqual(reminder_time(now, hour=18), "2024-10-15T18:00:00.000Z")


if __name__ == '__main__':
    unittest.main()
