"""Tests for the weekly schedule and its two storage shapes"""

import unittest
from datetime import date
from types import SimpleNamespace

from booking_app.domain.scheduling.schedule import (
    SOURCE_AVAILABLE_SLOTS,
    SOURCE_OPENING_HOURS,
    WeeklySchedule,
    build_weekly_schedule,
    day_of_week,
)


def _hours(day, periods, last_appointment=None, is_active=True, display_order=0):
    return SimpleNamespace(
        day_of_week=day,
        periods=periods,
        last_appointment=last_appointment,
        is_active=is_active,
        display_order=display_order,
    )


def _slot(day, start, end="23:59", is_active=True):
    return SimpleNamespace(day_of_week=day, start_time=start, end_time=end, is_active=is_active)


class TestDayOfWeek(unittest.TestCase):
    def test_sunday_is_zero(self):
        self.assertEqual(day_of_week(date(2030, 1, 6)), 0)
        self.assertEqual(day_of_week(date(2030, 1, 8)), 2)
        self.assertEqual(day_of_week(date(2030, 1, 12)), 6)


class TestWeeklySchedule(unittest.TestCase):
    def test_from_opening_hours(self):
        schedule = WeeklySchedule.from_opening_hours(
            [_hours(2, "9h-12h"), _hours(3, "fermé"), _hours(4, "9h-10h", is_active=False)]
        )

        self.assertEqual(schedule.source, SOURCE_OPENING_HOURS)
        self.assertTrue(schedule.is_open(2))
        self.assertEqual(len(schedule.slots_for(2)), 12)
        self.assertEqual(schedule.slots_for(3), [])
        self.assertFalse(schedule.is_open(3))
        self.assertFalse(schedule.is_open(4))
        self.assertEqual(schedule.slots_for_date(date(2030, 1, 8)), schedule.slots_for(2))

    def test_first_row_by_display_order_wins(self):
        schedule = WeeklySchedule.from_opening_hours(
            [_hours(2, "14h-15h", display_order=5), _hours(2, "9h-10h", display_order=1)]
        )

        self.assertEqual(schedule.slots_for(2), ["09:00", "09:15", "09:30", "09:45"])

    def test_from_available_slots(self):
        schedule = WeeklySchedule.from_available_slots(
            [
                _slot(2, "14:00:00", "15:00:00"),
                _slot(2, "09:00"),
                _slot(2, "09:00"),
                _slot(5, "10:00", is_active=False),
                _slot(6, "n/a"),
            ]
        )

        self.assertEqual(schedule.source, SOURCE_AVAILABLE_SLOTS)
        self.assertEqual(schedule.slots_for(2), ["09:00", "14:00"])
        self.assertFalse(schedule.is_open(5))
        self.assertFalse(schedule.is_open(6))

    def test_empty_schedule(self):
        self.assertTrue(WeeklySchedule.from_opening_hours([]).is_empty)
        self.assertTrue(WeeklySchedule.from_available_slots([]).is_empty)


class TestBuildWeeklySchedule(unittest.TestCase):
    def test_auto_prefers_active_available_slots(self):
        schedule = build_weekly_schedule([_hours(2, "9h-12h")], [_slot(2, "14:00")], "auto")

        self.assertEqual(schedule.source, SOURCE_AVAILABLE_SLOTS)
        self.assertEqual(schedule.slots_for(2), ["14:00"])

    def test_auto_falls_back_to_opening_hours(self):
        schedule = build_weekly_schedule(
            [_hours(2, "9h-10h")], [_slot(2, "14:00", is_active=False)], "auto"
        )

        self.assertEqual(schedule.source, SOURCE_OPENING_HOURS)
        self.assertEqual(len(schedule.slots_for(2)), 4)

    def test_forced_source(self):
        schedule = build_weekly_schedule([_hours(2, "9h-10h")], [_slot(2, "14:00")], "opening_hours")
        self.assertEqual(schedule.source, SOURCE_OPENING_HOURS)

        schedule = build_weekly_schedule([_hours(2, "9h-10h")], [], "available_slots")
        self.assertTrue(schedule.is_empty)

    def test_unknown_source(self):
        with self.assertRaises(ValueError):
            build_weekly_schedule([], [], "calendar")


if __name__ == "__main__":
    unittest.main()
