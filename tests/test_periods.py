"""Tests for opening-hours period parsing"""

import unittest

from booking_app.domain.scheduling.periods import (
    generate_period_slots,
    minutes_to_time,
    parse_clock,
    parse_period,
    time_to_minutes,
)


class TestClockHelpers(unittest.TestCase):
    def test_time_round_trip_values(self):
        self.assertEqual(time_to_minutes("09:30"), 570)
        self.assertEqual(time_to_minutes("14:00:00"), 840)
        self.assertEqual(minutes_to_time(570), "09:30")
        self.assertEqual(minutes_to_time(0), "00:00")

    def test_parse_clock(self):
        self.assertEqual(parse_clock("18h30"), 1110)
        self.assertEqual(parse_clock("18h"), 1080)
        self.assertIsNone(parse_clock("soir"))
        self.assertIsNone(parse_clock(None))

    def test_parse_period(self):
        self.assertEqual(parse_period("9h-13h"), (540, 780))
        self.assertEqual(parse_period("14h30 - 19h"), (870, 1140))
        self.assertIsNone(parse_period("fermé"))


class TestGeneratePeriodSlots(unittest.TestCase):
    def test_single_period_excludes_closing_time(self):
        slots = generate_period_slots("9h-13h")

        self.assertEqual(len(slots), 16)
        self.assertEqual(slots[0], "09:00")
        self.assertEqual(slots[-1], "12:45")
        self.assertNotIn("13:00", slots)

    def test_half_hour_bounds(self):
        self.assertEqual(generate_period_slots("9h30-10h30"), ["09:30", "09:45", "10:00", "10:15"])

    def test_multiple_periods_with_cutoff(self):
        slots = generate_period_slots("9h-12h|14h-17h", "16h30")

        self.assertEqual(len(slots), 12 + 11)
        self.assertIn("11:45", slots)
        self.assertNotIn("12:00", slots)
        self.assertEqual(slots[-1], "16:30")
        self.assertNotIn("16:45", slots)

    def test_cutoff_after_close_does_not_extend_period(self):
        self.assertEqual(generate_period_slots("9h-13h", "18h30"), generate_period_slots("9h-13h"))

    def test_cutoff_is_clamped_to_close(self):
        self.assertEqual(generate_period_slots("9h-19h", "20h"), generate_period_slots("9h-19h"))

    def test_unreadable_cutoff_is_ignored(self):
        self.assertEqual(generate_period_slots("9h-10h", "soir"), ["09:00", "09:15", "09:30", "09:45"])

    def test_unreadable_period_is_skipped(self):
        self.assertEqual(generate_period_slots("fermé|9h-10h"), ["09:00", "09:15", "09:30", "09:45"])
        self.assertEqual(generate_period_slots("fermé"), [])

    def test_overlapping_periods_are_deduplicated(self):
        slots = generate_period_slots("9h-10h | 9h30-10h30")
        self.assertEqual(slots, ["09:00", "09:15", "09:30", "09:45", "10:00", "10:15"])

    def test_empty_periods(self):
        self.assertEqual(generate_period_slots(None), [])
        self.assertEqual(generate_period_slots(""), [])

    def test_custom_interval(self):
        self.assertEqual(generate_period_slots("9h-10h", interval=30), ["09:00", "09:30"])


if __name__ == "__main__":
    unittest.main()
