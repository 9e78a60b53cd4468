"""Tests for prestation duration parsing"""

import unittest

from booking_app.domain.scheduling.durations import parse_duration_to_minutes


class TestParseDuration(unittest.TestCase):
    def test_hours_and_minutes(self):
        self.assertEqual(parse_duration_to_minutes("1h30"), 90)
        self.assertEqual(parse_duration_to_minutes("2h"), 120)
        self.assertEqual(parse_duration_to_minutes("1H15"), 75)

    def test_minutes_only(self):
        self.assertEqual(parse_duration_to_minutes("45min"), 45)
        self.assertEqual(parse_duration_to_minutes("30 min"), 30)
        self.assertEqual(parse_duration_to_minutes(" 20 minutes "), 20)

    def test_bare_integer(self):
        self.assertEqual(parse_duration_to_minutes("45"), 45)
        self.assertEqual(parse_duration_to_minutes(60), 60)

    def test_hours_take_precedence_over_minutes(self):
        self.assertEqual(parse_duration_to_minutes("1h (soit 60 min)"), 60)

    def test_unparsable_falls_back_to_default(self):
        for value in (None, "", "   ", "sur devis", "0", "0min", 0, -5, True, 1.5):
            with self.subTest(value=value):
                self.assertEqual(parse_duration_to_minutes(value), 90)

    def test_custom_default(self):
        self.assertEqual(parse_duration_to_minutes("variable", default=30), 30)


if __name__ == "__main__":
    unittest.main()
