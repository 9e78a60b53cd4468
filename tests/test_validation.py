"""Tests for input validation and sanitization"""

import unittest
from datetime import date

from booking_app.domain.appointments.validation import (
    sanitize_appointment,
    validate_appointment_payload,
    validate_appointment_query,
)
from booking_app.shared.validators import (
    parse_date_string,
    validate_client_name,
    validate_email,
    validate_french_phone,
    validate_time_string,
    validate_uuid,
)
from booking_app.utils.sanitization import clean_text

from .helpers import NEXT_TUESDAY, TODAY, booking_payload

PRESTATION_ID = "3f2b9c1e-8a4d-4f6b-9c2e-1a2b3c4d5e6f"


class TestSharedValidators(unittest.TestCase):
    def test_client_name(self):
        self.assertEqual(validate_client_name("  Éloïse D'Arc-Martin "), "Éloïse D'Arc-Martin")
        for bad in (None, "", "A", "x" * 101, "Robert; DROP TABLE", "Jean3"):
            with self.subTest(name=bad), self.assertRaises(ValueError):
                validate_client_name(bad)

    def test_email(self):
        self.assertEqual(validate_email(" Marie@Example.COM "), "marie@example.com")
        for bad in (None, "", "marie", "marie@example", "ma rie@example.com"):
            with self.subTest(email=bad), self.assertRaises(ValueError):
                validate_email(bad)

    def test_french_phone(self):
        for good in ("0612345678", "06 12 34 56 78", "06.12.34.56.78", "+33612345678", "0033612345678"):
            with self.subTest(phone=good):
                self.assertEqual(validate_french_phone(good), good)
        self.assertIsNone(validate_french_phone(None))
        self.assertIsNone(validate_french_phone("  "))
        for bad in ("12345", "0012345678", "+1 555 123 4567"):
            with self.subTest(phone=bad), self.assertRaises(ValueError):
                validate_french_phone(bad)

    def test_uuid(self):
        self.assertTrue(validate_uuid(PRESTATION_ID))
        self.assertTrue(validate_uuid(PRESTATION_ID.upper()))
        self.assertFalse(validate_uuid("not-a-uuid"))
        self.assertFalse(validate_uuid(None))

    def test_dates_and_times(self):
        self.assertEqual(parse_date_string("2030-01-08"), date(2030, 1, 8))
        for bad in ("2030-02-30", "08/01/2030", "", None):
            with self.subTest(date=bad), self.assertRaises(ValueError):
                parse_date_string(bad)

        self.assertEqual(validate_time_string("09:15"), "09:15")
        for bad in ("9:15", "24:00", "12:60", "noon"):
            with self.subTest(time=bad), self.assertRaises(ValueError):
                validate_time_string(bad)

    def test_clean_text(self):
        self.assertEqual(clean_text("  bonjour\x00\x07 "), "bonjour")
        self.assertIsNone(clean_text("   "))
        self.assertIsNone(clean_text(None))


class TestAppointmentPayload(unittest.TestCase):
    def test_valid_payload(self):
        self.assertEqual(validate_appointment_payload(booking_payload(PRESTATION_ID, NEXT_TUESDAY, "10:00"), TODAY), [])

    def test_every_invalid_field_is_reported(self):
        payload = booking_payload(
            "nope",
            NEXT_TUESDAY,
            "25:00",
            client_name="J",
            client_email="bad",
            client_phone="123",
            notes="x" * 501,
        )

        fields = {error["field"] for error in validate_appointment_payload(payload, TODAY)}

        self.assertEqual(
            fields,
            {"client_name", "client_email", "client_phone", "prestation_id", "appointment_time", "notes"},
        )

    def test_missing_fields(self):
        fields = {error["field"] for error in validate_appointment_payload({}, TODAY)}
        self.assertEqual(
            fields,
            {"client_name", "client_email", "prestation_id", "appointment_date", "appointment_time"},
        )

    def test_same_day_is_refused(self):
        errors = validate_appointment_payload(booking_payload(PRESTATION_ID, TODAY, "10:00"), TODAY)
        self.assertEqual([e["field"] for e in errors], ["appointment_date"])

    def test_sanitize_normalizes_and_drops_unknown_fields(self):
        payload = booking_payload(PRESTATION_ID.upper(), NEXT_TUESDAY, "10:00", status="accepted", notes="  \x07 ")

        data = sanitize_appointment(payload)

        self.assertNotIn("status", data)
        self.assertEqual(data["client_email"], "jean.pierre@example.com")
        self.assertEqual(data["prestation_id"], PRESTATION_ID)
        self.assertEqual(data["appointment_date"], NEXT_TUESDAY)
        self.assertIsNone(data["notes"])


class TestAppointmentQuery(unittest.TestCase):
    def test_valid_filters(self):
        errors, filters = validate_appointment_query("Pending", "2030-01-01", "2030-01-31")

        self.assertEqual(errors, [])
        self.assertEqual(
            filters,
            {"status": "pending", "start_date": date(2030, 1, 1), "end_date": date(2030, 1, 31)},
        )

    def test_no_filters(self):
        self.assertEqual(
            validate_appointment_query(), ([], {"status": None, "start_date": None, "end_date": None})
        )

    def test_invalid_filters(self):
        errors, _ = validate_appointment_query("done", "2030-01-31", "2030-01-01")
        self.assertEqual([e["field"] for e in errors], ["status", "end_date"])

        errors, _ = validate_appointment_query(start_date="janvier")
        self.assertEqual([e["field"] for e in errors], ["start_date"])


if __name__ == "__main__":
    unittest.main()
