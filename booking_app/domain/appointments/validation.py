"""Appointment request validation and sanitization.

Validation never touches the database: a malformed request is rejected
before any store access.
"""

from datetime import date
from typing import Any, Optional

from ...models import APPOINTMENT_STATUSES
from ...shared.validators import (
    parse_date_string,
    validate_client_name,
    validate_email,
    validate_french_phone,
    validate_time_string,
    validate_uuid,
)
from ...utils.sanitization import clean_text, sanitize_dict

APPOINTMENT_FIELDS = (
    "client_name",
    "client_email",
    "client_phone",
    "prestation_id",
    "appointment_date",
    "appointment_time",
    "notes",
)
NOTES_MAX_LENGTH = 500


def _field_error(field: str, message: str) -> dict:
    return {"field": field, "message": message}


def validate_appointment_payload(data: dict[str, Any], today: date) -> list[dict]:
    """
    Check an appointment request.

    Returns:
        Field errors as {"field", "message"} dicts, empty when the request is valid
    """
    errors = []

    for field, validator in (
        ("client_name", validate_client_name),
        ("client_email", validate_email),
        ("client_phone", validate_french_phone),
    ):
        try:
            validator(data.get(field))
        except ValueError as e:
            errors.append(_field_error(field, str(e)))

    prestation_id = data.get("prestation_id")
    if not prestation_id:
        errors.append(_field_error("prestation_id", "Prestation is required"))
    elif not validate_uuid(prestation_id):
        errors.append(_field_error("prestation_id", "Invalid prestation ID"))

    try:
        appointment_date = parse_date_string(data.get("appointment_date"), "appointment_date")
        if appointment_date <= today:
            errors.append(
                _field_error(
                    "appointment_date",
                    "Appointments must be booked at least one day in advance",
                )
            )
    except ValueError as e:
        errors.append(_field_error("appointment_date", str(e)))

    try:
        validate_time_string(data.get("appointment_time"), "appointment_time")
    except ValueError as e:
        errors.append(_field_error("appointment_time", str(e)))

    notes = data.get("notes")
    if notes is not None and len(str(notes)) > NOTES_MAX_LENGTH:
        errors.append(_field_error("notes", f"Notes must not exceed {NOTES_MAX_LENGTH} characters"))

    return errors


def sanitize_appointment(data: dict[str, Any]) -> dict[str, Any]:
    """
    Normalize a validated appointment request into column values.
    Unknown fields, including any client-supplied status, are dropped.
    """
    cleaned = sanitize_dict({key: data.get(key) for key in APPOINTMENT_FIELDS})

    return {
        "client_name": validate_client_name(cleaned["client_name"]),
        "client_email": validate_email(cleaned["client_email"]),
        "client_phone": validate_french_phone(cleaned["client_phone"]),
        "prestation_id": cleaned["prestation_id"].lower(),
        "appointment_date": parse_date_string(cleaned["appointment_date"], "appointment_date"),
        "appointment_time": validate_time_string(cleaned["appointment_time"], "appointment_time"),
        "notes": cleaned["notes"],
    }


def validate_status(status: Optional[str], field: str = "status") -> list[dict]:
    if status not in APPOINTMENT_STATUSES:
        return [_field_error(field, f"Status must be one of: {', '.join(APPOINTMENT_STATUSES)}")]
    return []


def validate_appointment_query(
    status: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> tuple[list[dict], dict[str, Any]]:
    """
    Check the filters of an appointment listing.

    Returns:
        (field errors, parsed filters)
    """
    errors = []
    filters: dict[str, Any] = {"status": None, "start_date": None, "end_date": None}

    status = clean_text(status)
    if status:
        status = status.lower()
        errors.extend(validate_status(status))
        filters["status"] = status

    for field, value in (("start_date", start_date), ("end_date", end_date)):
        value = clean_text(value)
        if not value:
            continue
        try:
            filters[field] = parse_date_string(value, field)
        except ValueError as e:
            errors.append(_field_error(field, str(e)))

    if filters["start_date"] and filters["end_date"] and filters["start_date"] > filters["end_date"]:
        errors.append(_field_error("end_date", "end_date must be on or after start_date"))

    return errors, filters
