"""Shared validation utilities"""

import re
from datetime import date, datetime
from typing import Optional

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s'-]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# French mobile and landline numbers: 0612345678, 06 12 34 56 78, +33612345678, 0033612345678
FRENCH_PHONE_PATTERN = re.compile(r"^(?:(?:\+|00)33|0)[1-9](?:[\s.-]?[0-9]{2}){4}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def validate_uuid(value: str) -> bool:
    """Validate UUID format"""
    return isinstance(value, str) and bool(UUID_PATTERN.match(value))


def validate_client_name(name: Optional[str]) -> str:
    """
    Validate a client name.

    Returns:
        The trimmed name

    Raises:
        ValueError: If the name is missing, too short/long or has forbidden characters
    """
    if not name or not isinstance(name, str):
        raise ValueError("Client name is required")

    name = name.strip()

    if len(name) < 2 or len(name) > 100:
        raise ValueError("Name must be between 2 and 100 characters")

    if not NAME_PATTERN.match(name):
        raise ValueError("Name may only contain letters, spaces, hyphens and apostrophes")

    return name


def validate_email(email: Optional[str]) -> str:
    """
    Validate email format.

    Returns:
        Lowercase, trimmed email address

    Raises:
        ValueError: If email is missing or its format is invalid
    """
    if not email or not isinstance(email, str):
        raise ValueError("Email is required")

    email = email.strip().lower()

    if len(email) > 255:
        raise ValueError("Email must not exceed 255 characters")

    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")

    return email


def validate_french_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate an optional French phone number.

    Returns:
        The trimmed phone number, or None when not provided

    Raises:
        ValueError: If the number is not a French mobile/landline number
    """
    if phone is None:
        return None

    if not isinstance(phone, str):
        raise ValueError("Invalid phone format")

    phone = phone.strip()
    if not phone:
        return None

    if len(phone) > 20:
        raise ValueError("Phone number must not exceed 20 characters")

    if not FRENCH_PHONE_PATTERN.match(phone):
        raise ValueError("Invalid phone format (French number expected)")

    return phone


def parse_date_string(date_str: Optional[str], field_name: str = "date") -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Raises:
        ValueError: If the string is missing, malformed or not a calendar date
    """
    if not date_str or not isinstance(date_str, str):
        raise ValueError(f"{field_name} is required")

    date_str = date_str.strip()

    if not DATE_PATTERN.match(date_str):
        raise ValueError(f"Invalid {field_name} format (YYYY-MM-DD expected)")

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid {field_name}") from None


def validate_time_string(time_str: Optional[str], field_name: str = "time") -> str:
    """
    Validate a HH:MM time string (hour 0-23, minute 0-59).

    Returns:
        The trimmed time string
    """
    if not time_str or not isinstance(time_str, str):
        raise ValueError(f"{field_name} is required")

    time_str = time_str.strip()

    if not TIME_PATTERN.match(time_str):
        raise ValueError(f"Invalid {field_name} format (HH:MM expected)")

    hours, minutes = (int(part) for part in time_str.split(":"))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid {field_name}")

    return time_str
