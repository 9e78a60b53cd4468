import re
from typing import Any, Optional

CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def clean_text(value: Optional[Any]) -> Optional[str]:
    """
    Trim a text value and strip control characters.
    Returns None for None and for strings that are empty once trimmed.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)

    value = CONTROL_CHARS.sub("", value).strip()

    return value or None


def sanitize_dict(data: dict[str, Any], fields: Optional[list[str]] = None) -> dict[str, Any]:
    """
    Clean specific text fields in a dictionary.
    If fields is None, cleans all string values.

    Args:
        data: Dictionary to sanitize
        fields: List of field names to clean. If None, cleans all strings.

    Returns:
        New dictionary with cleaned values
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if (fields is None or key in fields) and isinstance(value, str):
            sanitized[key] = clean_text(value)
        else:
            sanitized[key] = value

    return sanitized
