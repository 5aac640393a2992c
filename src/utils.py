from datetime import datetime, timezone
from typing import Iterable, Optional


def escape_formula_string(value: str) -> str:
    """
    Escapes a value so it can be embedded in a single-quoted Airtable formula string.

    Examples:
    - "ana@example.com" -> "ana@example.com"
    - "o'brien@example.com" -> "o\\'brien@example.com"
    """
    if not value:
        return ""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def find_column(columns: Iterable[str], needle: str) -> Optional[str]:
    """
    Returns the first column whose name contains `needle`, ignoring case.

    Examples:
    - (["Email Address", "Signup Date"], "email") -> "Email Address"
    - (["Full Name"], "date") -> None
    """
    needle = needle.lower()
    for column in columns:
        if needle in column.lower():
            return column
    return None


def mask_identifier(value: str, head: int = 5, tail: int = 5) -> str:
    """
    Shortens an identifier for display: "appABCDEFGHIJKLM" -> "appAB...IJKLM".
    """
    if not value:
        return ""
    if len(value) <= head + tail:
        return f"{value[:head]}..."
    return f"{value[:head]}...{value[-tail:]}"


def utc_now_iso() -> str:
    """Current UTC time in the ISO format the record store uses (millisecond precision)."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_datetime(value) -> Optional[datetime]:
    """
    Parses a record store date or datetime into an aware UTC datetime.

    Accepts "2025-11-05", "2025-11-05T23:00:00.000Z" and offsets.
    Returns None for anything else.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
