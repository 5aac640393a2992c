"""
Community events read from the record store (read-only).
"""
import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import get_settings
from ..database import RecordStore
from ..schemas.event_schema import EventOut, EventsResult
from ..schemas.record_schema import Record
from ..utils import parse_iso_datetime, utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_TIME = "12:00 PM"


def _site_timezone():
    name = get_settings().site_timezone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown SITE_TIMEZONE '{name}', using UTC")
        return timezone.utc


def format_event_time(date_value) -> str:
    """
    Display time ("06:00 PM") of an event date, in the site time zone.

    Date-only values and missing dates get the default time.
    """
    if not isinstance(date_value, str) or "T" not in date_value:
        return DEFAULT_TIME
    parsed = parse_iso_datetime(date_value)
    if parsed is None:
        return DEFAULT_TIME
    return parsed.astimezone(_site_timezone()).strftime("%I:%M %p")


def fallback_events() -> list:
    """Shown when the events table cannot be read."""
    return [
        EventOut(
            id="fallback1",
            title="Sample Event (Fallback)",
            date=utc_now_iso(),
            time="6:00 PM",
            location="Buffalo, NY",
            description="This is a fallback event shown when the events table cannot be reached.",
        )
    ]


def _optional_text(value):
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected text, got {type(value).__name__}")
    return value


def record_to_event(record: Record) -> EventOut:
    """Converts an events table row; a row that cannot be parsed becomes a placeholder."""
    try:
        fields = record.fields
        date = fields.get("Date") or utc_now_iso()
        if not isinstance(date, str):
            raise TypeError("Date is not text")
        virtual = fields.get("Virtual Event")
        return EventOut(
            id=record.id,
            title=_optional_text(fields.get("Title")) or "Untitled Event",
            date=date,
            time=format_event_time(fields.get("Date")),
            location=_optional_text(fields.get("Location")) or "TBD",
            description=_optional_text(fields.get("Description")) or "No description available",
            registration_link=_optional_text(fields.get("Registration Link")),
            virtual_event=bool(virtual) if virtual is not None else None,
        )
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not parse event {record.id}: {e}")
        return EventOut(
            id=record.id,
            title="Error parsing event",
            date=utc_now_iso(),
            time=DEFAULT_TIME,
            location="Error",
            description="There was an error parsing this event from the record store",
        )


def _sort_key(event: EventOut) -> datetime:
    return parse_iso_datetime(event.date) or datetime.now(timezone.utc)


async def get_events(store: RecordStore, featured: bool = False) -> EventsResult:
    """
    Events ordered by date, ascending.

    Read failures return success=False with the fallback event.
    """
    table = get_settings().events_table
    try:
        records = await store.all(
            table,
            filter_by_formula="{Featured} = TRUE()" if featured else None,
            sort=[{"field": "Date", "direction": "asc"}],
        )
        events = sorted((record_to_event(r) for r in records), key=_sort_key)
        logger.info(f"Loaded {len(events)} events from '{table}'")
        return EventsResult(success=True, data=events)
    except Exception as e:
        logger.warning(f"⚠️ Failed to load events, using fallback: {e}")
        return EventsResult(success=False, error=str(e), data=fallback_events())
