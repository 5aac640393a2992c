"""
Newsletter subscribers stored in the record store.

The subscribers table is maintained by hand, so its column names are not
guaranteed. Creating a subscriber therefore:
1. checks whether the email is already there,
2. learns the real column names from an existing row (substring match),
3. falls back to a fixed list of column name guesses until one create works.
"""
import logging
from typing import Any, Dict, List, Optional

from ..config import get_settings
from ..database import RecordStore, RecordStoreError
from ..schemas.subscriber_schema import SubscribeResult
from ..utils import escape_formula_string, find_column, utc_now_iso

logger = logging.getLogger(__name__)

ALREADY_SUBSCRIBED = "Email already exists"
GENERIC_FAILURE_MESSAGE = "Unable to subscribe. Please try again or contact us directly."
SIGNUP_SOURCE = "Website"

# Role -> substring looked up in the real column names
DETECTED_ROLES = {
    "email": "email",
    "date": "date",
    "source": "source",
    "name": "name",
    "active": "active",
}


def _fallback_attempts(email: str, signup_date: str) -> List[Dict[str, Any]]:
    """Column name guesses, tried in order."""
    return [
        # Standard field names
        {"Email": email, "Signup Date": signup_date, "Source": SIGNUP_SOURCE, "Active": True},
        # Lowercase field names
        {"email": email, "signup date": signup_date, "source": SIGNUP_SOURCE, "active": True},
        # Single word field names
        {"Email": email, "Date": signup_date, "Source": SIGNUP_SOURCE, "Active": True},
        # Just the email
        {"Email": email},
        {"email": email},
    ]


def build_detected_fields(
    columns: List[str], email: str, signup_date: str, name: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    """
    Builds a subscriber row using the column names found in an existing row.

    Returns None when no email column can be found.
    """
    found = {role: find_column(columns, needle) for role, needle in DETECTED_ROLES.items()}
    if not found["email"]:
        return None

    fields: Dict[str, Any] = {found["email"]: email}
    if found["date"]:
        fields[found["date"]] = signup_date
    if found["source"]:
        fields[found["source"]] = SIGNUP_SOURCE
    # "Name" must not shadow the email column ("Email Name" style headers)
    if name and found["name"] and found["name"] != found["email"]:
        fields[found["name"]] = name
    if found["active"]:
        fields[found["active"]] = True
    return fields


async def email_exists(store: RecordStore, table: str, email: str) -> bool:
    formula = f"LOWER({{Email}}) = '{escape_formula_string(email)}'"
    records = await store.first_page(table, filter_by_formula=formula, max_records=1)
    return len(records) > 0


async def add_subscriber(store: RecordStore, email: str, name: Optional[str] = None) -> SubscribeResult:
    """
    Adds an email to the subscribers table.

    Never raises: every failure is reported through SubscribeResult.
    """
    table = get_settings().subscribers_table
    email = email.strip().lower()
    name = name.strip() if name else None

    try:
        # 1. Duplicate check (best-effort)
        try:
            if await email_exists(store, table, email):
                logger.info(f"Subscriber already present: {email}")
                return SubscribeResult(success=False, error=ALREADY_SUBSCRIBED)
        except RecordStoreError as e:
            logger.warning(f"⚠️ Duplicate check failed, continuing: {e}")

        signup_date = utc_now_iso()

        # 2. Learn the column names from an existing row
        try:
            sample = await store.first_page(table, max_records=1)
            if sample and sample[0].fields:
                fields = build_detected_fields(list(sample[0].fields.keys()), email, signup_date, name)
                if fields:
                    created = await store.create(table, [fields])
                    logger.info(f"✅ Subscriber created with detected columns: {list(fields.keys())}")
                    return SubscribeResult(success=True, data=[r.model_dump(by_alias=True) for r in created])
        except RecordStoreError as e:
            logger.warning(f"⚠️ Column detection failed, trying standard column names: {e}")

        # 3. Standard column name guesses
        for attempt in _fallback_attempts(email, signup_date):
            try:
                created = await store.create(table, [attempt])
                logger.info(f"✅ Subscriber created with columns: {list(attempt.keys())}")
                return SubscribeResult(success=True, data=[r.model_dump(by_alias=True) for r in created])
            except RecordStoreError as e:
                logger.debug(f"Create attempt with {list(attempt.keys())} failed: {e}")

        logger.error(f"❌ Every create attempt failed for subscriber {email}")
        return SubscribeResult(success=False, error="Unable to add subscriber", message=GENERIC_FAILURE_MESSAGE)

    except Exception as e:
        logger.error(f"❌ Unexpected error adding subscriber: {str(e)}", exc_info=True)
        return SubscribeResult(success=False, error=str(e) or "Unknown error", message=GENERIC_FAILURE_MESSAGE)
