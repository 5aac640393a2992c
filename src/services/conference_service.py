"""
WNY AI Conference: static page data, schedule, registrations and sponsorship inquiries.
"""
import logging
from typing import List, Optional

from ..config import get_settings
from ..database import RecordStore, RecordStoreError
from ..schemas.conference_schema import (
    ConferenceInfoOut,
    FormResult,
    RegistrationRequest,
    ScheduleItem,
    ScheduleResult,
    SponsorTier,
)
from ..schemas.record_schema import Record
from ..utils import utc_now_iso
from .email_service import (
    get_organizer_emails,
    send_registration_confirmation_email,
    send_sponsor_inquiry_email,
)

logger = logging.getLogger(__name__)

CONFERENCE_NAME = "WNY AI Conference"

REGISTRATION_THANKS = "Thank you for registering! We will send you confirmation details shortly."
REGISTRATION_FAILED = "Unable to complete registration. Please try again."
SPONSOR_THANKS = "Thank you! We will contact you soon about sponsorship opportunities."
SPONSOR_FAILED = "Unable to send your inquiry. Please try again."

SPONSOR_TIERS: List[SponsorTier] = [
    SponsorTier(
        name="Bronze",
        price="$100",
        benefits=["Logo on website", "Social media mention", "Recognition at event"],
    ),
    SponsorTier(
        name="Silver",
        price="$300",
        benefits=[
            "All Bronze benefits",
            "Logo on conference materials",
            "Booth space",
            "Logo placement on signage",
        ],
    ),
    SponsorTier(
        name="Gold",
        price="$500",
        benefits=[
            "All Silver benefits",
            "Speaking opportunity (10 min)",
            "Premium booth location",
            "Logo on stage backdrop",
            "Featured in press releases",
        ],
    ),
    SponsorTier(
        name="Platinum",
        price="$1,000",
        benefits=[
            "All Gold benefits",
            "Keynote speaking opportunity",
            "Custom sponsorship package",
            "Exclusive branding opportunities",
            "VIP networking event access",
        ],
    ),
]


def conference_info() -> ConferenceInfoOut:
    return ConferenceInfoOut(
        name=CONFERENCE_NAME,
        tagline="Shaping the Future of Artificial Intelligence in Western New York",
        date="November 2025",
        location="Buffalo, NY",
        about=[
            "Join us for the inaugural WNY AI Conference, bringing together AI enthusiasts, "
            "researchers, entrepreneurs, and industry leaders from across Western New York and beyond.",
            "This full-day event features keynote presentations, panel discussions, hands-on workshops, "
            "and unparalleled networking opportunities to explore the transformative potential of "
            "artificial intelligence.",
        ],
        registration_perks=[
            "Full day access to all sessions",
            "Breakfast and lunch included",
            "Access to workshops",
            "Networking opportunities",
            "Conference swag bag",
        ],
        sponsor_tiers=SPONSOR_TIERS,
    )


def find_tier(name: Optional[str]) -> Optional[SponsorTier]:
    if not name:
        return None
    for tier in SPONSOR_TIERS:
        if tier.name.lower() == name.strip().lower():
            return tier
    return None


def _order_of(record: Record):
    order = record.get("Order")
    if isinstance(order, (int, float)) and not isinstance(order, bool):
        return (0, order)
    return (1, 0)


def record_to_schedule_item(record: Record) -> ScheduleItem:
    speaker = record.get("Speaker")
    return ScheduleItem(
        id=record.id,
        time=str(record.get("Time") or "TBD"),
        title=str(record.get("Title") or "Untitled Session"),
        description=str(record.get("Description") or ""),
        speaker=str(speaker) if speaker else None,
    )


async def get_conference_schedule(store: RecordStore) -> ScheduleResult:
    """
    Schedule rows ordered by the numeric "Order" column when present,
    otherwise in table order. Empty schedule on failure.
    """
    table = get_settings().schedule_table
    try:
        records = await store.all(table)
    except RecordStoreError as e:
        logger.warning(f"⚠️ Failed to load conference schedule: {e}")
        return ScheduleResult(success=False, error=str(e), data=[])

    # sorted() is stable, rows without Order keep table order after the ordered ones
    items = [record_to_schedule_item(r) for r in sorted(records, key=_order_of)]
    return ScheduleResult(success=True, data=items)


async def add_conference_registration(store: RecordStore, registration: RegistrationRequest) -> FormResult:
    table = get_settings().registrations_table
    email = registration.email.strip().lower()
    fields = {
        "Name": registration.name.strip(),
        "Email": email,
        "Phone": registration.phone.strip(),
        "Job Title": registration.job_title.strip(),
        "Registration Date": utc_now_iso(),
    }
    try:
        await store.create(table, [fields])
    except RecordStoreError as e:
        logger.error(f"❌ Conference registration failed for {email}: {e}")
        return FormResult(success=False, message=REGISTRATION_FAILED, error=str(e))

    logger.info(f"✅ Conference registration stored for {email}")
    await send_registration_confirmation_email(registration.name, email, CONFERENCE_NAME)
    return FormResult(success=True, message=REGISTRATION_THANKS)


async def add_sponsor_inquiry(store: RecordStore, email: str, tier: Optional[str] = None) -> FormResult:
    table = get_settings().sponsors_table
    email = email.strip().lower()
    matched = find_tier(tier)
    fields = {"Email": email, "Inquiry Date": utc_now_iso()}
    if matched:
        fields["Tier"] = matched.name

    try:
        await store.create(table, [fields])
    except RecordStoreError as e:
        logger.error(f"❌ Sponsor inquiry failed for {email}: {e}")
        return FormResult(success=False, message=SPONSOR_FAILED, error=str(e))

    logger.info(f"✅ Sponsor inquiry stored for {email}")
    await send_sponsor_inquiry_email(email, matched.name if matched else None, get_organizer_emails())
    return FormResult(success=True, message=SPONSOR_THANKS)
