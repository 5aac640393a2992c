"""
Site content (footer links, legal text) from the generic key/value table.
"""
import logging
from typing import Dict, List

from ..config import get_settings
from ..database import RecordStore
from ..schemas.content_schema import ContentResult, SiteContentOut

logger = logging.getLogger(__name__)

KEY_FIELD = "Content Key"
VALUE_FIELD = "Content Value"

DEFAULT_CONTENT: Dict[str, str] = {
    "discord_link": "https://discord.gg/example",
    "twitter_link": "https://twitter.com/example",
    "linkedin_link": "https://linkedin.com/company/example",
    "github_link": "https://github.com/example",
    "privacy_policy": "This is a fallback privacy policy.",
    "terms_of_service": "These are fallback terms of service.",
}

LEGAL_DOCUMENTS = {
    "privacy-policy": ("privacy_policy", "Privacy Policy"),
    "terms-of-service": ("terms_of_service", "Terms of Service"),
}


async def get_site_content(store: RecordStore) -> ContentResult:
    """
    Reads the content table into a key -> value mapping.

    Rows without a key are skipped. On failure returns the defaults.
    """
    table = get_settings().content_table
    try:
        records = await store.all(table)
    except Exception as e:
        logger.warning(f"⚠️ Failed to load site content, using defaults: {e}")
        return ContentResult(success=False, error=str(e), data=dict(DEFAULT_CONTENT))

    content: Dict[str, str] = {}
    for record in records:
        key = record.get(KEY_FIELD)
        if not key or not isinstance(key, str):
            continue
        value = record.get(VALUE_FIELD)
        content[key] = "" if value is None else str(value)

    logger.info(f"Loaded {len(content)} site content keys from '{table}'")
    return ContentResult(success=True, data=content)


def with_defaults(content: Dict[str, str]) -> SiteContentOut:
    """Fetched values over the defaults. Empty values count as absent."""
    merged = dict(DEFAULT_CONTENT)
    merged.update({k: v for k, v in content.items() if k in DEFAULT_CONTENT and v})
    extra = {k: v for k, v in content.items() if k not in DEFAULT_CONTENT}
    return SiteContentOut(**merged, extra=extra)


def legal_paragraphs(text: str) -> List[str]:
    return [line.strip() for line in (text or "").split("\n") if line.strip()]
