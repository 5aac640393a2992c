import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..database import RecordStore, get_record_store
from ..schemas.content_schema import SiteContentOut
from ..schemas.event_schema import EventOut
from ..services.content_service import get_site_content, with_defaults
from ..services.events_service import get_events

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/home", tags=["home"])

HERO_TAGLINE = (
    "Empowering Western New York through artificial intelligence education, research, and community."
)


class HomeOut(BaseModel):
    tagline: str
    events: List[EventOut]
    events_loaded: bool
    content: SiteContentOut
    content_loaded: bool


@router.get("", response_model=HomeOut)
async def read_home(store: RecordStore = Depends(get_record_store)):
    """
    Everything the landing page needs, events and site content fetched concurrently.
    """
    try:
        events_result, content_result = await asyncio.gather(
            get_events(store),
            get_site_content(store),
        )
    except Exception as e:
        logger.error(f"Error loading landing page data: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error loading landing page data")
    if not events_result.success:
        logger.warning(f"Landing page is showing fallback events: {events_result.error}")
    if not content_result.success:
        logger.warning(f"Landing page is showing default content: {content_result.error}")

    return HomeOut(
        tagline=HERO_TAGLINE,
        events=events_result.data,
        events_loaded=events_result.success,
        content=with_defaults(content_result.data),
        content_loaded=content_result.success,
    )
