from fastapi import APIRouter, Depends, Query

from ..database import RecordStore, get_record_store
from ..schemas.event_schema import EventsResult
from ..services.events_service import get_events

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=EventsResult)
async def list_events(
    featured: bool = Query(default=False, description="Only events flagged as Featured"),
    store: RecordStore = Depends(get_record_store),
):
    """
    Upcoming events, ascending by date.
    When the record store is unreachable success is false and the fallback event is returned.
    """
    return await get_events(store, featured=featured)
