"""
API router for newsletter sign-ups.
"""
import logging

from fastapi import APIRouter, Depends

from ..database import RecordStore, get_record_store
from ..schemas.subscriber_schema import SubscribeRequest, SubscribeResponse
from ..services.subscriber_service import ALREADY_SUBSCRIBED, add_subscriber

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/newsletter", tags=["newsletter"])


@router.post("/subscribe", response_model=SubscribeResponse)
async def subscribe_to_newsletter(
    request: SubscribeRequest,
    store: RecordStore = Depends(get_record_store),
):
    """
    Subscribe an email to the newsletter.
    Failures are reported in the body with a friendly message, never as a 5xx.
    """
    result = await add_subscriber(store, request.email, request.name)

    if result.success:
        return SubscribeResponse(success=True, message="Thank you for subscribing!")

    if result.error == ALREADY_SUBSCRIBED:
        return SubscribeResponse(success=False, message="You are already subscribed!")

    logger.warning(f"Newsletter sign-up failed: {result.error}")
    return SubscribeResponse(success=False, message="Unable to subscribe. Please try again.")
