import logging

from fastapi import APIRouter, Depends, HTTPException

from ..database import RecordStore, get_record_store
from ..schemas.conference_schema import (
    ConferenceInfoOut,
    FormResult,
    RegistrationRequest,
    ScheduleResult,
    SponsorInquiryRequest,
)
from ..services.conference_service import (
    add_conference_registration,
    add_sponsor_inquiry,
    conference_info,
    get_conference_schedule,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conference", tags=["conference"])


@router.get("", response_model=ConferenceInfoOut)
def read_conference_info():
    """Static conference page data, sponsor tiers included."""
    return conference_info()


@router.get("/schedule", response_model=ScheduleResult)
async def read_conference_schedule(store: RecordStore = Depends(get_record_store)):
    try:
        return await get_conference_schedule(store)
    except Exception as e:
        logger.error(f"Error loading conference schedule: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error loading conference schedule")


@router.post("/register", response_model=FormResult)
async def register_for_conference(
    payload: RegistrationRequest,
    store: RecordStore = Depends(get_record_store),
):
    """
    Free registration. Store failures come back as success=false with a generic message.
    """
    try:
        return await add_conference_registration(store, payload)
    except Exception as e:
        logger.error(f"Error processing conference registration: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error processing registration")


@router.post("/sponsor-inquiry", response_model=FormResult)
async def submit_sponsor_inquiry(
    payload: SponsorInquiryRequest,
    store: RecordStore = Depends(get_record_store),
):
    try:
        return await add_sponsor_inquiry(store, payload.email, payload.tier)
    except Exception as e:
        logger.error(f"Error processing sponsor inquiry: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error processing sponsor inquiry")
