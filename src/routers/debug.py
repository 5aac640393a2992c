"""
Debug-mode routes for diagnosing the record store connection.
Disabled in production unless DEBUG_ROUTES is set.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..config import get_settings
from ..database import RecordStore, get_record_store
from ..schemas.debug_schema import (
    ConnectionStatus,
    DeepDiagnosticsRequest,
    DeepDiagnosticsResult,
    EnvironmentReport,
    TableTestRequest,
    TableTestResult,
)
from ..services.diagnostics_service import (
    TROUBLESHOOTING_TIPS,
    check_table_directly,
    connection_status,
    environment_report,
    run_deep_diagnostics,
)
from ..services.email_service import get_email_config_info

logger = logging.getLogger(__name__)


def require_debug_mode():
    if not get_settings().debug_routes_enabled:
        raise HTTPException(status_code=404, detail="Not Found")


router = APIRouter(prefix="/debug", tags=["debug"], dependencies=[Depends(require_debug_mode)])


@router.get("/env", response_model=EnvironmentReport)
def read_environment():
    return environment_report()


@router.get("/panel", response_model=ConnectionStatus)
async def read_connection_panel(store: RecordStore = Depends(get_record_store)):
    """Queries the events table with the configured credentials."""
    try:
        return await connection_status(store)
    except Exception as e:
        logger.error(f"Error building debug panel status: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error building debug panel status: {str(e)}")


@router.post("/test-table", response_model=TableTestResult)
async def run_table_test(payload: TableTestRequest, store: RecordStore = Depends(get_record_store)):
    if not payload.table.strip():
        raise HTTPException(status_code=400, detail="table is required")
    try:
        return await check_table_directly(store, payload.table.strip())
    except Exception as e:
        logger.error(f"Error testing table: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error testing table: {str(e)}")


@router.post("/deep", response_model=DeepDiagnosticsResult)
async def run_deep_test(payload: DeepDiagnosticsRequest):
    """
    Step-by-step diagnostics. token / base_id / table override the environment
    for this run only.
    """
    logger.info(f"🔍 Deep diagnostics requested (level={payload.level})")
    try:
        return await run_deep_diagnostics(
            token=payload.token,
            base_id=payload.base_id,
            table=payload.table,
            level=payload.level,
        )
    except Exception as e:
        logger.error(f"Error running deep diagnostics: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error running deep diagnostics: {str(e)}")


@router.get("/tips", response_model=List[str])
def read_troubleshooting_tips():
    return TROUBLESHOOTING_TIPS


@router.get("/email-config-status")
def read_email_config_status():
    """Whether Resend is configured for conference notifications."""
    status = get_email_config_info()
    if not status["api_key_configured"]:
        status["error"] = "RESEND_API_KEY is not set. Add it to your .env file"
    elif not status["organizer_emails"]:
        status["error"] = "DEFAULT_NOTIFICATION_EMAIL is not set, sponsor inquiries will not be forwarded"
    return status
