# tests/conftest.py
from collections.abc import AsyncGenerator

import httpx
import pytest
import respx

BASE_ID = "appTEST1234567890"
API_BASE_URL = f"https://api.airtable.com/v0/{BASE_ID}"


@pytest.fixture(autouse=True)
def airtable_env(monkeypatch):
    """Every test runs against a fake base with a personal access token, in development mode."""
    monkeypatch.setenv("AIRTABLE_ACCESS_TOKEN", "patTESTTOKEN")
    monkeypatch.setenv("AIRTABLE_BASE_ID", BASE_ID)
    # Space-free table names keep the mocked routes simple
    monkeypatch.setenv("AIRTABLE_CONTENT_TABLE", "SiteContent")
    monkeypatch.setenv("AIRTABLE_SCHEDULE_TABLE", "Schedule")
    monkeypatch.setenv("AIRTABLE_REGISTRATIONS_TABLE", "Registrations")
    monkeypatch.setenv("AIRTABLE_SPONSORS_TABLE", "Sponsors")
    for name in (
        "AIRTABLE_API_KEY",
        "AIRTABLE_API_URL",
        "AIRTABLE_SUBSCRIBERS_TABLE",
        "AIRTABLE_EVENTS_TABLE",
        "SITE_TIMEZONE",
        "DEBUG_ROUTES",
        "ENV",
        "PORT",
        "RAILWAY_ENVIRONMENT",
        "RESEND_API_KEY",
        "RESEND_FROM_EMAIL",
        "RESEND_REPLY_TO",
        "DEFAULT_NOTIFICATION_EMAIL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
async def store():
    from src.database import RecordStore

    record_store = RecordStore.from_settings()
    yield record_store
    await record_store.aclose()


@pytest.fixture
async def respx_router() -> AsyncGenerator[respx.MockRouter, None]:
    """
    Intercepts every call to the record store API.
    """
    async with respx.mock(base_url=API_BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
async def api_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """In-process client for the FastAPI app."""
    from src.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def airtable_record(record_id: str, fields: dict) -> dict:
    return {"id": record_id, "createdTime": "2025-01-01T00:00:00.000Z", "fields": fields}


def records_response(*records, offset=None) -> httpx.Response:
    body = {"records": list(records)}
    if offset:
        body["offset"] = offset
    return httpx.Response(200, json=body)


def error_response(status_code: int, error_type: str, message: str = None) -> httpx.Response:
    if message is None:
        return httpx.Response(status_code, json={"error": error_type})
    return httpx.Response(status_code, json={"error": {"type": error_type, "message": message}})
