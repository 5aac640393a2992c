import pytest

from conftest import airtable_record, error_response, records_response
from src.services.events_service import format_event_time, get_events


@pytest.mark.asyncio
async def test_events_are_sorted_and_defaulted(store, respx_router):
    respx_router.get("/Events").mock(return_value=records_response(
        airtable_record("recLate", {
            "Title": "Hack Night",
            "Date": "2025-12-01T23:30:00.000Z",
            "Location": "Buffalo, NY",
            "Description": "Build things",
            "Registration Link": "https://example.com/register",
            "Virtual Event": True,
        }),
        airtable_record("recEarly", {"Date": "2025-11-05T23:00:00.000Z"}),
    ))

    result = await get_events(store)

    assert result.success is True
    early, late = result.data
    assert early.id == "recEarly"
    assert early.title == "Untitled Event"
    assert early.location == "TBD"
    assert early.description == "No description available"
    assert early.registration_link is None
    assert early.time == "06:00 PM"  # America/New_York, after DST ended
    assert late.title == "Hack Night"
    assert late.registration_link == "https://example.com/register"
    assert late.virtual_event is True


@pytest.mark.asyncio
async def test_store_sort_is_requested(store, respx_router):
    route = respx_router.get("/Events").mock(return_value=records_response())

    await get_events(store, featured=True)

    params = route.calls.last.request.url.params
    assert params["sort[0][field]"] == "Date"
    assert params["sort[0][direction]"] == "asc"
    assert params["filterByFormula"] == "{Featured} = TRUE()"


@pytest.mark.asyncio
async def test_unparseable_record_becomes_placeholder(store, respx_router):
    respx_router.get("/Events").mock(return_value=records_response(
        airtable_record("recBad", {"Title": ["not", "text"], "Date": "2025-11-05"}),
    ))

    result = await get_events(store)

    assert result.success is True
    assert result.data[0].id == "recBad"
    assert result.data[0].title == "Error parsing event"
    assert result.data[0].location == "Error"


@pytest.mark.asyncio
async def test_store_failure_returns_fallback_event(store, respx_router):
    respx_router.get("/Events").mock(return_value=error_response(401, "AUTHENTICATION_REQUIRED", "Authentication required"))

    result = await get_events(store)

    assert result.success is False
    assert "Authentication required" in result.error
    assert len(result.data) == 1
    assert result.data[0].id == "fallback1"
    assert result.data[0].location == "Buffalo, NY"


def test_date_only_values_get_the_default_time():
    assert format_event_time("2025-11-05") == "12:00 PM"
    assert format_event_time(None) == "12:00 PM"
    assert format_event_time("not a date T at all") == "12:00 PM"


def test_time_uses_configured_timezone(monkeypatch):
    monkeypatch.setenv("SITE_TIMEZONE", "UTC")
    assert format_event_time("2025-11-05T23:00:00.000Z") == "11:00 PM"
