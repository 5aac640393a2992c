import json

import httpx
import pytest

from conftest import airtable_record, error_response, records_response
from src.services.subscriber_service import (
    ALREADY_SUBSCRIBED,
    GENERIC_FAILURE_MESSAGE,
    add_subscriber,
    build_detected_fields,
)


def _created(request: httpx.Request) -> httpx.Response:
    fields = json.loads(request.content)["records"][0]["fields"]
    return records_response(airtable_record("recNEW", fields))


def _unknown_field(request: httpx.Request) -> httpx.Response:
    return error_response(422, "UNKNOWN_FIELD_NAME", "Unknown field name")


def _subscribers_get(existing=None, sample=None):
    """Answers the duplicate check with `existing` and the schema sample read with `sample`."""

    def handler(request: httpx.Request) -> httpx.Response:
        if "filterByFormula" in request.url.params:
            return records_response(*(existing or []))
        return records_response(*(sample or []))

    return handler


def _in_turn(*handlers):
    """Calls each handler once, in order, for successive requests."""
    pending = list(handlers)

    def handler(request: httpx.Request) -> httpx.Response:
        return pending.pop(0)(request)

    return handler


def _posted_fields(route):
    return [json.loads(call.request.content)["records"][0]["fields"] for call in route.calls]


@pytest.mark.asyncio
async def test_existing_email_is_rejected(store, respx_router):
    existing = airtable_record("recOLD", {"Email": "ada@example.com"})
    get_route = respx_router.get("/Subscribers").mock(side_effect=_subscribers_get(existing=[existing]))
    post_route = respx_router.post("/Subscribers").mock(side_effect=_created)

    result = await add_subscriber(store, "Ada@Example.com ")

    assert result.success is False
    assert result.error == ALREADY_SUBSCRIBED
    assert post_route.call_count == 0
    formula = get_route.calls[0].request.url.params["filterByFormula"]
    assert formula == "LOWER({Email}) = 'ada@example.com'"


@pytest.mark.asyncio
async def test_quotes_in_email_are_escaped_in_the_formula(store, respx_router):
    get_route = respx_router.get("/Subscribers").mock(side_effect=_subscribers_get())
    respx_router.post("/Subscribers").mock(side_effect=_created)

    await add_subscriber(store, "o'brien@example.com")

    formula = get_route.calls[0].request.url.params["filterByFormula"]
    assert formula == "LOWER({Email}) = 'o\\'brien@example.com'"


@pytest.mark.asyncio
async def test_columns_are_detected_from_an_existing_row(store, respx_router):
    sample = airtable_record("recS", {
        "Email Address": "old@example.com",
        "Signup Date (UTC)": "2024-01-01",
        "Lead Source": "Website",
        "Is Active": True,
    })
    respx_router.get("/Subscribers").mock(side_effect=_subscribers_get(sample=[sample]))
    post_route = respx_router.post("/Subscribers").mock(side_effect=_created)

    result = await add_subscriber(store, "new@example.com")

    assert result.success is True
    fields = _posted_fields(post_route)[0]
    assert fields["Email Address"] == "new@example.com"
    assert fields["Lead Source"] == "Website"
    assert fields["Is Active"] is True
    assert fields["Signup Date (UTC)"].endswith("Z")
    assert post_route.call_count == 1


@pytest.mark.asyncio
async def test_standard_guesses_are_tried_in_order(store, respx_router):
    # Empty table: nothing to learn column names from
    respx_router.get("/Subscribers").mock(side_effect=_subscribers_get())
    post_route = respx_router.post("/Subscribers").mock(
        side_effect=_in_turn(_unknown_field, _unknown_field, _unknown_field, _created)
    )

    result = await add_subscriber(store, "grace@example.com")

    assert result.success is True
    attempts = [sorted(fields) for fields in _posted_fields(post_route)]
    assert attempts == [
        ["Active", "Email", "Signup Date", "Source"],
        ["active", "email", "signup date", "source"],
        ["Active", "Date", "Email", "Source"],
        ["Email"],
    ]


@pytest.mark.asyncio
async def test_failed_detection_falls_through_to_guesses(store, respx_router):
    sample = airtable_record("recS", {"Email": "old@example.com", "Active": True})
    respx_router.get("/Subscribers").mock(side_effect=_subscribers_get(sample=[sample]))
    post_route = respx_router.post("/Subscribers").mock(side_effect=_in_turn(_unknown_field, _created))

    result = await add_subscriber(store, "alan@example.com")

    assert result.success is True
    assert post_route.call_count == 2
    assert sorted(_posted_fields(post_route)[1]) == ["Active", "Email", "Signup Date", "Source"]


@pytest.mark.asyncio
async def test_every_attempt_failing_gives_the_generic_message(store, respx_router):
    respx_router.get("/Subscribers").mock(side_effect=_subscribers_get())
    post_route = respx_router.post("/Subscribers").mock(side_effect=_unknown_field)

    result = await add_subscriber(store, "nobody@example.com")

    assert result.success is False
    assert result.error == "Unable to add subscriber"
    assert result.message == GENERIC_FAILURE_MESSAGE
    assert post_route.call_count == 5


@pytest.mark.asyncio
async def test_unreadable_table_still_tries_to_create(store, respx_router):
    respx_router.get("/Subscribers").mock(return_value=error_response(403, "INVALID_PERMISSIONS", "No read"))
    post_route = respx_router.post("/Subscribers").mock(side_effect=_created)

    result = await add_subscriber(store, "write-only@example.com")

    assert result.success is True
    assert post_route.call_count == 1


def test_detected_fields_include_name_when_given():
    fields = build_detected_fields(
        ["Email", "Full Name", "Date Joined"], "a@b.co", "2025-01-01T00:00:00.000Z", name="Ada"
    )
    assert fields == {"Email": "a@b.co", "Date Joined": "2025-01-01T00:00:00.000Z", "Full Name": "Ada"}


def test_detected_fields_need_an_email_column():
    assert build_detected_fields(["Name", "Date"], "a@b.co", "2025-01-01T00:00:00.000Z") is None
