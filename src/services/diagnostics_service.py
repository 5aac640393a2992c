"""
Debug-mode tooling for the record store connection.

Nothing here is used by the public pages. These helpers exercise the record
store step by step and report what they saw, so a misconfigured token, base
id, table name or column name can be spotted without reading server logs.
"""
import logging
import os
from typing import Dict, List, Optional, Tuple

from ..config import Settings, get_settings
from ..database import RecordStore, RecordStoreError
from ..schemas.debug_schema import (
    ConnectionStatus,
    DeepDiagnosticsResult,
    EnvironmentReport,
    FieldAccessReport,
    LogEntry,
    RecordOut,
    TableTestResult,
)
from ..schemas.record_schema import Record
from ..utils import mask_identifier

logger = logging.getLogger(__name__)

# Spellings probed on the first record of a table
FIELD_PROBES = [
    "Title", "title", "Date", "date",
    "Location", "location", "Description", "description",
]
EXPECTED_EVENT_FIELDS = ["Title", "Date", "Location", "Description"]

TROUBLESHOOTING_TIPS = [
    'Base ID format: should start with "app" and is the first part of the URL when viewing your base',
    'Personal access token: create one at https://airtable.com/account under "Developer Hub"',
    "Personal access token needs the data.records:read and data.records:write scopes",
    "Table names are case-sensitive and must match exactly",
    'Field names are also case-sensitive ("Title" is not "title")',
    '"Could not find what you\'re looking for": incorrect base ID or table name',
    '"Authentication required": invalid or missing access token',
    '"Unknown field name": case mismatch in field names',
]


def environment_report(settings: Optional[Settings] = None) -> EnvironmentReport:
    """Which record store variables are set. Secrets are reported as present/missing only."""
    settings = settings or get_settings()
    base_id = os.getenv("AIRTABLE_BASE_ID", "")
    return EnvironmentReport(
        access_token_present=bool(settings.airtable_access_token),
        api_key_present=bool(settings.airtable_api_key),
        base_id_present=bool(base_id),
        base_id_masked=mask_identifier(base_id) if base_id else None,
        subscribers_table=os.getenv("AIRTABLE_SUBSCRIBERS_TABLE") or None,
        events_table=os.getenv("AIRTABLE_EVENTS_TABLE") or None,
        content_table=os.getenv("AIRTABLE_CONTENT_TABLE") or None,
    )


def field_access_report(record: Record) -> FieldAccessReport:
    return FieldAccessReport(
        record_id=record.id,
        values=dict(record.fields),
        probes={name: record.fields.get(name) for name in FIELD_PROBES},
    )


def _record_out(record: Record) -> RecordOut:
    return RecordOut(id=record.id, fields=record.fields)


async def check_table_directly(store: RecordStore, table: str) -> TableTestResult:
    """Reads the first page of `table` and reports records and field names."""
    logger.info(f"=== Direct table test: base {mask_identifier(store.base_id)}, table '{table}' ===")
    try:
        records = await store.first_page(table)
    except RecordStoreError as e:
        logger.error(f"Direct table test failed: {e}")
        return TableTestResult(success=False, table=table, error=e.message)

    logger.info(f"Found {len(records)} records in '{table}'")
    result = TableTestResult(
        success=True,
        table=table,
        record_count=len(records),
        records=[_record_out(r) for r in records],
    )
    if records:
        result.field_names = list(records[0].fields.keys())
        result.field_access = field_access_report(records[0])
        logger.info(f"Field names in first record: {result.field_names}")
    return result


class DiagnosticsLog:
    """Ordered log of diagnostic steps."""

    def __init__(self):
        self.entries: List[LogEntry] = []

    def ok(self, message: str):
        self.entries.append(LogEntry(ok=True, message=message))

    def fail(self, message: str):
        self.entries.append(LogEntry(ok=False, message=message))
        logger.warning(f"[Diagnostics] {message}")


def _check_base(log: DiagnosticsLog, token: str, base_id: str) -> bool:
    log.ok(f"Testing base connection with Base ID: {base_id or '(empty)'}")
    if not token:
        log.fail("No access token provided")
        return False
    log.ok("Configuring client with personal access token")
    if not base_id:
        log.fail("No Base ID provided")
        return False
    if not base_id.startswith("app"):
        log.fail(f'Base ID "{base_id}" does not start with "app"; copy it from the base URL')
        return False
    log.ok("Base initialization successful")
    return True


async def _check_table(log: DiagnosticsLog, store: RecordStore, table: str) -> Tuple[bool, List[Record]]:
    log.ok(f'Testing table: "{table}"')
    log.ok("Attempting to query table...")
    try:
        records = await store.first_page(table, max_records=1)
    except RecordStoreError as e:
        log.fail(f"Table access failed: {e.message}")
        text = e.message.lower()
        if e.status_code == 404 or "not find" in text or "could not be found" in text:
            log.fail(f'It looks like table "{table}" doesn\'t exist or you don\'t have access to it.')
            log.fail("Double-check your table name (it's case-sensitive)")
        return False, []

    log.ok(f"Table query successful. Found {len(records)} record(s).")
    if records:
        log.ok(f"First record ID: {records[0].id}")
        log.ok(f"Fields found: {', '.join(records[0].fields.keys())}")
    else:
        log.ok("Table exists but contains no records")
    return True, records


def _check_record(log: DiagnosticsLog, record: Record) -> bool:
    log.ok("Testing record field access...")
    fields = list(record.fields.keys())
    for name in fields:
        log.ok(f'Field "{name}": {record.fields[name]!r}')

    all_found = True
    for expected in EXPECTED_EVENT_FIELDS:
        if expected in fields:
            log.ok(f"Found expected field: {expected}")
        elif expected.lower() in fields:
            log.fail(f'Caution: found field "{expected.lower()}" but the site looks for "{expected}"')
            all_found = False
        else:
            log.fail(f"Missing expected field: {expected}")
            all_found = False
    return all_found


async def run_deep_diagnostics(
    token: Optional[str] = None,
    base_id: Optional[str] = None,
    table: Optional[str] = None,
    level: str = "base",
    settings: Optional[Settings] = None,
) -> DeepDiagnosticsResult:
    """
    Step-by-step connection test.

    level "base" checks credentials and base id format, "table" also queries
    one record, "record" also inspects that record's fields. Parameters not
    given are taken from the environment.
    """
    settings = settings or get_settings()
    token = token if token is not None else settings.airtable_access_token
    base_id = base_id if base_id is not None else os.getenv("AIRTABLE_BASE_ID", "")
    table = table or settings.events_table

    log = DiagnosticsLog()
    log.ok("Starting record store debug test")
    if token:
        log.ok(f"Auth token: present (first 4 chars: {token[:4]}...)")
    else:
        log.fail("Auth token: missing")

    success = _check_base(log, token, base_id)
    if success and level in ("table", "record"):
        store = RecordStore(token=token, base_id=base_id, api_url=settings.airtable_api_url,
                            timeout=settings.airtable_timeout)
        try:
            success, records = await _check_table(log, store, table)
        finally:
            await store.aclose()
        if success and level == "record":
            if records:
                success = _check_record(log, records[0])
            else:
                log.fail("No record to inspect")
                success = False

    log.ok("Test completed")
    return DeepDiagnosticsResult(level=level, success=success, log=log.entries)


async def connection_status(store: RecordStore, settings: Optional[Settings] = None) -> ConnectionStatus:
    """Floating debug panel: auth method, base, events table and what it returns."""
    settings = settings or get_settings()
    auth_labels: Dict[str, str] = {
        "access_token": "Personal Access Token",
        "api_key": "API Key",
        "none": "None",
    }
    base_id = os.getenv("AIRTABLE_BASE_ID", "")
    status = ConnectionStatus(
        status="Testing connection...",
        auth=auth_labels[settings.airtable_auth_method],
        base_id_masked=f"{base_id[:5]}..." if base_id else None,
        events_table=settings.events_table,
    )

    if settings.airtable_auth_method == "none":
        status.status = "Connection failed"
        status.error = "No authentication credentials provided"
        return status

    try:
        records = await store.first_page(settings.events_table)
    except RecordStoreError as e:
        status.status = "Connection failed"
        status.error = e.message
        return status

    status.status = f"Success! Found {len(records)} events."
    status.records = [_record_out(r) for r in records]
    return status


def render_log(entries: List[LogEntry]) -> List[str]:
    return [entry.render() for entry in entries]

