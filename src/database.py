# Record store connection (Airtable REST API).
#
# The site has no local database: subscribers, events, site content and
# conference data live in an Airtable base that the organisers edit by hand.
# Credentials, base id and table names come from the environment (.env in
# local development) with hard-coded defaults. With no credentials the
# placeholders below are sent, the calls fail and the services fall back to
# their default data.

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

import httpx
from dotenv import load_dotenv
from pydantic import ValidationError

from .config import get_settings
from .schemas.record_schema import Record, RecordPage

logger = logging.getLogger(__name__)

# Load .env from the backend root (local development only)
backend_dir = Path(__file__).parent.parent
env_path = backend_dir / ".env"
load_dotenv(dotenv_path=env_path)


class RecordStoreError(Exception):
    """Error returned by the record store, or a transport failure (status_code=None)."""

    def __init__(self, message: str, status_code: Optional[int] = None, error_type: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code}{', ' + self.error_type if self.error_type else ''})"


def _error_from_response(response: httpx.Response) -> RecordStoreError:
    """
    Build a RecordStoreError from an Airtable error envelope.

    Airtable answers either {"error": {"type": ..., "message": ...}}
    or {"error": "NOT_FOUND"}.
    """
    error_type = None
    message = None
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            error_type = error.get("type")
            message = error.get("message")
        elif isinstance(error, str):
            error_type = error

    if not message:
        if response.status_code == 404:
            message = "Could not find what you are looking for"
        elif response.status_code in (401, 403):
            message = "Authentication required"
        else:
            message = response.text or "Record store request failed"

    return RecordStoreError(message, status_code=response.status_code, error_type=error_type)


def _parse_page(data) -> RecordPage:
    try:
        return RecordPage.model_validate(data)
    except ValidationError as e:
        raise RecordStoreError(f"Unexpected response from the record store ({e.error_count()} errors)")


class RecordStore:
    """
    Minimal async client for one Airtable base.

    select/first_page/all read a table, create writes rows. Every non-2xx
    answer and every transport failure raises RecordStoreError.
    """

    def __init__(
        self,
        token: str,
        base_id: str,
        api_url: str = "https://api.airtable.com/v0",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_id = base_id
        self.api_url = api_url.rstrip("/")
        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings=None) -> "RecordStore":
        settings = settings or get_settings()
        return cls(
            token=settings.airtable_auth_token,
            base_id=settings.airtable_base_id,
            api_url=settings.airtable_api_url,
            timeout=settings.airtable_timeout,
        )

    def table_url(self, table: str) -> str:
        return f"{self.api_url}/{quote(self.base_id, safe='')}/{quote(table, safe='')}"

    async def _request(self, method: str, table: str, **kwargs) -> Dict[str, Any]:
        url = self.table_url(table)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            logger.warning(f"[RecordStore] Timeout on {method} {table}")
            raise RecordStoreError(f"Timed out talking to the record store ({table})")
        except httpx.HTTPError as e:
            logger.warning(f"[RecordStore] Transport error on {method} {table}: {e}")
            raise RecordStoreError(f"Could not reach the record store: {e}")

        if response.status_code >= 400:
            error = _error_from_response(response)
            logger.warning(f"[RecordStore] {method} {table} failed: {error}")
            raise error

        try:
            return response.json()
        except ValueError:
            raise RecordStoreError("Invalid JSON from the record store", status_code=response.status_code)

    async def select(
        self,
        table: str,
        filter_by_formula: Optional[str] = None,
        max_records: Optional[int] = None,
        page_size: Optional[int] = None,
        sort: Optional[List[Dict[str, str]]] = None,
        fields: Optional[Iterable[str]] = None,
        view: Optional[str] = None,
        offset: Optional[str] = None,
    ) -> RecordPage:
        """Read one page of a table."""
        params: List[tuple] = []
        if filter_by_formula:
            params.append(("filterByFormula", filter_by_formula))
        if max_records is not None:
            params.append(("maxRecords", str(max_records)))
        if page_size is not None:
            params.append(("pageSize", str(page_size)))
        for i, item in enumerate(sort or []):
            params.append((f"sort[{i}][field]", item["field"]))
            params.append((f"sort[{i}][direction]", item.get("direction", "asc")))
        for field in fields or []:
            params.append(("fields[]", field))
        if view:
            params.append(("view", view))
        if offset:
            params.append(("offset", offset))

        data = await self._request("GET", table, params=params)
        return _parse_page(data)

    async def first_page(self, table: str, **options) -> List[Record]:
        page = await self.select(table, **options)
        return page.records

    async def all(self, table: str, **options) -> List[Record]:
        """Read every record of a table, following offset pagination."""
        options.pop("offset", None)
        records: List[Record] = []
        offset = None
        while True:
            page = await self.select(table, offset=offset, **options)
            records.extend(page.records)
            if not page.offset:
                return records
            offset = page.offset

    async def create(self, table: str, records: List[Dict[str, Any]], typecast: bool = False) -> List[Record]:
        """Create rows. Each item of `records` is a dict of field name -> value."""
        payload = {"records": [{"fields": fields} for fields in records]}
        if typecast:
            payload["typecast"] = True
        data = await self._request("POST", table, json=payload)
        return _parse_page(data).records

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()


async def get_record_store():
    """
    Dependency that injects a RecordStore into FastAPI endpoints.
    """
    store = RecordStore.from_settings()
    try:
        yield store
    finally:
        await store.aclose()
