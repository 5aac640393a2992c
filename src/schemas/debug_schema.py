from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel


class EnvironmentReport(BaseModel):
    access_token_present: bool
    api_key_present: bool
    base_id_present: bool
    base_id_masked: Optional[str] = None
    subscribers_table: Optional[str] = None
    events_table: Optional[str] = None
    content_table: Optional[str] = None


class TableTestRequest(BaseModel):
    table: str = "Events"


class RecordOut(BaseModel):
    id: str
    fields: Dict[str, Any]


class FieldAccessReport(BaseModel):
    record_id: str
    values: Dict[str, Any]
    probes: Dict[str, Any]


class TableTestResult(BaseModel):
    success: bool
    table: str
    record_count: int = 0
    records: List[RecordOut] = []
    field_names: List[str] = []
    field_access: Optional[FieldAccessReport] = None
    error: Optional[str] = None


class DeepDiagnosticsRequest(BaseModel):
    token: Optional[str] = None
    base_id: Optional[str] = None
    table: Optional[str] = None
    level: Literal["base", "table", "record"] = "base"


class LogEntry(BaseModel):
    ok: bool
    message: str

    def render(self) -> str:
        return f"{'✅' if self.ok else '❌'} {self.message}"


class DeepDiagnosticsResult(BaseModel):
    level: str
    success: bool
    log: List[LogEntry]


class ConnectionStatus(BaseModel):
    status: str
    auth: str
    base_id_masked: Optional[str] = None
    events_table: str
    error: Optional[str] = None
    records: List[RecordOut] = []
