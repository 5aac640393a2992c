from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Record(BaseModel):
    id: str
    created_time: Optional[str] = Field(default=None, alias="createdTime")
    fields: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    def get(self, field_name: str, default: Any = None) -> Any:
        return self.fields.get(field_name, default)


class RecordPage(BaseModel):
    records: List[Record] = Field(default_factory=list)
    offset: Optional[str] = None
