from typing import Any, List, Optional

from pydantic import BaseModel, EmailStr, Field


class SubscribeRequest(BaseModel):
    email: EmailStr
    name: Optional[str] = Field(default=None, max_length=120)


class SubscribeResult(BaseModel):
    success: bool
    error: Optional[str] = None
    message: Optional[str] = None
    # Created rows, as returned by the record store
    data: Optional[List[Any]] = None


class SubscribeResponse(BaseModel):
    success: bool
    message: str
