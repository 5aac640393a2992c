from typing import List, Optional

from pydantic import BaseModel


class EventOut(BaseModel):
    id: str
    title: str
    date: str
    time: str
    location: str
    description: str
    registration_link: Optional[str] = None
    virtual_event: Optional[bool] = None


class EventsResult(BaseModel):
    success: bool
    error: Optional[str] = None
    data: List[EventOut] = []
