from typing import Dict, List, Optional

from pydantic import BaseModel


class ContentResult(BaseModel):
    success: bool
    error: Optional[str] = None
    data: Dict[str, str] = {}


class SiteContentOut(BaseModel):
    discord_link: str
    twitter_link: str
    linkedin_link: str
    github_link: str
    privacy_policy: str
    terms_of_service: str
    # Any extra keys the organisers added to the content table
    extra: Dict[str, str] = {}


class LegalDocumentOut(BaseModel):
    document: str
    title: str
    paragraphs: List[str]
