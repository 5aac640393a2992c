from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class SponsorTier(BaseModel):
    name: str
    price: str
    benefits: List[str]


class ScheduleItem(BaseModel):
    id: str
    time: str
    title: str
    description: str
    speaker: Optional[str] = None


class ScheduleResult(BaseModel):
    success: bool
    error: Optional[str] = None
    data: List[ScheduleItem] = []


class RegistrationRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=40)
    job_title: str = Field(..., min_length=1, max_length=200)


class SponsorInquiryRequest(BaseModel):
    email: EmailStr
    tier: Optional[str] = None


class FormResult(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None


class ConferenceInfoOut(BaseModel):
    name: str
    tagline: str
    date: str
    location: str
    about: List[str]
    registration_perks: List[str]
    sponsor_tiers: List[SponsorTier]
