"""
Resolution schemas
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.common import TimestampedOut
from app.schemas.user import UserRef


class ResolutionCreate(BaseModel):
    resolution_number: str = Field(..., min_length=1, max_length=255)
    effectivity: date
    expiration: date
    contact_person: str = Field(..., max_length=255)
    contact_number_email: str = Field(..., max_length=255)
    partner_agency: str = Field(..., max_length=255)
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = Field(None, max_length=255)

    @model_validator(mode="after")
    def expiration_after_effectivity(self):
        if self.expiration < self.effectivity:
            raise ValueError("expiration must not be before effectivity")
        return self


class ResolutionUpdate(BaseModel):
    resolution_number: Optional[str] = Field(None, min_length=1, max_length=255)
    effectivity: Optional[date] = None
    expiration: Optional[date] = None
    contact_person: Optional[str] = Field(None, max_length=255)
    contact_number_email: Optional[str] = Field(None, max_length=255)
    partner_agency: Optional[str] = Field(None, max_length=255)
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(extra="forbid")


class ResolutionOut(TimestampedOut):
    id: int
    owner_id: int
    owner: Optional[UserRef] = None
    is_archived: bool
    resolution_number: str
    effectivity: date
    expiration: date
    contact_person: str
    contact_number_email: str
    partner_agency: str
    attachment_paths: Optional[List[str]] = None
    attachment_link: Optional[str] = None
