"""
Campus and college schemas
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import TimestampedOut


class CampusCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    logo: Optional[str] = None


class CampusUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    logo: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class CollegeCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    logo: Optional[str] = None
    campus_id: int


class CollegeUpdate(BaseModel):
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    logo: Optional[str] = None
    campus_id: Optional[int] = None

    model_config = ConfigDict(extra="forbid")


class CollegeOut(TimestampedOut):
    id: int
    code: str
    name: str
    logo: Optional[str] = None
    campus_id: int


class CampusOut(TimestampedOut):
    id: int
    name: str
    logo: Optional[str] = None


class CampusDetailOut(CampusOut):
    colleges: List[CollegeOut] = []
