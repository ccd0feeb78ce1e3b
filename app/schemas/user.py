"""
User schemas
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.models.user import Role
from app.schemas.common import TimestampedOut


def normalize_email(v):
    """Trim and lower-case an email; reject values without a local part and domain"""
    if v is None:
        return v
    v = v.strip().lower()
    if "@" not in v or v.startswith("@") or v.endswith("@"):
        raise ValueError("Invalid email address")
    return v


class UserRef(BaseModel):
    """Minimal user for embedding in other payloads"""
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    """Schema for creating a user"""
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=8)
    role: Role = Field(default=Role.USER)
    college_id: Optional[int] = None
    is_active: bool = True

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)


class UserUpdate(BaseModel):
    """Schema for updating a user (admin)"""
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(None, min_length=8)
    role: Optional[Role] = None
    college_id: Optional[int] = None
    is_active: Optional[bool] = None
    avatar: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)


class UserOut(TimestampedOut):
    """Schema for user output; never includes credentials"""
    id: int
    first_name: str
    last_name: str
    name: str
    email: str
    role: str
    college_id: Optional[int] = None
    is_active: bool
    avatar: Optional[str] = None


class UserListResponse(BaseModel):
    items: List[UserOut]
    total: int
    role_counts: Dict[str, int]
