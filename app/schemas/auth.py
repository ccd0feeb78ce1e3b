"""
Authentication schemas
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.user import UserOut, normalize_email


class LoginRequest(BaseModel):
    """Login request schema"""
    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return v.strip().lower()


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class PasswordUpdate(BaseModel):
    current_password: str
    password: str = Field(..., min_length=8)
    password_confirmation: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("Password confirmation does not match")
        return self


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)
