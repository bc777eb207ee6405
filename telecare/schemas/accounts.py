"""Account schemas for request/response validation."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator


class AccountRole(str, Enum):
    """Account role enumeration."""

    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"


class RegisterRequest(BaseModel):
    """Schema for self-service registration."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=1, max_length=200)
    phone: str | None = Field(None, max_length=20)
    role: AccountRole = AccountRole.PATIENT

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: AccountRole) -> AccountRole:
        """Admins are provisioned out of band."""
        if v == AccountRole.ADMIN:
            raise ValueError("Only patient and doctor accounts can self-register")
        return v


class LoginRequest(BaseModel):
    """Schema for credential check."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class AccountResponse(BaseModel):
    """Account view; never includes the password hash."""

    id: int
    email: str
    name: str
    phone: str | None = None
    role: AccountRole
    is_verified: bool
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class VerificationUpdate(BaseModel):
    """Schema for an admin changing an account's verification flag."""

    is_verified: bool
