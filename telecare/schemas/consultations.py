"""Consultation schemas for request/response validation."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from telecare.core.lifecycle import ConsultationStatus
from telecare.schemas.accounts import AccountResponse


class ConsultationType(str, Enum):
    """Consultation type enumeration."""

    EMERGENCY = "emergency"
    REGULAR = "regular"


class ConsultationCreate(BaseModel):
    """Schema for requesting a consultation."""

    patient_id: int = Field(..., gt=0)
    doctor_id: int = Field(..., gt=0)
    type: ConsultationType = ConsultationType.REGULAR
    symptoms: str = Field(..., min_length=1, max_length=5000)
    scheduled_at: datetime | None = None

    @field_validator("symptoms")
    @classmethod
    def validate_symptoms(cls, v: str) -> str:
        """Symptoms must contain more than whitespace."""
        if not v.strip():
            raise ValueError("Symptoms must not be blank")
        return v


class ConsultationUpdate(BaseModel):
    """Schema for a partial consultation update."""

    status: ConsultationStatus | None = None
    diagnosis: str | None = Field(None, max_length=5000)
    prescription: str | None = Field(None, max_length=5000)
    notes: str | None = Field(None, max_length=5000)
    scheduled_at: datetime | None = None


class ConsultationComplete(BaseModel):
    """Schema for closing a consultation. Empty strings are allowed."""

    diagnosis: str = Field("", max_length=5000)
    prescription: str = Field("", max_length=5000)
    notes: str = Field("", max_length=5000)


class ConsultationCancel(BaseModel):
    """Schema for cancelling a consultation."""

    notes: str | None = Field(None, max_length=5000)


class ConsultationResponse(BaseModel):
    """Schema for consultation response."""

    id: int
    patient_id: int
    doctor_id: int
    status: ConsultationStatus
    type: ConsultationType
    symptoms: str | None = None
    diagnosis: str | None = None
    prescription: str | None = None
    notes: str | None = None
    scheduled_at: datetime | None = None
    started_at: datetime | None = None
    ended_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class ConsultationDetailResponse(ConsultationResponse):
    """Consultation joined with the participating accounts."""

    patient: AccountResponse | None = None
    doctor: AccountResponse | None = None
