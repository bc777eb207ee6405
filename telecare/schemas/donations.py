"""Donation and donation request schemas."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_serializer

from telecare.schemas.accounts import AccountResponse


class DonationType(str, Enum):
    """Donation type enumeration."""

    CONSULTATION = "consultation"
    MEDICINE = "medicine"
    GENERAL = "general"


class DonationRequestType(str, Enum):
    """Donation request type enumeration."""

    CONSULTATION = "consultation"
    MEDICINE = "medicine"


class DonationRequestStatus(str, Enum):
    """Donation request status enumeration."""

    PENDING = "pending"
    APPROVED = "approved"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class DonationCreate(BaseModel):
    """Schema for recording a donation. No payment is processed."""

    donor_name: str | None = Field(None, max_length=200)
    donor_email: EmailStr | None = None
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    type: DonationType
    message: str | None = Field(None, max_length=1000)
    is_anonymous: bool = False


class DonationResponse(BaseModel):
    """Donation response schema."""

    id: int
    donor_name: str | None = None
    donor_email: str | None = None
    amount: Decimal
    type: DonationType
    message: str | None = None
    is_anonymous: bool
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_serializer("amount", when_used="json")
    def serialize_decimal(self, value: Decimal) -> float:
        """Serialize Decimal to float for JSON."""
        return float(value)


class DonationStatsResponse(BaseModel):
    """Aggregate donation totals."""

    total: Decimal
    count: int

    @field_serializer("total", when_used="json")
    def serialize_decimal(self, value: Decimal) -> float:
        """Serialize Decimal to float for JSON."""
        return float(value)


class DonationRequestCreate(BaseModel):
    """Schema for a patient asking for financial help."""

    patient_id: int = Field(..., gt=0)
    type: DonationRequestType
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    reason: str = Field(..., min_length=1, max_length=2000)


class DonationRequestStatusUpdate(BaseModel):
    """Schema for moving a donation request through review."""

    status: DonationRequestStatus


class DonationRequestResponse(BaseModel):
    """Donation request response schema."""

    id: int
    patient_id: int
    type: DonationRequestType
    amount: Decimal
    reason: str
    status: DonationRequestStatus
    created_at: datetime
    patient: AccountResponse | None = None

    model_config = {"from_attributes": True}

    @field_serializer("amount", when_used="json")
    def serialize_decimal(self, value: Decimal) -> float:
        """Serialize Decimal to float for JSON."""
        return float(value)
