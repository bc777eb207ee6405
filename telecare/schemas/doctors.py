"""Doctor profile schemas for request/response validation."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer

from telecare.schemas.accounts import AccountResponse


class DoctorProfileBase(BaseModel):
    """Base schema for doctor profile."""

    license_number: str = Field(..., min_length=1, max_length=100)
    specialization: str = Field(..., min_length=1, max_length=200)
    experience: int = Field(..., ge=0, le=80)
    location: str = Field(..., min_length=1, max_length=500)
    consultation_fee: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)


class DoctorProfileCreate(DoctorProfileBase):
    """Schema for creating a doctor profile."""

    user_id: int = Field(..., gt=0)
    is_available: bool = False


class DoctorProfileUpdate(BaseModel):
    """Schema for updating a doctor profile. Only provided fields change."""

    license_number: str | None = Field(None, min_length=1, max_length=100)
    specialization: str | None = Field(None, min_length=1, max_length=200)
    experience: int | None = Field(None, ge=0, le=80)
    location: str | None = Field(None, min_length=1, max_length=500)
    consultation_fee: Decimal | None = Field(None, ge=0, decimal_places=2)


class AvailabilityUpdate(BaseModel):
    """Schema for the doctor-controlled availability toggle."""

    is_available: bool


class DoctorProfileResponse(DoctorProfileBase):
    """Doctor profile response schema."""

    id: int
    user_id: int
    is_available: bool
    rating: Decimal
    total_ratings: int

    model_config = {"from_attributes": True}

    @field_serializer("consultation_fee", "rating", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None


class DoctorWithAccountResponse(DoctorProfileResponse):
    """Doctor profile joined with its account."""

    user: AccountResponse
