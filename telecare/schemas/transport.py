"""Transport provider and booking schemas."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_serializer, field_validator

from telecare.core.lifecycle import BookingStatus
from telecare.schemas.accounts import AccountResponse


class TransportType(str, Enum):
    """Transport vehicle type enumeration."""

    AMBULANCE = "ambulance"
    CAB = "cab"
    MOTORBIKE = "motorbike"


class Urgency(str, Enum):
    """Booking urgency enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EMERGENCY = "emergency"


def _serialize_decimal(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


# ============================================================================
# Provider Schemas
# ============================================================================


class TransportProviderBase(BaseModel):
    """Base schema for transport provider."""

    name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=7, max_length=20)
    email: EmailStr | None = None
    type: TransportType
    location: str = Field(..., min_length=1, max_length=500)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    base_fare: Decimal = Field(..., ge=0, decimal_places=2)
    per_km_rate: Decimal = Field(..., ge=0, decimal_places=2)
    license_number: str | None = Field(None, max_length=100)
    driver_name: str | None = Field(None, max_length=200)
    vehicle_number: str | None = Field(None, max_length=50)


class TransportProviderCreate(TransportProviderBase):
    """Schema for registering a transport provider."""

    is_available: bool = True


class TransportProviderUpdate(BaseModel):
    """Schema for updating a transport provider."""

    name: str | None = Field(None, min_length=1, max_length=200)
    phone: str | None = Field(None, min_length=7, max_length=20)
    email: EmailStr | None = None
    location: str | None = Field(None, min_length=1, max_length=500)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    is_available: bool | None = None
    base_fare: Decimal | None = Field(None, ge=0, decimal_places=2)
    per_km_rate: Decimal | None = Field(None, ge=0, decimal_places=2)
    license_number: str | None = Field(None, max_length=100)
    driver_name: str | None = Field(None, max_length=200)
    vehicle_number: str | None = Field(None, max_length=50)


class TransportProviderResponse(TransportProviderBase):
    """Transport provider response schema."""

    id: int
    email: str | None = None
    is_available: bool
    rating: Decimal
    total_ratings: int
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_serializer(
        "latitude", "longitude", "base_fare", "per_km_rate", "rating", when_used="json"
    )
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return _serialize_decimal(value)


class FareEstimateResponse(BaseModel):
    """Fare estimate for one provider and distance."""

    provider_id: int
    distance_km: Decimal
    base_fare: Decimal
    per_km_rate: Decimal
    estimated_fare: Decimal

    @field_serializer(
        "distance_km", "base_fare", "per_km_rate", "estimated_fare", when_used="json"
    )
    def serialize_decimal(self, value: Decimal) -> float | None:
        """Serialize Decimal to float for JSON."""
        return _serialize_decimal(value)


# ============================================================================
# Booking Schemas
# ============================================================================


class TransportBookingCreate(BaseModel):
    """
    Schema for booking transport.

    The fare is always computed server-side from the provider's rates and
    ``estimated_distance``; a client-supplied fare is ignored.
    """

    patient_id: int = Field(..., gt=0)
    provider_id: int = Field(..., gt=0)
    type: TransportType
    pickup_location: str = Field(..., min_length=1, max_length=500)
    dropoff_location: str = Field(..., min_length=1, max_length=500)
    pickup_latitude: Decimal | None = Field(None, ge=-90, le=90)
    pickup_longitude: Decimal | None = Field(None, ge=-180, le=180)
    dropoff_latitude: Decimal | None = Field(None, ge=-90, le=90)
    dropoff_longitude: Decimal | None = Field(None, ge=-180, le=180)
    estimated_distance: Decimal | None = Field(None, ge=0, le=10000)
    urgency: Urgency = Urgency.MEDIUM
    special_requirements: str | None = Field(None, max_length=1000)
    patient_condition: str | None = Field(None, max_length=1000)
    contact_number: str = Field(..., min_length=7, max_length=20)
    notes: str | None = Field(None, max_length=1000)

    @field_validator("contact_number")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Validate phone number format."""
        cleaned = (
            v.replace("-", "").replace(" ", "").replace("(", "").replace(")", "").replace("+", "")
        )
        if not cleaned.isdigit():
            raise ValueError("Phone number must contain only digits and separators")
        if len(cleaned) < 7:
            raise ValueError("Phone number must have at least 7 digits")
        return v


class TransportBookingUpdate(BaseModel):
    """Schema for a partial booking update, including status changes."""

    status: BookingStatus | None = None
    actual_fare: Decimal | None = Field(None, ge=0, decimal_places=2)
    special_requirements: str | None = Field(None, max_length=1000)
    patient_condition: str | None = Field(None, max_length=1000)
    notes: str | None = Field(None, max_length=1000)


class TransportBookingResponse(BaseModel):
    """Transport booking response schema."""

    id: int
    patient_id: int
    provider_id: int
    type: TransportType
    pickup_location: str
    dropoff_location: str
    pickup_latitude: Decimal | None = None
    pickup_longitude: Decimal | None = None
    dropoff_latitude: Decimal | None = None
    dropoff_longitude: Decimal | None = None
    estimated_distance: Decimal | None = None
    estimated_fare: Decimal | None = None
    actual_fare: Decimal | None = None
    status: BookingStatus
    urgency: Urgency
    special_requirements: str | None = None
    patient_condition: str | None = None
    contact_number: str
    notes: str | None = None
    booking_time: datetime
    accepted_at: datetime | None = None
    arrived_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None

    model_config = {"from_attributes": True}

    @field_serializer(
        "pickup_latitude",
        "pickup_longitude",
        "dropoff_latitude",
        "dropoff_longitude",
        "estimated_distance",
        "estimated_fare",
        "actual_fare",
        when_used="json",
    )
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return _serialize_decimal(value)


class TransportBookingDetailResponse(TransportBookingResponse):
    """Booking joined with the patient account and the provider."""

    patient: AccountResponse | None = None
    provider: TransportProviderResponse | None = None
