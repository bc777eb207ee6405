"""Pharmacy, medicine and inventory schemas."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer

# ============================================================================
# Pharmacy Schemas
# ============================================================================


class PharmacyCreate(BaseModel):
    """Schema for registering a pharmacy."""

    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=500)
    phone: str = Field(..., min_length=7, max_length=20)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    is_open_24_hours: bool = False
    opening_hours: dict | None = None


class PharmacyResponse(PharmacyCreate):
    """Pharmacy response schema."""

    id: int
    rating: Decimal

    model_config = {"from_attributes": True}

    @field_serializer("latitude", "longitude", "rating", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None


class NearbyPharmacyResponse(PharmacyResponse):
    """Pharmacy with its great-circle distance from the search point."""

    distance_km: float


# ============================================================================
# Medicine Schemas
# ============================================================================


class MedicineCreate(BaseModel):
    """Schema for adding a medicine to the catalogue."""

    name: str = Field(..., min_length=1, max_length=200)
    generic_name: str | None = Field(None, max_length=200)
    dosage: str | None = Field(None, max_length=100)
    manufacturer: str | None = Field(None, max_length=200)
    price: Decimal | None = Field(None, ge=0, decimal_places=2)


class MedicineResponse(MedicineCreate):
    """Medicine response schema."""

    id: int

    model_config = {"from_attributes": True}

    @field_serializer("price", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None


# ============================================================================
# Inventory Schemas
# ============================================================================


class InventoryCreate(BaseModel):
    """Schema for stocking a medicine at a pharmacy."""

    medicine_id: int = Field(..., gt=0)
    stock: int = Field(0, ge=0)
    price: Decimal | None = Field(None, ge=0, decimal_places=2)


class InventoryResponse(BaseModel):
    """Inventory row joined with its medicine."""

    id: int
    pharmacy_id: int
    medicine_id: int
    stock: int
    price: Decimal | None = None
    medicine: MedicineResponse

    model_config = {"from_attributes": True}

    @field_serializer("price", when_used="json")
    def serialize_decimal(self, value: Decimal | None) -> float | None:
        """Serialize Decimal to float for JSON."""
        return float(value) if value is not None else None


class MedicineSearchResult(InventoryResponse):
    """Inventory row joined with both pharmacy and medicine."""

    pharmacy: PharmacyResponse
