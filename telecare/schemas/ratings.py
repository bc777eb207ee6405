"""Rating schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    """Schema for rating a doctor after a consultation."""

    consultation_id: int = Field(..., gt=0)
    patient_id: int = Field(..., gt=0)
    doctor_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5)
    review: str | None = Field(None, max_length=2000)


class RatingResponse(RatingCreate):
    """Rating response schema."""

    id: int
    created_at: datetime

    model_config = {"from_attributes": True}
