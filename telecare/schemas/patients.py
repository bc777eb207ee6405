"""Patient profile schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class PatientProfileUpdate(BaseModel):
    """Schema for updating a patient profile."""

    date_of_birth: datetime | None = None
    gender: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=500)
    emergency_contact: str | None = Field(None, max_length=200)
    medical_history: dict | list | None = None


class PatientProfileResponse(PatientProfileUpdate):
    """Patient profile response schema."""

    id: int
    user_id: int

    model_config = {"from_attributes": True}
