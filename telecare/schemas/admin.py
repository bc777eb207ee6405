"""Admin dashboard schemas."""

from decimal import Decimal

from pydantic import BaseModel, field_serializer


class AdminStatsResponse(BaseModel):
    """Headline counters for the admin dashboard."""

    active_patients: int
    verified_doctors: int
    total_consultations: int
    total_donations: Decimal

    @field_serializer("total_donations", when_used="json")
    def serialize_decimal(self, value: Decimal) -> float:
        """Serialize Decimal to float for JSON."""
        return float(value)
