"""Patient profile service."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.core.exceptions import NotFoundException
from telecare.models.patient_profiles import patient_profiles
from telecare.schemas.patients import PatientProfileUpdate


class PatientService:
    """Service for patient profile operations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def get_profile(self, user_id: int) -> dict:
        """
        Get a patient profile by account id.

        Raises:
            NotFoundException: If the profile does not exist
        """
        result = await self.db.execute(
            select(patient_profiles).where(patient_profiles.c.user_id == user_id)
        )
        profile = result.mappings().first()

        if not profile:
            raise NotFoundException("Patient profile not found")

        return dict(profile)

    async def update_profile(self, user_id: int, data: PatientProfileUpdate) -> dict:
        """Update the provided profile fields."""
        values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if not values:
            return await self.get_profile(user_id)

        result = await self.db.execute(
            update(patient_profiles)
            .where(patient_profiles.c.user_id == user_id)
            .values(**values)
            .returning(patient_profiles)
        )
        profile = result.mappings().first()

        if not profile:
            raise NotFoundException("Patient profile not found")

        profile_dict = dict(profile)
        await self.db.commit()
        return profile_dict
