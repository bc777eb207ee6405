"""Rating service: submission and doctor aggregate recompute."""

import structlog
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.core.exceptions import BadRequestException, ConflictException, NotFoundException
from telecare.models.consultations import consultations
from telecare.models.ratings import ratings
from telecare.schemas.ratings import RatingCreate
from telecare.services.doctor_service import DoctorService

logger = structlog.get_logger(__name__)


class RatingService:
    """Service for doctor ratings."""

    def __init__(self, db: AsyncSession, doctor_service: DoctorService | None = None):
        """Initialize service with database session."""
        self.db = db
        self.doctors = doctor_service or DoctorService()

    async def submit_rating(self, data: RatingCreate) -> dict:
        """
        Rate the doctor of a consultation and refresh the doctor's aggregate.

        The insert and the full recompute of ``rating``/``total_ratings`` share
        one transaction, with the doctor profile row locked during the
        recompute.

        Raises:
            NotFoundException: If the consultation or doctor profile is missing
            BadRequestException: If patient or doctor do not match the consultation
            ConflictException: If the consultation was already rated
        """
        consultation = (
            await self.db.execute(
                select(consultations.c.patient_id, consultations.c.doctor_id).where(
                    consultations.c.id == data.consultation_id
                )
            )
        ).first()

        if not consultation:
            raise NotFoundException("Consultation not found")

        if (
            consultation.patient_id != data.patient_id
            or consultation.doctor_id != data.doctor_id
        ):
            raise BadRequestException("Rating does not match the consultation's participants")

        already_rated = await self.db.execute(
            select(ratings.c.id).where(ratings.c.consultation_id == data.consultation_id)
        )
        if already_rated.first():
            raise ConflictException("Consultation has already been rated")

        try:
            result = await self.db.execute(
                insert(ratings).values(**data.model_dump()).returning(ratings)
            )
            rating = dict(result.mappings().one())
            await self.doctors.recompute_rating(self.db, data.doctor_id)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException("Consultation has already been rated") from e
        except NotFoundException:
            await self.db.rollback()
            raise

        self.doctors.invalidate(data.doctor_id)

        logger.info(
            "rating_submitted",
            rating_id=rating["id"],
            consultation_id=data.consultation_id,
            doctor_id=data.doctor_id,
            rating=data.rating,
        )
        return rating
