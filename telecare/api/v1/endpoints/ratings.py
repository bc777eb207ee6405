"""Rating endpoints."""

from fastapi import APIRouter, Depends, status

from telecare.api.v1.endpoints.doctors import get_doctor_service
from telecare.dependencies import DatabaseSession
from telecare.schemas.ratings import RatingCreate, RatingResponse
from telecare.services.doctor_service import DoctorService
from telecare.services.rating_service import RatingService

router = APIRouter()


@router.post(
    "",
    response_model=RatingResponse,
    status_code=status.HTTP_200_OK,
    summary="Rate a consultation",
)
async def submit_rating(
    data: RatingCreate,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> RatingResponse:
    """
    Rate the doctor of a consultation (1-5) and refresh the doctor's average.

    Each consultation can be rated once.
    """
    service = RatingService(db, doctor_service=doctor_service)
    return await service.submit_rating(data)
