"""Patient profile endpoints."""

from fastapi import APIRouter, status

from telecare.dependencies import DatabaseSession
from telecare.schemas.patients import PatientProfileResponse, PatientProfileUpdate
from telecare.services.patient_service import PatientService

router = APIRouter()


@router.get(
    "/{user_id}/profile",
    response_model=PatientProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get patient profile",
)
async def get_patient_profile(user_id: int, db: DatabaseSession) -> PatientProfileResponse:
    """Get a patient profile by account ID."""
    service = PatientService(db)
    return await service.get_profile(user_id)


@router.put(
    "/{user_id}/profile",
    response_model=PatientProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Update patient profile",
)
async def update_patient_profile(
    user_id: int,
    data: PatientProfileUpdate,
    db: DatabaseSession,
) -> PatientProfileResponse:
    """Update the provided profile fields."""
    service = PatientService(db)
    return await service.update_profile(user_id, data)
