"""Doctor profile and availability endpoints."""

from fastapi import APIRouter, Depends, status

from telecare.dependencies import CacheManagerDep, DatabaseSession
from telecare.schemas.doctors import (
    AvailabilityUpdate,
    DoctorProfileCreate,
    DoctorProfileResponse,
    DoctorProfileUpdate,
    DoctorWithAccountResponse,
)
from telecare.services.doctor_service import DoctorService

router = APIRouter()


def get_doctor_service(cache_manager: CacheManagerDep) -> DoctorService:
    """Get doctor service instance."""
    return DoctorService(cache_manager=cache_manager)


@router.post(
    "",
    response_model=DoctorProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Create doctor profile",
)
async def create_doctor_profile(
    data: DoctorProfileCreate,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> DoctorProfileResponse:
    """
    Create the profile of a doctor account.

    - **user_id**: Doctor account the profile belongs to
    - **license_number**: Medical license number
    - **specialization**: Primary specialization
    - **experience**: Years of practice
    - **location**: Where the doctor practises
    - **is_available**: Starts offline unless set
    """
    return await doctor_service.create_profile(db, data)


@router.get(
    "/available",
    response_model=list[DoctorWithAccountResponse],
    status_code=status.HTTP_200_OK,
    summary="List available doctors",
)
async def list_available_doctors(
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> list[DoctorWithAccountResponse]:
    """
    Doctors who are both online and verified, best rated first.

    An empty list is a valid answer.
    """
    return await doctor_service.list_available_doctors(db)


@router.get(
    "/{user_id}",
    response_model=DoctorProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get doctor profile",
)
async def get_doctor_profile(
    user_id: int,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> DoctorProfileResponse:
    """Get a doctor profile by account ID."""
    return await doctor_service.get_profile(db, user_id)


@router.put(
    "/{user_id}",
    response_model=DoctorProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Update doctor profile",
)
async def update_doctor_profile(
    user_id: int,
    data: DoctorProfileUpdate,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> DoctorProfileResponse:
    """Update the provided profile fields."""
    return await doctor_service.update_profile(db, user_id, data)


@router.put(
    "/{user_id}/availability",
    response_model=DoctorProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Set availability",
)
async def set_doctor_availability(
    user_id: int,
    data: AvailabilityUpdate,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> DoctorProfileResponse:
    """Go online or offline for new consultations."""
    return await doctor_service.set_availability(db, user_id, data.is_available)
