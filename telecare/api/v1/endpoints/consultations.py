"""Consultation endpoints."""

from fastapi import APIRouter, Depends, status

from telecare.api.v1.endpoints.doctors import get_doctor_service
from telecare.dependencies import DatabaseSession
from telecare.schemas.consultations import (
    ConsultationCancel,
    ConsultationComplete,
    ConsultationCreate,
    ConsultationDetailResponse,
    ConsultationResponse,
    ConsultationUpdate,
)
from telecare.services.consultation_service import ConsultationService
from telecare.services.doctor_service import DoctorService

router = APIRouter()


def get_consultation_service(
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> ConsultationService:
    """Get consultation service instance."""
    return ConsultationService(db, doctor_service=doctor_service)


@router.post(
    "",
    response_model=ConsultationResponse,
    status_code=status.HTTP_200_OK,
    summary="Request consultation",
)
async def create_consultation(
    data: ConsultationCreate,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationResponse:
    """
    Request a consultation with an available doctor.

    Returns 409 if the doctor went offline or lost verification since the
    available list was fetched.
    """
    return await service.create_consultation(data)


@router.get(
    "/pending",
    response_model=list[ConsultationDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List pending consultations",
)
async def list_pending_consultations(
    service: ConsultationService = Depends(get_consultation_service),
) -> list[ConsultationDetailResponse]:
    """Consultations no doctor has accepted yet, oldest first."""
    return await service.list_pending()


@router.get(
    "/patient/{patient_id}",
    response_model=list[ConsultationDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List patient consultations",
)
async def list_patient_consultations(
    patient_id: int,
    service: ConsultationService = Depends(get_consultation_service),
) -> list[ConsultationDetailResponse]:
    """A patient's consultations, newest first."""
    return await service.list_for_patient(patient_id)


@router.get(
    "/doctor/{doctor_id}",
    response_model=list[ConsultationDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List doctor consultations",
)
async def list_doctor_consultations(
    doctor_id: int,
    service: ConsultationService = Depends(get_consultation_service),
) -> list[ConsultationDetailResponse]:
    """A doctor's consultations, newest first."""
    return await service.list_for_doctor(doctor_id)


@router.get(
    "/{consultation_id}",
    response_model=ConsultationDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get consultation",
)
async def get_consultation(
    consultation_id: int,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationDetailResponse:
    """Get a consultation with its patient and doctor."""
    return await service.get_consultation(consultation_id)


@router.put(
    "/{consultation_id}",
    response_model=ConsultationResponse,
    status_code=status.HTTP_200_OK,
    summary="Update consultation",
)
async def update_consultation(
    consultation_id: int,
    data: ConsultationUpdate,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationResponse:
    """
    Partially update a consultation.

    Status changes must follow pending → active → completed, with
    cancelled reachable before completion. Closed consultations reject
    every write with 409.
    """
    return await service.update_consultation(consultation_id, data)


@router.post(
    "/{consultation_id}/accept",
    response_model=ConsultationResponse,
    status_code=status.HTTP_200_OK,
    summary="Accept consultation",
)
async def accept_consultation(
    consultation_id: int,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationResponse:
    """Doctor accepts a pending consultation."""
    return await service.accept_consultation(consultation_id)


@router.post(
    "/{consultation_id}/complete",
    response_model=ConsultationResponse,
    status_code=status.HTTP_200_OK,
    summary="Complete consultation",
)
async def complete_consultation(
    consultation_id: int,
    data: ConsultationComplete | None = None,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationResponse:
    """Close an active consultation with diagnosis, prescription and notes."""
    return await service.complete_consultation(consultation_id, data or ConsultationComplete())


@router.post(
    "/{consultation_id}/cancel",
    response_model=ConsultationResponse,
    status_code=status.HTTP_200_OK,
    summary="Cancel consultation",
)
async def cancel_consultation(
    consultation_id: int,
    data: ConsultationCancel | None = None,
    service: ConsultationService = Depends(get_consultation_service),
) -> ConsultationResponse:
    """Cancel a consultation that has not finished."""
    return await service.cancel_consultation(consultation_id, data or ConsultationCancel())
