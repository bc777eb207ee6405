"""Admin dashboard endpoints."""

from fastapi import APIRouter, Depends, status

from telecare.api.v1.endpoints.doctors import get_doctor_service
from telecare.dependencies import DatabaseSession
from telecare.schemas.accounts import AccountResponse, VerificationUpdate
from telecare.schemas.admin import AdminStatsResponse
from telecare.schemas.consultations import ConsultationDetailResponse
from telecare.schemas.doctors import DoctorWithAccountResponse
from telecare.schemas.transport import TransportBookingDetailResponse
from telecare.services.admin_service import AdminService
from telecare.services.consultation_service import ConsultationService
from telecare.services.doctor_service import DoctorService
from telecare.services.transport_service import TransportService

router = APIRouter()


@router.get(
    "/stats",
    response_model=AdminStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Dashboard statistics",
)
async def get_stats(db: DatabaseSession) -> AdminStatsResponse:
    """Patients, verified doctors, consultations and donated total."""
    return await AdminService.get_stats(db)


@router.get(
    "/doctors/pending",
    response_model=list[DoctorWithAccountResponse],
    status_code=status.HTTP_200_OK,
    summary="Doctors awaiting verification",
)
async def list_pending_doctors(
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> list[DoctorWithAccountResponse]:
    """Doctor profiles whose account is not yet verified."""
    return await doctor_service.list_pending_verifications(db)


@router.put(
    "/doctors/{user_id}/verification",
    response_model=AccountResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify doctor",
)
async def verify_doctor(
    user_id: int,
    data: VerificationUpdate,
    db: DatabaseSession,
    doctor_service: DoctorService = Depends(get_doctor_service),
) -> AccountResponse:
    """Grant or revoke verification. Unverified doctors are not listed as available."""
    return await doctor_service.set_verification(db, user_id, data.is_verified)


@router.get(
    "/consultations/pending",
    response_model=list[ConsultationDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="Pending consultations",
)
async def list_pending_consultations(db: DatabaseSession) -> list[ConsultationDetailResponse]:
    """Consultations no doctor has accepted yet."""
    service = ConsultationService(db)
    return await service.list_pending()


@router.get(
    "/transport/pending",
    response_model=list[TransportBookingDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="Pending transport bookings",
)
async def list_pending_bookings(db: DatabaseSession) -> list[TransportBookingDetailResponse]:
    """Bookings no provider has accepted yet."""
    service = TransportService(db)
    return await service.list_pending()
