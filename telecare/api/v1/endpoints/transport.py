"""Transport provider and booking endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Query, status

from telecare.config import settings
from telecare.dependencies import DatabaseSession
from telecare.schemas.transport import (
    FareEstimateResponse,
    TransportBookingCreate,
    TransportBookingDetailResponse,
    TransportBookingResponse,
    TransportBookingUpdate,
    TransportProviderCreate,
    TransportProviderResponse,
    TransportProviderUpdate,
    TransportType,
)
from telecare.services.transport_service import TransportService

router = APIRouter()


# ============================================================================
# Provider Endpoints
# ============================================================================


@router.get(
    "/providers",
    response_model=list[TransportProviderResponse],
    status_code=status.HTTP_200_OK,
    summary="List transport providers",
)
async def list_providers(
    db: DatabaseSession,
    transport_type: TransportType | None = Query(None, alias="type"),
) -> list[TransportProviderResponse]:
    """All providers, optionally filtered by vehicle type."""
    service = TransportService(db)
    return await service.list_providers(transport_type)


@router.get(
    "/providers/available",
    response_model=list[TransportProviderResponse],
    status_code=status.HTTP_200_OK,
    summary="List available transport providers",
)
async def list_available_providers(
    db: DatabaseSession,
    transport_type: TransportType = Query(..., alias="type"),
) -> list[TransportProviderResponse]:
    """
    Providers of the requested type that are currently available.

    - **type**: ambulance, cab or motorbike (required)
    """
    service = TransportService(db)
    return await service.list_available_providers(transport_type)


@router.post(
    "/providers",
    response_model=TransportProviderResponse,
    status_code=status.HTTP_200_OK,
    summary="Register transport provider",
)
async def create_provider(
    data: TransportProviderCreate, db: DatabaseSession
) -> TransportProviderResponse:
    """Register a transport provider."""
    service = TransportService(db)
    return await service.create_provider(data)


@router.get(
    "/providers/{provider_id}",
    response_model=TransportProviderResponse,
    status_code=status.HTTP_200_OK,
    summary="Get transport provider",
)
async def get_provider(provider_id: int, db: DatabaseSession) -> TransportProviderResponse:
    """Get a provider by ID."""
    service = TransportService(db)
    return await service.get_provider(provider_id)


@router.put(
    "/providers/{provider_id}",
    response_model=TransportProviderResponse,
    status_code=status.HTTP_200_OK,
    summary="Update transport provider",
)
async def update_provider(
    provider_id: int,
    data: TransportProviderUpdate,
    db: DatabaseSession,
) -> TransportProviderResponse:
    """Update the provided fields, including availability."""
    service = TransportService(db)
    return await service.update_provider(provider_id, data)


@router.get(
    "/providers/{provider_id}/fare",
    response_model=FareEstimateResponse,
    status_code=status.HTTP_200_OK,
    summary="Estimate fare",
)
async def estimate_fare(
    provider_id: int,
    db: DatabaseSession,
    distance_km: Decimal | None = Query(None, ge=0, le=10000),
) -> FareEstimateResponse:
    """
    Fare for a trip with this provider: ``base_fare + per_km_rate * distance_km``.

    Without ``distance_km`` the default trip distance is used.
    """
    if distance_km is None:
        distance_km = Decimal(str(settings.default_transport_distance_km))

    service = TransportService(db)
    return await service.estimate_fare(provider_id, distance_km)


# ============================================================================
# Booking Endpoints
# ============================================================================


@router.post(
    "/bookings",
    response_model=TransportBookingResponse,
    status_code=status.HTTP_200_OK,
    summary="Book transport",
)
async def create_booking(
    data: TransportBookingCreate, db: DatabaseSession
) -> TransportBookingResponse:
    """
    Book a transport provider.

    The fare is computed from the provider's rates and ``estimated_distance``.
    Returns 409 if the provider is no longer available.
    """
    service = TransportService(db)
    return await service.create_booking(data, settings.default_transport_distance_km)


@router.get(
    "/bookings/pending",
    response_model=list[TransportBookingDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List pending bookings",
)
async def list_pending_bookings(db: DatabaseSession) -> list[TransportBookingDetailResponse]:
    """Bookings no provider has accepted yet."""
    service = TransportService(db)
    return await service.list_pending()


@router.get(
    "/bookings/patient/{patient_id}",
    response_model=list[TransportBookingDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List patient bookings",
)
async def list_patient_bookings(
    patient_id: int, db: DatabaseSession
) -> list[TransportBookingDetailResponse]:
    """A patient's bookings, newest first."""
    service = TransportService(db)
    return await service.list_for_patient(patient_id)


@router.get(
    "/bookings/provider/{provider_id}",
    response_model=list[TransportBookingDetailResponse],
    status_code=status.HTTP_200_OK,
    summary="List provider bookings",
)
async def list_provider_bookings(
    provider_id: int, db: DatabaseSession
) -> list[TransportBookingDetailResponse]:
    """A provider's bookings, newest first."""
    service = TransportService(db)
    return await service.list_for_provider(provider_id)


@router.get(
    "/bookings/{booking_id}",
    response_model=TransportBookingDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get booking",
)
async def get_booking(booking_id: int, db: DatabaseSession) -> TransportBookingDetailResponse:
    """Get a booking with its patient and provider."""
    service = TransportService(db)
    return await service.get_booking(booking_id)


@router.put(
    "/bookings/{booking_id}",
    response_model=TransportBookingResponse,
    status_code=status.HTTP_200_OK,
    summary="Update booking",
)
async def update_booking(
    booking_id: int,
    data: TransportBookingUpdate,
    db: DatabaseSession,
) -> TransportBookingResponse:
    """
    Partially update a booking.

    Status must advance one step along pending → accepted → en_route →
    arrived → in_transit → completed, or jump to cancelled before
    completion.
    """
    service = TransportService(db)
    return await service.update_booking(booking_id, data)
