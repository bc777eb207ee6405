"""Donation and donation request endpoints."""

from fastapi import APIRouter, status

from telecare.dependencies import DatabaseSession
from telecare.schemas.donations import (
    DonationCreate,
    DonationRequestCreate,
    DonationRequestResponse,
    DonationRequestStatusUpdate,
    DonationResponse,
    DonationStatsResponse,
)
from telecare.services.donation_service import DonationService

router = APIRouter()


@router.post(
    "/donations",
    response_model=DonationResponse,
    status_code=status.HTTP_200_OK,
    summary="Record donation",
)
async def create_donation(data: DonationCreate, db: DatabaseSession) -> DonationResponse:
    """Record a donation. No payment is taken."""
    service = DonationService(db)
    return await service.create_donation(data)


@router.get(
    "/donations",
    response_model=list[DonationResponse],
    status_code=status.HTTP_200_OK,
    summary="List donations",
)
async def list_donations(db: DatabaseSession) -> list[DonationResponse]:
    """All donations, newest first. Anonymous donors are masked."""
    service = DonationService(db)
    return await service.list_donations()


@router.get(
    "/donations/stats",
    response_model=DonationStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Donation totals",
)
async def donation_stats(db: DatabaseSession) -> DonationStatsResponse:
    """Total amount and number of donations."""
    service = DonationService(db)
    return await service.donation_stats()


@router.post(
    "/donation-requests",
    response_model=DonationRequestResponse,
    status_code=status.HTTP_200_OK,
    summary="Request assistance",
)
async def create_donation_request(
    data: DonationRequestCreate, db: DatabaseSession
) -> DonationRequestResponse:
    """A patient asks for help paying for a consultation or medicine."""
    service = DonationService(db)
    return await service.create_request(data)


@router.get(
    "/donation-requests",
    response_model=list[DonationRequestResponse],
    status_code=status.HTTP_200_OK,
    summary="List donation requests",
)
async def list_donation_requests(db: DatabaseSession) -> list[DonationRequestResponse]:
    """All requests, newest first, with the requesting patient."""
    service = DonationService(db)
    return await service.list_requests()


@router.put(
    "/donation-requests/{request_id}/status",
    response_model=DonationRequestResponse,
    status_code=status.HTTP_200_OK,
    summary="Review donation request",
)
async def update_donation_request_status(
    request_id: int,
    data: DonationRequestStatusUpdate,
    db: DatabaseSession,
) -> DonationRequestResponse:
    """
    Move a request through review.

    pending → approved or rejected, approved → fulfilled.
    """
    service = DonationService(db)
    return await service.update_request_status(request_id, data.status)
