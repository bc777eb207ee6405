"""Pharmacy and medicine endpoints."""

from fastapi import APIRouter, Query, status

from telecare.config import settings
from telecare.dependencies import DatabaseSession
from telecare.schemas.pharmacies import (
    InventoryCreate,
    InventoryResponse,
    MedicineCreate,
    MedicineResponse,
    MedicineSearchResult,
    NearbyPharmacyResponse,
    PharmacyCreate,
    PharmacyResponse,
)
from telecare.services.pharmacy_service import PharmacyService

router = APIRouter()


# ============================================================================
# Pharmacy Endpoints
# ============================================================================


@router.get(
    "/pharmacies",
    response_model=list[PharmacyResponse],
    status_code=status.HTTP_200_OK,
    summary="List pharmacies",
)
async def list_pharmacies(db: DatabaseSession) -> list[PharmacyResponse]:
    """All registered pharmacies."""
    return await PharmacyService.list_pharmacies(db)


@router.post(
    "/pharmacies",
    response_model=PharmacyResponse,
    status_code=status.HTTP_200_OK,
    summary="Register pharmacy",
)
async def create_pharmacy(data: PharmacyCreate, db: DatabaseSession) -> PharmacyResponse:
    """Register a pharmacy."""
    return await PharmacyService.create_pharmacy(db, data)


@router.get(
    "/pharmacies/nearby",
    response_model=list[NearbyPharmacyResponse],
    status_code=status.HTTP_200_OK,
    summary="Find nearby pharmacies",
)
async def find_nearby_pharmacies(
    db: DatabaseSession,
    lat: float = Query(..., ge=-90, le=90, description="Latitude of the search point"),
    lng: float = Query(..., ge=-180, le=180, description="Longitude of the search point"),
    radius: float | None = Query(None, gt=0, le=500, description="Search radius in km"),
) -> list[NearbyPharmacyResponse]:
    """Pharmacies within the radius, nearest first."""
    return await PharmacyService.find_nearby(
        db, lat, lng, radius if radius is not None else settings.nearby_radius_km
    )


@router.get(
    "/pharmacies/{pharmacy_id}/inventory",
    response_model=list[InventoryResponse],
    status_code=status.HTTP_200_OK,
    summary="Get pharmacy inventory",
)
async def get_inventory(pharmacy_id: int, db: DatabaseSession) -> list[InventoryResponse]:
    """Stock of one pharmacy with medicine details."""
    return await PharmacyService.get_inventory(db, pharmacy_id)


@router.post(
    "/pharmacies/{pharmacy_id}/inventory",
    response_model=InventoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Stock medicine",
)
async def add_inventory(
    pharmacy_id: int,
    data: InventoryCreate,
    db: DatabaseSession,
) -> InventoryResponse:
    """Stock a catalogue medicine at a pharmacy."""
    return await PharmacyService.add_inventory(db, pharmacy_id, data)


# ============================================================================
# Medicine Endpoints
# ============================================================================


@router.post(
    "/medicines",
    response_model=MedicineResponse,
    status_code=status.HTTP_200_OK,
    summary="Add medicine",
)
async def create_medicine(data: MedicineCreate, db: DatabaseSession) -> MedicineResponse:
    """Add a medicine to the catalogue."""
    return await PharmacyService.create_medicine(db, data)


@router.get(
    "/medicines/search",
    response_model=list[MedicineSearchResult],
    status_code=status.HTTP_200_OK,
    summary="Search medicine stock",
)
async def search_medicine(
    db: DatabaseSession,
    name: str = Query(..., min_length=1, max_length=200),
) -> list[MedicineSearchResult]:
    """Pharmacies stocking a medicine whose name contains ``name``."""
    return await PharmacyService.search_medicine(db, name)
