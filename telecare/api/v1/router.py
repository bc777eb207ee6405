"""API v1 router configuration."""

from fastapi import APIRouter

from telecare.api.v1.endpoints import (
    accounts,
    admin,
    auth,
    consultations,
    doctors,
    donations,
    health,
    patients,
    pharmacies,
    ratings,
    transport,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(accounts.router, prefix="/accounts", tags=["Accounts"])
api_router.include_router(doctors.router, prefix="/doctors", tags=["Doctors"])
api_router.include_router(patients.router, prefix="/patients", tags=["Patients"])
api_router.include_router(consultations.router, prefix="/consultations", tags=["Consultations"])
api_router.include_router(ratings.router, prefix="/ratings", tags=["Ratings"])
api_router.include_router(transport.router, prefix="/transport", tags=["Transport"])
api_router.include_router(pharmacies.router, tags=["Pharmacies"])
api_router.include_router(donations.router, tags=["Donations"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
