"""Registration and credential check endpoints."""

from fastapi import APIRouter, status

from telecare.dependencies import DatabaseSession
from telecare.schemas.accounts import AccountResponse, LoginRequest, RegisterRequest
from telecare.services.account_service import AccountService

router = APIRouter()


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_200_OK,
    summary="Register account",
)
async def register(data: RegisterRequest, db: DatabaseSession) -> AccountResponse:
    """
    Create a patient or doctor account.

    Patients get an empty profile straight away; doctors create theirs
    through ``POST /doctors``.
    """
    service = AccountService(db)
    return await service.register(data)


@router.post(
    "/login",
    response_model=AccountResponse,
    status_code=status.HTTP_200_OK,
    summary="Check credentials",
)
async def login(data: LoginRequest, db: DatabaseSession) -> AccountResponse:
    """
    Verify an email and password pair.

    Token issuance belongs to the identity provider; this only returns the
    matching account.
    """
    service = AccountService(db)
    return await service.authenticate(data)
