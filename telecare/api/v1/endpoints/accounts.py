"""Account endpoints."""

from fastapi import APIRouter, status

from telecare.dependencies import DatabaseSession
from telecare.schemas.accounts import AccountResponse
from telecare.services.account_service import AccountService

router = APIRouter()


@router.get(
    "/{account_id}",
    response_model=AccountResponse,
    status_code=status.HTTP_200_OK,
    summary="Get account",
)
async def get_account(account_id: int, db: DatabaseSession) -> AccountResponse:
    """Get an account by ID."""
    service = AccountService(db)
    return await service.get_account(account_id)
