"""Account service for registration, credential checks and joined views."""

from collections.abc import Iterable
from typing import Any

import structlog
from sqlalchemy import Table, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import Label

from telecare.core.exceptions import ConflictException, NotFoundException, UnauthorizedException
from telecare.core.security import get_password_hash, verify_password
from telecare.models.accounts import accounts
from telecare.models.patient_profiles import patient_profiles
from telecare.schemas.accounts import AccountRole, LoginRequest, RegisterRequest

logger = structlog.get_logger(__name__)

# Columns exposed when an account is embedded in another record
ACCOUNT_VIEW_COLUMNS = ("id", "email", "name", "phone", "role", "is_verified", "created_at")


def prefixed_columns(
    table: Table, prefix: str, names: Iterable[str] | None = None
) -> list[Label]:
    """Label the columns of ``table`` (all, or only ``names``) with ``prefix``."""
    columns = table.c if names is None else [table.c[name] for name in names]
    return [column.label(f"{prefix}{column.name}") for column in columns]


def account_columns(table: Table, prefix: str) -> list[Label]:
    """Label the public account columns of ``table`` with ``prefix``."""
    return prefixed_columns(table, prefix, ACCOUNT_VIEW_COLUMNS)


def nest_prefixed(record: dict[str, Any], prefix: str, key: str) -> dict[str, Any]:
    """Move every ``prefix``-ed entry of ``record`` into ``record[key]``."""
    nested = {
        name[len(prefix) :]: record.pop(name) for name in list(record) if name.startswith(prefix)
    }
    record[key] = nested
    return record


def public_account(row: Any) -> dict[str, Any]:
    """Account mapping without the password hash."""
    account = dict(row)
    account.pop("password_hash", None)
    return account


class AccountService:
    """Service for account operations."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def register(self, data: RegisterRequest) -> dict:
        """
        Create an account, plus an empty patient profile for patients.

        Raises:
            ConflictException: If the email is already registered
        """
        existing = await self.db.execute(select(accounts.c.id).where(accounts.c.email == data.email))
        if existing.first():
            raise ConflictException("User already exists")

        result = await self.db.execute(
            insert(accounts)
            .values(
                email=data.email,
                password_hash=get_password_hash(data.password),
                name=data.name,
                phone=data.phone,
                role=data.role.value,
            )
            .returning(accounts)
        )
        account = public_account(result.mappings().one())

        if data.role == AccountRole.PATIENT:
            await self.db.execute(insert(patient_profiles).values(user_id=account["id"]))

        await self.db.commit()

        logger.info("account_registered", account_id=account["id"], role=account["role"])
        return account

    async def authenticate(self, data: LoginRequest) -> dict:
        """
        Check credentials.

        Raises:
            UnauthorizedException: On unknown email or wrong password
        """
        result = await self.db.execute(select(accounts).where(accounts.c.email == data.email))
        row = result.mappings().first()

        if not row or not verify_password(data.password, row["password_hash"]):
            raise UnauthorizedException("Invalid credentials")

        return public_account(row)

    async def get_account(self, account_id: int) -> dict:
        """
        Get account by ID.

        Raises:
            NotFoundException: If the account does not exist
        """
        result = await self.db.execute(select(accounts).where(accounts.c.id == account_id))
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Account not found")

        return public_account(row)
