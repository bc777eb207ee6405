"""Admin dashboard service."""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.models.accounts import accounts
from telecare.models.consultations import consultations
from telecare.models.donations import donations
from telecare.schemas.accounts import AccountRole


class AdminService:
    """Service for admin-only aggregates."""

    @staticmethod
    async def get_stats(db: AsyncSession) -> dict:
        """Headline counters for the dashboard."""
        patients = await db.scalar(
            select(func.count(accounts.c.id)).where(accounts.c.role == AccountRole.PATIENT.value)
        )
        verified_doctors = await db.scalar(
            select(func.count(accounts.c.id)).where(
                accounts.c.role == AccountRole.DOCTOR.value,
                accounts.c.is_verified.is_(True),
            )
        )
        total_consultations = await db.scalar(select(func.count(consultations.c.id)))
        total_donations = await db.scalar(select(func.coalesce(func.sum(donations.c.amount), 0)))

        return {
            "active_patients": patients or 0,
            "verified_doctors": verified_doctors or 0,
            "total_consultations": total_consultations or 0,
            "total_donations": Decimal(str(total_donations or 0)),
        }
