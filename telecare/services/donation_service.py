"""Donation service: donations, totals and patient help requests."""

from decimal import Decimal

import structlog
from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.core.exceptions import IllegalTransitionException, NotFoundException
from telecare.models.accounts import accounts
from telecare.models.donations import donation_requests, donations
from telecare.schemas.donations import (
    DonationCreate,
    DonationRequestCreate,
    DonationRequestStatus,
)
from telecare.services.account_service import account_columns, nest_prefixed

logger = structlog.get_logger(__name__)

PATIENT_PREFIX = "patient__"

ANONYMOUS_DONOR = "Anonymous"

# Review flow of a donation request
REQUEST_TRANSITIONS: dict[DonationRequestStatus, frozenset[DonationRequestStatus]] = {
    DonationRequestStatus.PENDING: frozenset(
        {DonationRequestStatus.APPROVED, DonationRequestStatus.REJECTED}
    ),
    DonationRequestStatus.APPROVED: frozenset({DonationRequestStatus.FULFILLED}),
    DonationRequestStatus.FULFILLED: frozenset(),
    DonationRequestStatus.REJECTED: frozenset(),
}


def mask_donor(donation: dict) -> dict:
    """Hide the identity of an anonymous donor."""
    if donation["is_anonymous"]:
        donation["donor_name"] = ANONYMOUS_DONOR
        donation["donor_email"] = None
    return donation


class DonationService:
    """Service for donations and donation requests."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    async def create_donation(self, data: DonationCreate) -> dict:
        """Record a donation. No payment is taken."""
        values = data.model_dump()
        values["type"] = data.type.value

        result = await self.db.execute(insert(donations).values(**values).returning(donations))
        donation = dict(result.mappings().one())
        await self.db.commit()

        logger.info(
            "donation_recorded",
            donation_id=donation["id"],
            type=donation["type"],
            amount=str(donation["amount"]),
        )
        return donation

    async def list_donations(self) -> list[dict]:
        """All donations, newest first, anonymous donors masked."""
        result = await self.db.execute(
            select(donations).order_by(donations.c.created_at.desc(), donations.c.id.desc())
        )
        return [mask_donor(dict(row)) for row in result.mappings().all()]

    async def donation_stats(self) -> dict:
        """Sum and count of every donation."""
        row = (
            await self.db.execute(
                select(
                    func.coalesce(func.sum(donations.c.amount), 0).label("total"),
                    func.count(donations.c.id).label("count"),
                )
            )
        ).one()
        return {"total": Decimal(str(row.total)), "count": row.count}

    async def create_request(self, data: DonationRequestCreate) -> dict:
        """
        File a request for financial help.

        Raises:
            NotFoundException: If the patient does not exist
        """
        patient = await self.db.execute(select(accounts.c.id).where(accounts.c.id == data.patient_id))
        if not patient.first():
            raise NotFoundException("Patient not found")

        values = data.model_dump()
        values.update(type=data.type.value, status=DonationRequestStatus.PENDING.value)

        result = await self.db.execute(
            insert(donation_requests).values(**values).returning(donation_requests)
        )
        request = dict(result.mappings().one())
        await self.db.commit()

        logger.info("donation_request_created", request_id=request["id"], patient_id=data.patient_id)
        return request

    async def list_requests(self) -> list[dict]:
        """All donation requests, newest first, with the patient attached."""
        query = (
            select(donation_requests, *account_columns(accounts, PATIENT_PREFIX))
            .join(accounts, donation_requests.c.patient_id == accounts.c.id)
            .order_by(donation_requests.c.created_at.desc(), donation_requests.c.id.desc())
        )
        result = await self.db.execute(query)
        return [
            nest_prefixed(dict(row), PATIENT_PREFIX, "patient") for row in result.mappings().all()
        ]

    async def update_request_status(
        self, request_id: int, status: DonationRequestStatus
    ) -> dict:
        """
        Move a donation request through review.

        Raises:
            NotFoundException: If the request does not exist
            IllegalTransitionException: If the review step is not allowed
        """
        result = await self.db.execute(
            select(donation_requests)
            .where(donation_requests.c.id == request_id)
            .with_for_update()
        )
        current = result.mappings().first()

        if not current:
            raise NotFoundException("Donation request not found")

        current_status = DonationRequestStatus(current["status"])
        allowed = REQUEST_TRANSITIONS[current_status]

        if not allowed or (status != current_status and status not in allowed):
            raise IllegalTransitionException(
                "donation request", current_status.value, status.value
            )
        if status == current_status:
            return dict(current)

        result = await self.db.execute(
            update(donation_requests)
            .where(donation_requests.c.id == request_id)
            .values(status=status.value)
            .returning(donation_requests)
        )
        request = dict(result.mappings().one())
        await self.db.commit()

        logger.info(
            "donation_request_status_changed",
            request_id=request_id,
            old_status=current_status.value,
            new_status=status.value,
        )
        return request
