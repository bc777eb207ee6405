"""Transport service: providers, fare estimates and the booking lifecycle."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.core.exceptions import (
    BadRequestException,
    NotFoundException,
    ProviderUnavailableException,
)
from telecare.core.fares import estimate_fare
from telecare.core.lifecycle import BookingStatus, ensure_transition
from telecare.models.accounts import accounts
from telecare.models.transport import transport_bookings, transport_providers
from telecare.schemas.transport import (
    TransportBookingCreate,
    TransportBookingUpdate,
    TransportProviderCreate,
    TransportProviderUpdate,
    TransportType,
)
from telecare.services.account_service import account_columns, nest_prefixed, prefixed_columns

logger = structlog.get_logger(__name__)

PATIENT_PREFIX = "patient__"
PROVIDER_PREFIX = "provider__"

# Timestamp column stamped when a booking enters the status
PHASE_TIMESTAMPS: dict[BookingStatus, str] = {
    BookingStatus.ACCEPTED: "accepted_at",
    BookingStatus.ARRIVED: "arrived_at",
    BookingStatus.COMPLETED: "completed_at",
    BookingStatus.CANCELLED: "cancelled_at",
}


class TransportService:
    """Service for transport providers and bookings."""

    def __init__(self, db: AsyncSession):
        """Initialize service with database session."""
        self.db = db

    # ------------------------------------------------------------------
    # Providers
    # ------------------------------------------------------------------

    async def list_providers(self, transport_type: TransportType | None = None) -> list[dict]:
        """All providers, optionally of one type."""
        query = select(transport_providers).order_by(transport_providers.c.id.asc())
        if transport_type:
            query = query.where(transport_providers.c.type == transport_type.value)

        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def list_available_providers(self, transport_type: TransportType) -> list[dict]:
        """
        Providers of one type that can take a booking right now.

        Ordered by rating (highest first), then cheapest base fare, then id.
        """
        query = (
            select(transport_providers)
            .where(
                transport_providers.c.type == transport_type.value,
                transport_providers.c.is_available.is_(True),
            )
            .order_by(
                transport_providers.c.rating.desc(),
                transport_providers.c.base_fare.asc(),
                transport_providers.c.id.asc(),
            )
        )
        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def get_provider(self, provider_id: int) -> dict:
        """
        Get provider by ID.

        Raises:
            NotFoundException: If provider not found
        """
        result = await self.db.execute(
            select(transport_providers).where(transport_providers.c.id == provider_id)
        )
        provider = result.mappings().first()

        if not provider:
            raise NotFoundException("Transport provider not found")

        return dict(provider)

    async def create_provider(self, data: TransportProviderCreate) -> dict:
        """Register a transport provider."""
        values = data.model_dump()
        values["type"] = data.type.value

        result = await self.db.execute(
            insert(transport_providers).values(**values).returning(transport_providers)
        )
        provider = dict(result.mappings().one())
        await self.db.commit()

        logger.info("transport_provider_created", provider_id=provider["id"], type=provider["type"])
        return provider

    async def update_provider(self, provider_id: int, data: TransportProviderUpdate) -> dict:
        """Update the provided fields of a provider."""
        values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if not values:
            return await self.get_provider(provider_id)

        result = await self.db.execute(
            update(transport_providers)
            .where(transport_providers.c.id == provider_id)
            .values(**values)
            .returning(transport_providers)
        )
        provider = result.mappings().first()

        if not provider:
            raise NotFoundException("Transport provider not found")

        provider_dict = dict(provider)
        await self.db.commit()
        return provider_dict

    async def estimate_fare(self, provider_id: int, distance_km: Decimal) -> dict:
        """Fare a provider would charge for ``distance_km``."""
        provider = await self.get_provider(provider_id)
        return {
            "provider_id": provider_id,
            "distance_km": distance_km,
            "base_fare": provider["base_fare"],
            "per_km_rate": provider["per_km_rate"],
            "estimated_fare": estimate_fare(
                provider["base_fare"], provider["per_km_rate"], distance_km
            ),
        }

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------

    async def create_booking(self, data: TransportBookingCreate, default_distance_km: float) -> dict:
        """
        Book a transport provider.

        The provider row is locked and its availability and vehicle type
        re-checked before the insert. The fare is computed here from the
        provider's rates; ``default_distance_km`` is used when the caller
        gives no distance.

        Raises:
            NotFoundException: If the patient or provider does not exist
            BadRequestException: If the provider's vehicle type differs
            ProviderUnavailableException: If the provider is no longer available
        """
        patient = await self.db.execute(select(accounts.c.id).where(accounts.c.id == data.patient_id))
        if not patient.first():
            raise NotFoundException("Patient not found")

        result = await self.db.execute(
            select(transport_providers)
            .where(transport_providers.c.id == data.provider_id)
            .with_for_update()
        )
        provider = result.mappings().first()

        if not provider:
            raise NotFoundException("Transport provider not found")
        if provider["type"] != data.type.value:
            raise BadRequestException(
                f"Provider offers '{provider['type']}', not '{data.type.value}'"
            )
        if not provider["is_available"]:
            raise ProviderUnavailableException("Transport provider is no longer available")

        distance = (
            data.estimated_distance
            if data.estimated_distance is not None
            else Decimal(str(default_distance_km))
        )

        values = data.model_dump()
        values.update(
            type=data.type.value,
            urgency=data.urgency.value,
            estimated_distance=distance,
            estimated_fare=estimate_fare(provider["base_fare"], provider["per_km_rate"], distance),
            status=BookingStatus.PENDING.value,
        )

        result = await self.db.execute(
            insert(transport_bookings).values(**values).returning(transport_bookings)
        )
        booking = dict(result.mappings().one())
        await self.db.commit()

        logger.info(
            "transport_booking_created",
            booking_id=booking["id"],
            provider_id=data.provider_id,
            urgency=data.urgency.value,
            estimated_fare=str(booking["estimated_fare"]),
        )
        return booking

    def _detail_query(self):
        return (
            select(
                transport_bookings,
                *account_columns(accounts, PATIENT_PREFIX),
                *prefixed_columns(transport_providers, PROVIDER_PREFIX),
            )
            .join(accounts, transport_bookings.c.patient_id == accounts.c.id)
            .join(
                transport_providers,
                transport_bookings.c.provider_id == transport_providers.c.id,
            )
        )

    @staticmethod
    def _nest(row: Any) -> dict:
        record = nest_prefixed(dict(row), PATIENT_PREFIX, "patient")
        return nest_prefixed(record, PROVIDER_PREFIX, "provider")

    async def get_booking(self, booking_id: int) -> dict:
        """
        Get a booking with its patient and provider.

        Raises:
            NotFoundException: If booking not found
        """
        result = await self.db.execute(
            self._detail_query().where(transport_bookings.c.id == booking_id)
        )
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Transport booking not found")

        return self._nest(row)

    async def list_for_patient(self, patient_id: int) -> list[dict]:
        """A patient's bookings, newest first."""
        result = await self.db.execute(
            self._detail_query()
            .where(transport_bookings.c.patient_id == patient_id)
            .order_by(transport_bookings.c.booking_time.desc(), transport_bookings.c.id.desc())
        )
        return [self._nest(row) for row in result.mappings().all()]

    async def list_for_provider(self, provider_id: int) -> list[dict]:
        """A provider's bookings, newest first."""
        result = await self.db.execute(
            self._detail_query()
            .where(transport_bookings.c.provider_id == provider_id)
            .order_by(transport_bookings.c.booking_time.desc(), transport_bookings.c.id.desc())
        )
        return [self._nest(row) for row in result.mappings().all()]

    async def list_pending(self) -> list[dict]:
        """Bookings no provider has accepted yet, newest first."""
        result = await self.db.execute(
            self._detail_query()
            .where(transport_bookings.c.status == BookingStatus.PENDING.value)
            .order_by(transport_bookings.c.booking_time.desc(), transport_bookings.c.id.desc())
        )
        return [self._nest(row) for row in result.mappings().all()]

    async def update_booking(self, booking_id: int, data: TransportBookingUpdate) -> dict:
        """
        Partially update a booking, moving its status through the chain.

        Raises:
            NotFoundException: If booking not found
            IllegalTransitionException: If the status change is not allowed or
                the booking is already closed
        """
        result = await self.db.execute(
            select(transport_bookings)
            .where(transport_bookings.c.id == booking_id)
            .with_for_update()
        )
        current = result.mappings().first()

        if not current:
            raise NotFoundException("Transport booking not found")

        current_status = BookingStatus(current["status"])
        target = data.status
        changes_status = ensure_transition(current_status, target)

        values = {
            field: value
            for field, value in data.model_dump(exclude_unset=True, exclude={"status"}).items()
            if value is not None
        }
        if changes_status:
            values["status"] = target.value
            if target in PHASE_TIMESTAMPS:
                values[PHASE_TIMESTAMPS[target]] = datetime.now(UTC)

        if not values:
            return dict(current)

        result = await self.db.execute(
            update(transport_bookings)
            .where(transport_bookings.c.id == booking_id)
            .values(**values)
            .returning(transport_bookings)
        )
        booking = dict(result.mappings().one())
        await self.db.commit()

        if changes_status:
            logger.info(
                "transport_booking_status_changed",
                booking_id=booking_id,
                old_status=current_status.value,
                new_status=target.value,
            )

        return booking
