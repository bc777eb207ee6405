"""Pharmacy service: pharmacies, medicine catalogue and stock."""

import math
from decimal import Decimal

import structlog
from sqlalchemy import insert, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.core.exceptions import ConflictException, NotFoundException
from telecare.models.pharmacies import medicines, pharmacies, pharmacy_inventory
from telecare.schemas.pharmacies import InventoryCreate, MedicineCreate, PharmacyCreate
from telecare.services.account_service import nest_prefixed, prefixed_columns

logger = structlog.get_logger(__name__)

EARTH_RADIUS_KM = 6371.0

MEDICINE_PREFIX = "medicine__"
PHARMACY_PREFIX = "pharmacy__"


def haversine_km(
    lat1: float | Decimal, lng1: float | Decimal, lat2: float | Decimal, lng2: float | Decimal
) -> float:
    """Great-circle distance between two points, in kilometres."""
    phi1, phi2 = math.radians(float(lat1)), math.radians(float(lat2))
    d_phi = phi2 - phi1
    d_lambda = math.radians(float(lng2) - float(lng1))

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


class PharmacyService:
    """Service for pharmacy operations."""

    @staticmethod
    async def list_pharmacies(db: AsyncSession) -> list[dict]:
        """All pharmacies by name."""
        result = await db.execute(select(pharmacies).order_by(pharmacies.c.name, pharmacies.c.id))
        return [dict(row) for row in result.mappings().all()]

    @staticmethod
    async def create_pharmacy(db: AsyncSession, data: PharmacyCreate) -> dict:
        """Register a pharmacy."""
        result = await db.execute(
            insert(pharmacies).values(**data.model_dump()).returning(pharmacies)
        )
        pharmacy = dict(result.mappings().one())
        await db.commit()

        logger.info("pharmacy_created", pharmacy_id=pharmacy["id"])
        return pharmacy

    @staticmethod
    async def get_pharmacy(db: AsyncSession, pharmacy_id: int) -> dict:
        """
        Get pharmacy by ID.

        Raises:
            NotFoundException: If pharmacy not found
        """
        result = await db.execute(select(pharmacies).where(pharmacies.c.id == pharmacy_id))
        pharmacy = result.mappings().first()

        if not pharmacy:
            raise NotFoundException("Pharmacy not found")

        return dict(pharmacy)

    @staticmethod
    async def find_nearby(
        db: AsyncSession, latitude: float, longitude: float, radius_km: float
    ) -> list[dict]:
        """
        Pharmacies within ``radius_km`` of a point, nearest first.

        Distances are computed here over every pharmacy that has coordinates;
        there is no spatial index behind this lookup.
        """
        result = await db.execute(
            select(pharmacies).where(
                pharmacies.c.latitude.is_not(None),
                pharmacies.c.longitude.is_not(None),
            )
        )

        nearby = []
        for row in result.mappings().all():
            distance = haversine_km(latitude, longitude, row["latitude"], row["longitude"])
            if distance <= radius_km:
                pharmacy = dict(row)
                pharmacy["distance_km"] = round(distance, 3)
                nearby.append(pharmacy)

        nearby.sort(key=lambda p: (p["distance_km"], p["id"]))
        return nearby

    @staticmethod
    async def get_inventory(db: AsyncSession, pharmacy_id: int) -> list[dict]:
        """Stock of one pharmacy with each medicine attached."""
        await PharmacyService.get_pharmacy(db, pharmacy_id)

        query = (
            select(pharmacy_inventory, *prefixed_columns(medicines, MEDICINE_PREFIX))
            .join(medicines, pharmacy_inventory.c.medicine_id == medicines.c.id)
            .where(pharmacy_inventory.c.pharmacy_id == pharmacy_id)
            .order_by(medicines.c.name, pharmacy_inventory.c.id)
        )
        result = await db.execute(query)
        return [
            nest_prefixed(dict(row), MEDICINE_PREFIX, "medicine") for row in result.mappings().all()
        ]

    @staticmethod
    async def add_inventory(db: AsyncSession, pharmacy_id: int, data: InventoryCreate) -> dict:
        """
        Stock a medicine at a pharmacy.

        Raises:
            NotFoundException: If the pharmacy or medicine does not exist
            ConflictException: If the medicine is already stocked there
        """
        await PharmacyService.get_pharmacy(db, pharmacy_id)

        medicine = (
            await db.execute(select(medicines).where(medicines.c.id == data.medicine_id))
        ).mappings().first()
        if not medicine:
            raise NotFoundException("Medicine not found")

        try:
            result = await db.execute(
                insert(pharmacy_inventory)
                .values(pharmacy_id=pharmacy_id, **data.model_dump())
                .returning(pharmacy_inventory)
            )
            item = dict(result.mappings().one())
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise ConflictException("Medicine is already stocked at this pharmacy") from e

        item["medicine"] = dict(medicine)
        return item

    @staticmethod
    async def create_medicine(db: AsyncSession, data: MedicineCreate) -> dict:
        """Add a medicine to the catalogue."""
        result = await db.execute(
            insert(medicines).values(**data.model_dump()).returning(medicines)
        )
        medicine = dict(result.mappings().one())
        await db.commit()
        return medicine

    @staticmethod
    async def search_medicine(db: AsyncSession, name: str) -> list[dict]:
        """Stock rows whose medicine name or generic name contains ``name``."""
        pattern = f"%{name}%"
        query = (
            select(
                pharmacy_inventory,
                *prefixed_columns(medicines, MEDICINE_PREFIX),
                *prefixed_columns(pharmacies, PHARMACY_PREFIX),
            )
            .join(medicines, pharmacy_inventory.c.medicine_id == medicines.c.id)
            .join(pharmacies, pharmacy_inventory.c.pharmacy_id == pharmacies.c.id)
            .where(or_(medicines.c.name.ilike(pattern), medicines.c.generic_name.ilike(pattern)))
            .order_by(medicines.c.name, pharmacies.c.name, pharmacy_inventory.c.id)
        )
        result = await db.execute(query)

        rows = []
        for row in result.mappings().all():
            record = nest_prefixed(dict(row), MEDICINE_PREFIX, "medicine")
            rows.append(nest_prefixed(record, PHARMACY_PREFIX, "pharmacy"))
        return rows
