"""Doctor service: profiles, availability matching and aggregate ratings."""

from decimal import ROUND_HALF_UP, Decimal

import structlog
from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from telecare.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
    ProviderUnavailableException,
)
from telecare.core.redis_client import CacheManager
from telecare.models.accounts import accounts
from telecare.models.doctor_profiles import doctor_profiles
from telecare.models.ratings import ratings
from telecare.schemas.accounts import AccountRole
from telecare.schemas.doctors import DoctorProfileCreate, DoctorProfileUpdate
from telecare.services.account_service import account_columns, nest_prefixed, public_account

logger = structlog.get_logger(__name__)

USER_PREFIX = "user__"


class DoctorService:
    """
    Service for doctor operations.

    Single profiles are cached by account id. The available-doctors list is
    always read from the store so availability is never served stale.
    """

    # Cache TTL in seconds
    PROFILE_CACHE_TTL = 900  # 15 minutes

    def __init__(self, cache_manager: CacheManager | None = None):
        """Initialize service with optional cache manager."""
        self.cache = cache_manager

    @staticmethod
    def _profile_cache_key(user_id: int) -> str:
        """Generate cache key for a doctor profile."""
        return f"doctor:profile:{user_id}"

    def invalidate(self, user_id: int) -> None:
        """Drop the cached profile of one doctor."""
        if self.cache:
            self.cache.delete(self._profile_cache_key(user_id))

    @staticmethod
    def _with_account_query():
        return select(doctor_profiles, *account_columns(accounts, USER_PREFIX)).join(
            accounts, doctor_profiles.c.user_id == accounts.c.id
        )

    async def create_profile(self, db: AsyncSession, data: DoctorProfileCreate) -> dict:
        """
        Create the profile of a doctor account.

        Raises:
            NotFoundException: If the account does not exist
            BadRequestException: If the account is not a doctor account
            ConflictException: If the account already has a profile
        """
        account = (
            await db.execute(select(accounts).where(accounts.c.id == data.user_id))
        ).mappings().first()
        if not account:
            raise NotFoundException("Account not found")
        if account["role"] != AccountRole.DOCTOR.value:
            raise BadRequestException("Only doctor accounts can have a doctor profile")

        existing = await db.execute(
            select(doctor_profiles.c.id).where(doctor_profiles.c.user_id == data.user_id)
        )
        if existing.first():
            raise ConflictException("Doctor profile already exists")

        result = await db.execute(
            insert(doctor_profiles).values(**data.model_dump()).returning(doctor_profiles)
        )
        profile = dict(result.mappings().one())
        await db.commit()

        logger.info("doctor_profile_created", user_id=data.user_id)
        return profile

    async def get_profile(self, db: AsyncSession, user_id: int) -> dict:
        """
        Get a doctor profile by account id, with caching.

        Raises:
            NotFoundException: If the profile does not exist
        """
        if self.cache:
            cached = self.cache.get_json(self._profile_cache_key(user_id))
            if cached:
                return cached

        result = await db.execute(select(doctor_profiles).where(doctor_profiles.c.user_id == user_id))
        profile = result.mappings().first()

        if not profile:
            raise NotFoundException("Doctor profile not found")

        profile_dict = dict(profile)

        if self.cache:
            self.cache.set_json(
                self._profile_cache_key(user_id), profile_dict, ttl=self.PROFILE_CACHE_TTL
            )

        return profile_dict

    async def _update_profile_values(self, db: AsyncSession, user_id: int, values: dict) -> dict:
        result = await db.execute(
            update(doctor_profiles)
            .where(doctor_profiles.c.user_id == user_id)
            .values(**values)
            .returning(doctor_profiles)
        )
        profile = result.mappings().first()

        if not profile:
            raise NotFoundException("Doctor profile not found")

        profile_dict = dict(profile)
        await db.commit()
        self.invalidate(user_id)
        return profile_dict

    async def update_profile(
        self, db: AsyncSession, user_id: int, data: DoctorProfileUpdate
    ) -> dict:
        """Update the provided profile fields."""
        values = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if not values:
            return await self.get_profile(db, user_id)

        return await self._update_profile_values(db, user_id, values)

    async def set_availability(self, db: AsyncSession, user_id: int, is_available: bool) -> dict:
        """Flip the doctor-controlled availability toggle."""
        profile = await self._update_profile_values(db, user_id, {"is_available": is_available})
        logger.info("doctor_availability_changed", user_id=user_id, is_available=is_available)
        return profile

    async def list_available_doctors(self, db: AsyncSession) -> list[dict]:
        """
        Doctors a patient can request a consultation from.

        Only profiles marked available whose account is verified are returned,
        highest rating first, ties broken by profile id.
        """
        query = (
            self._with_account_query()
            .where(
                and_(
                    doctor_profiles.c.is_available.is_(True),
                    accounts.c.is_verified.is_(True),
                )
            )
            .order_by(doctor_profiles.c.rating.desc(), doctor_profiles.c.id.asc())
        )

        result = await db.execute(query)
        return [nest_prefixed(dict(row), USER_PREFIX, "user") for row in result.mappings().all()]

    async def list_pending_verifications(self, db: AsyncSession) -> list[dict]:
        """Doctor profiles whose account still awaits verification."""
        query = (
            self._with_account_query()
            .where(accounts.c.is_verified.is_(False))
            .order_by(doctor_profiles.c.id.asc())
        )

        result = await db.execute(query)
        return [nest_prefixed(dict(row), USER_PREFIX, "user") for row in result.mappings().all()]

    async def set_verification(self, db: AsyncSession, user_id: int, is_verified: bool) -> dict:
        """
        Set the verification flag of an account.

        Raises:
            NotFoundException: If the account does not exist
        """
        result = await db.execute(
            update(accounts)
            .where(accounts.c.id == user_id)
            .values(is_verified=is_verified)
            .returning(accounts)
        )
        row = result.mappings().first()

        if not row:
            raise NotFoundException("Account not found")

        account = public_account(row)
        await db.commit()
        self.invalidate(user_id)

        logger.info("account_verification_changed", user_id=user_id, is_verified=is_verified)
        return account

    @staticmethod
    def _bookable_profile_query(user_id: int):
        # is_verified lives on the account row, so it is locked too
        return (
            select(doctor_profiles, accounts.c.is_verified)
            .join(accounts, doctor_profiles.c.user_id == accounts.c.id)
            .where(doctor_profiles.c.user_id == user_id)
            .with_for_update(of=[doctor_profiles, accounts])
        )

    async def lock_bookable_profile(self, db: AsyncSession, user_id: int) -> dict:
        """
        Re-check, under a row lock, that a doctor can take a new consultation.

        Does not commit; the caller's write happens in the same transaction.

        Raises:
            NotFoundException: If the doctor has no profile
            ProviderUnavailableException: If the doctor is unavailable or unverified
        """
        row = (await db.execute(self._bookable_profile_query(user_id))).mappings().first()

        if not row:
            raise NotFoundException("Doctor not found")

        if not row["is_available"] or not row["is_verified"]:
            raise ProviderUnavailableException("Doctor is no longer available")

        return dict(row)

    async def recompute_rating(self, db: AsyncSession, user_id: int) -> dict:
        """
        Recompute a doctor's aggregate rating from every rating row.

        The profile row is locked first so concurrent submissions for the same
        doctor serialize. Does not commit.

        Raises:
            NotFoundException: If the doctor has no profile
        """
        locked = await db.execute(
            select(doctor_profiles.c.id)
            .where(doctor_profiles.c.user_id == user_id)
            .with_for_update()
        )
        if not locked.first():
            raise NotFoundException("Doctor profile not found")

        stats = (
            await db.execute(
                select(
                    func.avg(ratings.c.rating).label("average"),
                    func.count(ratings.c.id).label("total"),
                ).where(ratings.c.doctor_id == user_id)
            )
        ).one()

        average = Decimal(str(stats.average)) if stats.average is not None else Decimal("0")
        rating = average.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

        result = await db.execute(
            update(doctor_profiles)
            .where(doctor_profiles.c.user_id == user_id)
            .values(rating=rating, total_ratings=stats.total)
            .returning(doctor_profiles)
        )
        profile = dict(result.mappings().one())

        logger.info(
            "doctor_rating_recomputed",
            user_id=user_id,
            rating=str(rating),
            total_ratings=stats.total,
        )
        return profile
