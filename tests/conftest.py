"""Shared fixtures: in-memory database, HTTP client and seed records."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from decimal import Decimal

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Load environment variables from .env file
load_dotenv()

from telecare.config import settings
from telecare.core.security import get_password_hash
from telecare.database import get_db
from telecare.dependencies import get_cache_manager
from telecare.main import app
from telecare.models import (
    accounts,
    doctor_profiles,
    metadata,
    patient_profiles,
    transport_providers,
)

# Every test gets its own in-memory database; StaticPool keeps the single
# connection alive for the whole test.
TEST_DATABASE_URL = "sqlite+aiosqlite://"

API = settings.api_v1_prefix

TEST_PASSWORD = "secret123"


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh schema in an in-memory database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client with caching disabled."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_manager] = lambda: None

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


AccountFactory = Callable[..., Awaitable[dict]]


@pytest.fixture
def make_account(db_session: AsyncSession) -> AccountFactory:
    """Factory inserting an account (and a patient profile for patients)."""
    counter = {"n": 0}

    async def _make(role: str = "patient", is_verified: bool = False, name: str | None = None):
        counter["n"] += 1
        email = f"{role}{counter['n']}@example.com"
        result = await db_session.execute(
            insert(accounts)
            .values(
                email=email,
                password_hash=get_password_hash(TEST_PASSWORD),
                name=name or f"Test {role.title()} {counter['n']}",
                phone="+15550000000",
                role=role,
                is_verified=is_verified,
            )
            .returning(accounts)
        )
        account = dict(result.mappings().one())
        if role == "patient":
            await db_session.execute(insert(patient_profiles).values(user_id=account["id"]))
        await db_session.commit()
        return account

    return _make


@pytest.fixture
def make_doctor(db_session: AsyncSession, make_account: AccountFactory) -> AccountFactory:
    """Factory inserting a doctor account together with its profile."""

    async def _make(
        is_verified: bool = True,
        is_available: bool = True,
        rating: str = "0",
        specialization: str = "General Practice",
    ):
        account = await make_account(role="doctor", is_verified=is_verified)
        result = await db_session.execute(
            insert(doctor_profiles)
            .values(
                user_id=account["id"],
                license_number=f"LIC-{account['id']:05d}",
                specialization=specialization,
                experience=8,
                location="Springfield",
                consultation_fee=Decimal("40.00"),
                is_available=is_available,
                rating=Decimal(rating),
            )
            .returning(doctor_profiles)
        )
        profile = dict(result.mappings().one())
        await db_session.commit()
        return {"account": account, "profile": profile, "id": account["id"]}

    return _make


@pytest.fixture
def make_provider(db_session: AsyncSession) -> AccountFactory:
    """Factory inserting a transport provider."""

    async def _make(
        transport_type: str = "ambulance",
        is_available: bool = True,
        base_fare: str = "50.00",
        per_km_rate: str = "10.00",
        rating: str = "0",
    ):
        result = await db_session.execute(
            insert(transport_providers)
            .values(
                name=f"{transport_type.title()} Service",
                phone="+15551112222",
                type=transport_type,
                location="Central Station",
                is_available=is_available,
                base_fare=Decimal(base_fare),
                per_km_rate=Decimal(per_km_rate),
                rating=Decimal(rating),
            )
            .returning(transport_providers)
        )
        provider = dict(result.mappings().one())
        await db_session.commit()
        return provider

    return _make


@pytest_asyncio.fixture
async def patient(make_account: AccountFactory) -> dict:
    """A registered patient."""
    return await make_account(role="patient")


@pytest_asyncio.fixture
async def doctor(make_doctor: AccountFactory) -> dict:
    """A verified doctor who is online."""
    return await make_doctor()


@pytest_asyncio.fixture
async def consultation(client: AsyncClient, patient: dict, doctor: dict) -> dict:
    """A pending consultation between ``patient`` and ``doctor``."""
    response = await client.post(
        f"{API}/consultations",
        json={
            "patient_id": patient["id"],
            "doctor_id": doctor["id"],
            "type": "regular",
            "symptoms": "Persistent cough for a week",
        },
    )
    assert response.status_code == 200
    return response.json()
