"""Tests for doctor profiles and availability matching."""

import pytest
from httpx import AsyncClient
from sqlalchemy.dialects import postgresql

from telecare.config import settings
from telecare.services.doctor_service import DoctorService

API = settings.api_v1_prefix


@pytest.mark.asyncio
async def test_available_doctors_empty(client: AsyncClient) -> None:
    """Test that no doctors is a valid answer."""
    response = await client.get(f"{API}/doctors/available")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_available_doctors_filters_on_both_flags(
    client: AsyncClient, make_doctor
) -> None:
    """Test that only online and verified doctors are listed, whatever their rating."""
    listed = await make_doctor(is_verified=True, is_available=True, rating="3.00")
    await make_doctor(is_verified=True, is_available=False, rating="5.00")
    await make_doctor(is_verified=False, is_available=True)
    await make_doctor(is_verified=False, is_available=False)

    response = await client.get(f"{API}/doctors/available")

    assert response.status_code == 200
    data = response.json()
    assert [d["user_id"] for d in data] == [listed["id"]]
    assert data[0]["is_available"] is True
    assert data[0]["user"]["is_verified"] is True
    assert "password_hash" not in data[0]["user"]


@pytest.mark.asyncio
async def test_available_doctors_ordered_by_rating(client: AsyncClient, make_doctor) -> None:
    """Test rating-descending order with ties broken by profile id."""
    low = await make_doctor(rating="3.50")
    high = await make_doctor(rating="4.90")
    tie = await make_doctor(rating="3.50")

    response = await client.get(f"{API}/doctors/available")

    ids = [d["user_id"] for d in response.json()]
    assert ids == [high["id"], low["id"], tie["id"]]


@pytest.mark.asyncio
async def test_availability_toggle_controls_listing(client: AsyncClient, doctor: dict) -> None:
    """Test that going offline removes a doctor and going online restores them."""
    url = f"{API}/doctors/{doctor['id']}/availability"

    response = await client.put(url, json={"is_available": False})
    assert response.status_code == 200
    assert response.json()["is_available"] is False
    assert (await client.get(f"{API}/doctors/available")).json() == []

    response = await client.put(url, json={"is_available": True})
    assert response.status_code == 200
    listed = (await client.get(f"{API}/doctors/available")).json()
    assert [d["user_id"] for d in listed] == [doctor["id"]]


@pytest.mark.asyncio
async def test_availability_requires_boolean(client: AsyncClient, doctor: dict) -> None:
    """Test that the toggle body is validated."""
    response = await client.put(
        f"{API}/doctors/{doctor['id']}/availability", json={"is_available": "maybe"}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_availability_unknown_doctor(client: AsyncClient) -> None:
    """Test 404 when the doctor has no profile."""
    response = await client.put(f"{API}/doctors/9999/availability", json={"is_available": True})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_offline_doctor_blocks_new_consultation(
    client: AsyncClient, patient: dict, doctor: dict
) -> None:
    """Test that a doctor listed a moment ago cannot be booked after going offline."""
    listed = (await client.get(f"{API}/doctors/available")).json()
    assert listed[0]["user_id"] == doctor["id"]

    await client.put(f"{API}/doctors/{doctor['id']}/availability", json={"is_available": False})

    response = await client.post(
        f"{API}/consultations",
        json={"patient_id": patient["id"], "doctor_id": doctor["id"], "symptoms": "Sore throat"},
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_create_doctor_profile(client: AsyncClient, make_account) -> None:
    """Test creating the profile of a doctor account."""
    account = await make_account(role="doctor")

    response = await client.post(
        f"{API}/doctors",
        json={
            "user_id": account["id"],
            "license_number": "MD-12345",
            "specialization": "Cardiology",
            "experience": 12,
            "location": "Shelbyville",
            "consultation_fee": 75.5,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == account["id"]
    assert data["is_available"] is False
    assert data["rating"] == 0
    assert data["total_ratings"] == 0
    assert data["consultation_fee"] == 75.5


@pytest.mark.asyncio
async def test_create_doctor_profile_errors(
    client: AsyncClient, patient: dict, doctor: dict
) -> None:
    """Test unknown account, wrong role and duplicate profile."""
    payload = {
        "license_number": "MD-1",
        "specialization": "Dermatology",
        "experience": 3,
        "location": "Ogdenville",
    }

    missing = await client.post(f"{API}/doctors", json={**payload, "user_id": 9999})
    assert missing.status_code == 404

    wrong_role = await client.post(f"{API}/doctors", json={**payload, "user_id": patient["id"]})
    assert wrong_role.status_code == 400

    duplicate = await client.post(f"{API}/doctors", json={**payload, "user_id": doctor["id"]})
    assert duplicate.status_code == 409


@pytest.mark.asyncio
async def test_get_and_update_doctor_profile(client: AsyncClient, doctor: dict) -> None:
    """Test reading and partially updating a profile."""
    response = await client.get(f"{API}/doctors/{doctor['id']}")
    assert response.status_code == 200
    assert response.json()["specialization"] == "General Practice"

    response = await client.put(
        f"{API}/doctors/{doctor['id']}", json={"specialization": "Pediatrics", "experience": 10}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["specialization"] == "Pediatrics"
    assert data["experience"] == 10
    assert data["location"] == "Springfield"


@pytest.mark.asyncio
async def test_get_doctor_profile_not_found(client: AsyncClient) -> None:
    """Test 404 for a missing profile."""
    response = await client.get(f"{API}/doctors/9999")

    assert response.status_code == 404


def test_bookable_check_locks_profile_and_account():
    """Test that the booking re-check locks the profile and the account row."""
    query = DoctorService._bookable_profile_query(1)

    sql = str(query.compile(dialect=postgresql.dialect()))

    assert "FOR UPDATE OF doctor_profiles, accounts" in sql
