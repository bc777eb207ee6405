"""Tests for admin dashboard endpoints."""

import pytest
from httpx import AsyncClient

from telecare.config import settings

API = settings.api_v1_prefix


@pytest.mark.asyncio
async def test_stats_empty(client: AsyncClient) -> None:
    """Test counters on an empty system."""
    response = await client.get(f"{API}/admin/stats")

    assert response.status_code == 200
    assert response.json() == {
        "active_patients": 0,
        "verified_doctors": 0,
        "total_consultations": 0,
        "total_donations": 0,
    }


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, consultation: dict, make_account, make_doctor) -> None:
    """Test counters after some activity."""
    await make_account(role="patient")
    await make_doctor(is_verified=False)
    await client.post(f"{API}/donations", json={"amount": 40, "type": "general"})
    await client.post(f"{API}/donations", json={"amount": 2.5, "type": "general"})

    stats = (await client.get(f"{API}/admin/stats")).json()

    assert stats["active_patients"] == 2
    assert stats["verified_doctors"] == 1
    assert stats["total_consultations"] == 1
    assert stats["total_donations"] == 42.5


@pytest.mark.asyncio
async def test_verify_doctor_makes_them_bookable(
    client: AsyncClient, patient: dict, make_doctor
) -> None:
    """Test the verification queue and its effect on matching."""
    pending = await make_doctor(is_verified=False)

    queue = (await client.get(f"{API}/admin/doctors/pending")).json()
    assert [d["user_id"] for d in queue] == [pending["id"]]
    assert (await client.get(f"{API}/doctors/available")).json() == []

    response = await client.put(
        f"{API}/admin/doctors/{pending['id']}/verification", json={"is_verified": True}
    )
    assert response.status_code == 200
    assert response.json()["is_verified"] is True

    assert (await client.get(f"{API}/admin/doctors/pending")).json() == []
    available = (await client.get(f"{API}/doctors/available")).json()
    assert [d["user_id"] for d in available] == [pending["id"]]

    booked = await client.post(
        f"{API}/consultations",
        json={"patient_id": patient["id"], "doctor_id": pending["id"], "symptoms": "Migraine"},
    )
    assert booked.status_code == 200


@pytest.mark.asyncio
async def test_verify_unknown_account(client: AsyncClient) -> None:
    """Test 404 when verifying a missing account."""
    response = await client.put(
        f"{API}/admin/doctors/9999/verification", json={"is_verified": True}
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_pending_queues(
    client: AsyncClient, consultation: dict, patient: dict, make_provider
) -> None:
    """Test the pending consultation and transport queues."""
    provider = await make_provider()
    await client.post(
        f"{API}/transport/bookings",
        json={
            "patient_id": patient["id"],
            "provider_id": provider["id"],
            "type": "ambulance",
            "pickup_location": "Home",
            "dropoff_location": "Clinic",
            "contact_number": "5551234567",
        },
    )

    consultations = (await client.get(f"{API}/admin/consultations/pending")).json()
    assert [c["id"] for c in consultations] == [consultation["id"]]

    bookings = (await client.get(f"{API}/admin/transport/pending")).json()
    assert len(bookings) == 1
    assert bookings[0]["provider"]["id"] == provider["id"]
