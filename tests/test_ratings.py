"""Tests for rating submission and doctor aggregates."""

import pytest
from httpx import AsyncClient

from telecare.config import settings

API = settings.api_v1_prefix


async def _consultation(client: AsyncClient, patient_id: int, doctor_id: int) -> int:
    response = await client.post(
        f"{API}/consultations",
        json={"patient_id": patient_id, "doctor_id": doctor_id, "symptoms": "Back pain"},
    )
    assert response.status_code == 200
    return response.json()["id"]


async def _rate(client: AsyncClient, consultation_id: int, patient_id: int, doctor_id: int, value):
    return await client.post(
        f"{API}/ratings",
        json={
            "consultation_id": consultation_id,
            "patient_id": patient_id,
            "doctor_id": doctor_id,
            "rating": value,
            "review": "Helpful",
        },
    )


@pytest.mark.asyncio
async def test_submit_rating_updates_aggregate(
    client: AsyncClient, patient: dict, doctor: dict
) -> None:
    """Test that the doctor's rating is the rounded mean of all ratings."""
    for value in (5, 4, 4):
        consultation_id = await _consultation(client, patient["id"], doctor["id"])
        response = await _rate(client, consultation_id, patient["id"], doctor["id"], value)
        assert response.status_code == 200
        assert response.json()["rating"] == value

    profile = (await client.get(f"{API}/doctors/{doctor['id']}")).json()
    assert profile["total_ratings"] == 3
    # mean 4.333... rounded to two places
    assert profile["rating"] == 4.33


@pytest.mark.asyncio
async def test_rating_rounds_half_up(client: AsyncClient, patient: dict, doctor: dict) -> None:
    """Test that a mean ending in 5 rounds up."""
    # (5 + 4 + 4 + 4 + 4 + 4 + 4 + 4) / 8 = 4.125
    for value in (5, 4, 4, 4, 4, 4, 4, 4):
        consultation_id = await _consultation(client, patient["id"], doctor["id"])
        await _rate(client, consultation_id, patient["id"], doctor["id"], value)

    profile = (await client.get(f"{API}/doctors/{doctor['id']}")).json()
    assert profile["total_ratings"] == 8
    assert profile["rating"] == 4.13


@pytest.mark.asyncio
async def test_rating_out_of_range(
    client: AsyncClient, consultation: dict, patient: dict, doctor: dict
) -> None:
    """Test that ratings outside 1-5 are rejected and nothing changes."""
    for value in (0, 6):
        response = await _rate(client, consultation["id"], patient["id"], doctor["id"], value)
        assert response.status_code == 400

    profile = (await client.get(f"{API}/doctors/{doctor['id']}")).json()
    assert profile["total_ratings"] == 0


@pytest.mark.asyncio
async def test_rating_same_consultation_twice(
    client: AsyncClient, consultation: dict, patient: dict, doctor: dict
) -> None:
    """Test that a consultation can be rated only once."""
    first = await _rate(client, consultation["id"], patient["id"], doctor["id"], 5)
    assert first.status_code == 200

    second = await _rate(client, consultation["id"], patient["id"], doctor["id"], 1)
    assert second.status_code == 409

    profile = (await client.get(f"{API}/doctors/{doctor['id']}")).json()
    assert profile["total_ratings"] == 1
    assert profile["rating"] == 5


@pytest.mark.asyncio
async def test_rating_unknown_consultation(
    client: AsyncClient, patient: dict, doctor: dict
) -> None:
    """Test 404 for a consultation that does not exist."""
    response = await _rate(client, 9999, patient["id"], doctor["id"], 4)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_rating_participant_mismatch(
    client: AsyncClient, consultation: dict, patient: dict, make_doctor
) -> None:
    """Test that a rating must name the consultation's own doctor."""
    other = await make_doctor()

    response = await _rate(client, consultation["id"], patient["id"], other["id"], 5)

    assert response.status_code == 400
    profile = (await client.get(f"{API}/doctors/{other['id']}")).json()
    assert profile["total_ratings"] == 0
