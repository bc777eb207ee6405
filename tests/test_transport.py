"""Tests for transport providers, fares and the booking pipeline."""

import pytest
from httpx import AsyncClient

from telecare.config import settings

API = settings.api_v1_prefix

CHAIN = ["accepted", "en_route", "arrived", "in_transit", "completed"]


def _booking_payload(patient_id: int, provider_id: int, **overrides) -> dict:
    payload = {
        "patient_id": patient_id,
        "provider_id": provider_id,
        "type": "ambulance",
        "pickup_location": "12 Elm Street",
        "dropoff_location": "General Hospital",
        "urgency": "emergency",
        "contact_number": "+1 555 123 4567",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_provider(client: AsyncClient) -> None:
    """Test registering a provider."""
    response = await client.post(
        f"{API}/transport/providers",
        json={
            "name": "City Ambulance",
            "phone": "+15550001111",
            "type": "ambulance",
            "location": "Downtown",
            "base_fare": 50,
            "per_km_rate": 12.5,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["is_available"] is True
    assert data["base_fare"] == 50
    assert data["per_km_rate"] == 12.5


@pytest.mark.asyncio
async def test_available_providers_filter_and_order(client: AsyncClient, make_provider) -> None:
    """Test type and availability filtering, best rated then cheapest first."""
    cheap = await make_provider(rating="4.00", base_fare="30.00")
    best = await make_provider(rating="4.80", base_fare="90.00")
    pricey = await make_provider(rating="4.00", base_fare="60.00")
    await make_provider(is_available=False, rating="5.00")
    await make_provider(transport_type="cab", rating="5.00")

    response = await client.get(f"{API}/transport/providers/available", params={"type": "ambulance"})

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [best["id"], cheap["id"], pricey["id"]]


@pytest.mark.asyncio
async def test_available_providers_requires_type(client: AsyncClient) -> None:
    """Test 400 when the type query is missing or unknown."""
    missing = await client.get(f"{API}/transport/providers/available")
    assert missing.status_code == 400
    assert "type" in missing.json()["message"]

    unknown = await client.get(f"{API}/transport/providers/available", params={"type": "boat"})
    assert unknown.status_code == 400


@pytest.mark.asyncio
async def test_list_providers_by_type(client: AsyncClient, make_provider) -> None:
    """Test the unfiltered and type-filtered provider lists."""
    ambulance = await make_provider()
    cab = await make_provider(transport_type="cab", is_available=False)

    everything = (await client.get(f"{API}/transport/providers")).json()
    assert {p["id"] for p in everything} == {ambulance["id"], cab["id"]}

    cabs = (await client.get(f"{API}/transport/providers", params={"type": "cab"})).json()
    assert [p["id"] for p in cabs] == [cab["id"]]


@pytest.mark.asyncio
async def test_update_provider_availability(client: AsyncClient, make_provider) -> None:
    """Test toggling a provider offline."""
    provider = await make_provider()

    response = await client.put(
        f"{API}/transport/providers/{provider['id']}", json={"is_available": False}
    )

    assert response.status_code == 200
    assert response.json()["is_available"] is False
    available = await client.get(f"{API}/transport/providers/available", params={"type": "ambulance"})
    assert available.json() == []


@pytest.mark.asyncio
async def test_fare_estimate(client: AsyncClient, make_provider) -> None:
    """Test the fare endpoint with an explicit and a default distance."""
    provider = await make_provider(base_fare="50.00", per_km_rate="10.00")

    response = await client.get(
        f"{API}/transport/providers/{provider['id']}/fare", params={"distance_km": 7.5}
    )
    assert response.status_code == 200
    assert response.json()["estimated_fare"] == 125.0

    default = await client.get(f"{API}/transport/providers/{provider['id']}/fare")
    assert default.json()["distance_km"] == settings.default_transport_distance_km
    assert default.json()["estimated_fare"] == 50 + 10 * settings.default_transport_distance_km


@pytest.mark.asyncio
async def test_create_booking_computes_fare(
    client: AsyncClient, patient: dict, make_provider
) -> None:
    """Test that the server computes the fare and ignores a client value."""
    provider = await make_provider(base_fare="50.00", per_km_rate="10.00")

    response = await client.post(
        f"{API}/transport/bookings",
        json=_booking_payload(
            patient["id"], provider["id"], estimated_distance=3, estimated_fare=1
        ),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "pending"
    assert data["estimated_fare"] == 80.0
    assert data["urgency"] == "emergency"
    assert data["booking_time"] is not None


@pytest.mark.asyncio
async def test_create_booking_default_distance(
    client: AsyncClient, patient: dict, make_provider
) -> None:
    """Test that a missing distance falls back to the configured default."""
    provider = await make_provider(base_fare="20.00", per_km_rate="2.00")

    response = await client.post(
        f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
    )

    data = response.json()
    assert data["estimated_distance"] == settings.default_transport_distance_km
    assert data["estimated_fare"] == 20 + 2 * settings.default_transport_distance_km


@pytest.mark.asyncio
async def test_create_booking_unavailable_provider(
    client: AsyncClient, patient: dict, make_provider
) -> None:
    """Test that an offline provider cannot be booked."""
    provider = await make_provider(is_available=False)

    response = await client.post(
        f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
    )

    assert response.status_code == 409
    assert response.json()["error"] == "ProviderUnavailableException"


@pytest.mark.asyncio
async def test_create_booking_type_mismatch(
    client: AsyncClient, patient: dict, make_provider
) -> None:
    """Test that the requested vehicle type must match the provider."""
    provider = await make_provider(transport_type="cab")

    response = await client.post(
        f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_booking_validation(
    client: AsyncClient, patient: dict, make_provider
) -> None:
    """Test that bad contact numbers and urgency values are rejected."""
    provider = await make_provider()

    bad_phone = await client.post(
        f"{API}/transport/bookings",
        json=_booking_payload(patient["id"], provider["id"], contact_number="call me maybe"),
    )
    assert bad_phone.status_code == 400

    bad_urgency = await client.post(
        f"{API}/transport/bookings",
        json=_booking_payload(patient["id"], provider["id"], urgency="whenever"),
    )
    assert bad_urgency.status_code == 400


@pytest.mark.asyncio
async def test_booking_walks_the_chain(client: AsyncClient, patient: dict, make_provider) -> None:
    """Test every status step and its phase timestamp."""
    provider = await make_provider()
    booking = (
        await client.post(
            f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
        )
    ).json()
    url = f"{API}/transport/bookings/{booking['id']}"

    for status in CHAIN:
        response = await client.put(url, json={"status": status})
        assert response.status_code == 200, status
        assert response.json()["status"] == status

    data = response.json()
    assert data["accepted_at"] is not None
    assert data["arrived_at"] is not None
    assert data["completed_at"] is not None
    assert data["cancelled_at"] is None

    after = await client.put(url, json={"status": "cancelled"})
    assert after.status_code == 409


@pytest.mark.asyncio
async def test_booking_cannot_skip_steps(
    client: AsyncClient, patient: dict, make_provider
) -> None:
    """Test that pending cannot jump straight to arrived."""
    provider = await make_provider()
    booking = (
        await client.post(
            f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
        )
    ).json()

    response = await client.put(
        f"{API}/transport/bookings/{booking['id']}", json={"status": "arrived"}
    )

    assert response.status_code == 409
    assert response.json()["error"] == "IllegalTransitionException"


@pytest.mark.asyncio
async def test_cancel_booking_mid_trip(client: AsyncClient, patient: dict, make_provider) -> None:
    """Test cancelling an accepted booking and the terminal state that follows."""
    provider = await make_provider()
    booking = (
        await client.post(
            f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
        )
    ).json()
    url = f"{API}/transport/bookings/{booking['id']}"

    await client.put(url, json={"status": "accepted"})
    response = await client.put(url, json={"status": "cancelled", "notes": "Patient self-drove"})

    assert response.status_code == 200
    assert response.json()["cancelled_at"] is not None
    assert response.json()["notes"] == "Patient self-drove"

    reopen = await client.put(url, json={"status": "accepted"})
    assert reopen.status_code == 409


@pytest.mark.asyncio
async def test_update_booking_fields(client: AsyncClient, patient: dict, make_provider) -> None:
    """Test recording the actual fare without a status change."""
    provider = await make_provider()
    booking = (
        await client.post(
            f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
        )
    ).json()

    response = await client.put(
        f"{API}/transport/bookings/{booking['id']}", json={"actual_fare": 95.25}
    )

    assert response.status_code == 200
    assert response.json()["actual_fare"] == 95.25
    assert response.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_get_and_list_bookings(client: AsyncClient, patient: dict, make_provider) -> None:
    """Test the detail view and the patient, provider and pending lists."""
    provider = await make_provider()
    first = (
        await client.post(
            f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
        )
    ).json()
    second = (
        await client.post(
            f"{API}/transport/bookings", json=_booking_payload(patient["id"], provider["id"])
        )
    ).json()
    await client.put(f"{API}/transport/bookings/{first['id']}", json={"status": "accepted"})

    detail = (await client.get(f"{API}/transport/bookings/{first['id']}")).json()
    assert detail["patient"]["id"] == patient["id"]
    assert detail["provider"]["id"] == provider["id"]

    by_patient = (await client.get(f"{API}/transport/bookings/patient/{patient['id']}")).json()
    assert [b["id"] for b in by_patient] == [second["id"], first["id"]]

    by_provider = (await client.get(f"{API}/transport/bookings/provider/{provider['id']}")).json()
    assert len(by_provider) == 2

    pending = (await client.get(f"{API}/transport/bookings/pending")).json()
    assert [b["id"] for b in pending] == [second["id"]]

    missing = await client.get(f"{API}/transport/bookings/9999")
    assert missing.status_code == 404
