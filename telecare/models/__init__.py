"""Database models."""

from telecare.models.accounts import accounts
from telecare.models.base import metadata
from telecare.models.consultations import consultations
from telecare.models.doctor_profiles import doctor_profiles
from telecare.models.donations import donation_requests, donations
from telecare.models.patient_profiles import patient_profiles
from telecare.models.pharmacies import medicines, pharmacies, pharmacy_inventory
from telecare.models.ratings import ratings
from telecare.models.transport import transport_bookings, transport_providers

__all__ = [
    "accounts",
    "consultations",
    "doctor_profiles",
    "donation_requests",
    "donations",
    "medicines",
    "metadata",
    "patient_profiles",
    "pharmacies",
    "pharmacy_inventory",
    "ratings",
    "transport_bookings",
    "transport_providers",
]
