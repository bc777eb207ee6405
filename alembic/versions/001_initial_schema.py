"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("role", sa.Text(), nullable=False, server_default=sa.text("'patient'")),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        sa.CheckConstraint(
            "role IN ('patient', 'doctor', 'admin')", name="accounts_role_check"
        ),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=True)
    op.create_index("ix_accounts_is_verified", "accounts", ["is_verified"])

    op.create_table(
        "doctor_profiles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("license_number", sa.Text(), nullable=False),
        sa.Column("specialization", sa.Text(), nullable=False),
        sa.Column("experience", sa.Integer(), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column(
            "consultation_fee", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")
        ),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("total_ratings", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint("experience >= 0", name="doctor_profiles_experience_check"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="doctor_profiles_rating_check"),
    )
    op.create_index("ix_doctor_profiles_user_id", "doctor_profiles", ["user_id"], unique=True)
    op.create_index("ix_doctor_profiles_specialization", "doctor_profiles", ["specialization"])
    op.create_index("ix_doctor_profiles_is_available", "doctor_profiles", ["is_available"])

    op.create_table(
        "patient_profiles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date_of_birth", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("gender", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("emergency_contact", sa.Text(), nullable=True),
        sa.Column("medical_history", sa.JSON(), nullable=True),
    )
    op.create_index("ix_patient_profiles_user_id", "patient_profiles", ["user_id"], unique=True)

    op.create_table(
        "consultations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("type", sa.Text(), nullable=False, server_default=sa.text("'regular'")),
        sa.Column("symptoms", sa.Text(), nullable=True),
        sa.Column("diagnosis", sa.Text(), nullable=True),
        sa.Column("prescription", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("scheduled_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("started_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("ended_at", sa.TIMESTAMP(timezone=True), nullable=True),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'active', 'completed', 'cancelled')",
            name="consultations_status_check",
        ),
        sa.CheckConstraint("type IN ('emergency', 'regular')", name="consultations_type_check"),
    )
    op.create_index("ix_consultations_patient_id", "consultations", ["patient_id"])
    op.create_index("ix_consultations_doctor_id", "consultations", ["doctor_id"])
    op.create_index("ix_consultations_status", "consultations", ["status"])

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "consultation_id",
            sa.Integer(),
            sa.ForeignKey("consultations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("review", sa.Text(), nullable=True),
        _created_at(),
        sa.UniqueConstraint("consultation_id", name="ratings_consultation_id_key"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ratings_rating_check"),
    )
    op.create_index("ix_ratings_doctor_id", "ratings", ["doctor_id"])

    op.create_table(
        "transport_providers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("phone", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("base_fare", sa.Numeric(10, 2), nullable=False),
        sa.Column("per_km_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("total_ratings", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("license_number", sa.Text(), nullable=True),
        sa.Column("driver_name", sa.Text(), nullable=True),
        sa.Column("vehicle_number", sa.Text(), nullable=True),
        _created_at(),
        sa.CheckConstraint(
            "type IN ('ambulance', 'cab', 'motorbike')", name="transport_providers_type_check"
        ),
        sa.CheckConstraint(
            "base_fare >= 0 AND per_km_rate >= 0", name="transport_providers_fares_check"
        ),
    )
    op.create_index("ix_transport_providers_type", "transport_providers", ["type"])
    op.create_index("ix_transport_providers_is_available", "transport_providers", ["is_available"])

    op.create_table(
        "transport_bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column(
            "provider_id",
            sa.Integer(),
            sa.ForeignKey("transport_providers.id"),
            nullable=False,
        ),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("pickup_location", sa.Text(), nullable=False),
        sa.Column("dropoff_location", sa.Text(), nullable=False),
        sa.Column("pickup_latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("pickup_longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column("dropoff_latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("dropoff_longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column("estimated_distance", sa.Numeric(10, 2), nullable=True),
        sa.Column("estimated_fare", sa.Numeric(10, 2), nullable=True),
        sa.Column("actual_fare", sa.Numeric(10, 2), nullable=True),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("urgency", sa.Text(), nullable=False, server_default=sa.text("'medium'")),
        sa.Column("special_requirements", sa.Text(), nullable=True),
        sa.Column("patient_condition", sa.Text(), nullable=True),
        sa.Column("contact_number", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "booking_time",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("arrived_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("completed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'en_route', 'arrived', 'in_transit', "
            "'completed', 'cancelled')",
            name="transport_bookings_status_check",
        ),
        sa.CheckConstraint(
            "urgency IN ('low', 'medium', 'high', 'emergency')",
            name="transport_bookings_urgency_check",
        ),
        sa.CheckConstraint(
            "type IN ('ambulance', 'cab', 'motorbike')", name="transport_bookings_type_check"
        ),
    )
    op.create_index("ix_transport_bookings_patient_id", "transport_bookings", ["patient_id"])
    op.create_index("ix_transport_bookings_provider_id", "transport_bookings", ["provider_id"])
    op.create_index("ix_transport_bookings_status", "transport_bookings", ["status"])

    op.create_table(
        "pharmacies",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("phone", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column(
            "is_open_24_hours", sa.Boolean(), nullable=False, server_default=sa.text("false")
        ),
        sa.Column("opening_hours", sa.JSON(), nullable=True),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default=sa.text("0")),
    )

    op.create_table(
        "medicines",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("generic_name", sa.Text(), nullable=True),
        sa.Column("dosage", sa.Text(), nullable=True),
        sa.Column("manufacturer", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
    )
    op.create_index("ix_medicines_name", "medicines", ["name"])

    op.create_table(
        "pharmacy_inventory",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "pharmacy_id",
            sa.Integer(),
            sa.ForeignKey("pharmacies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "medicine_id",
            sa.Integer(),
            sa.ForeignKey("medicines.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("stock", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.UniqueConstraint(
            "pharmacy_id", "medicine_id", name="pharmacy_inventory_pharmacy_id_key"
        ),
    )
    op.create_index("ix_pharmacy_inventory_pharmacy_id", "pharmacy_inventory", ["pharmacy_id"])
    op.create_index("ix_pharmacy_inventory_medicine_id", "pharmacy_inventory", ["medicine_id"])

    op.create_table(
        "donations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("donor_name", sa.Text(), nullable=True),
        sa.Column("donor_email", sa.Text(), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        _created_at(),
        sa.CheckConstraint(
            "type IN ('consultation', 'medicine', 'general')", name="donations_type_check"
        ),
        sa.CheckConstraint("amount > 0", name="donations_amount_check"),
    )

    op.create_table(
        "donation_requests",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        _created_at(),
        sa.CheckConstraint(
            "type IN ('consultation', 'medicine')", name="donation_requests_type_check"
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'fulfilled', 'rejected')",
            name="donation_requests_status_check",
        ),
    )
    op.create_index("ix_donation_requests_patient_id", "donation_requests", ["patient_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("donation_requests")
    op.drop_table("donations")
    op.drop_table("pharmacy_inventory")
    op.drop_table("medicines")
    op.drop_table("pharmacies")
    op.drop_table("transport_bookings")
    op.drop_table("transport_providers")
    op.drop_table("ratings")
    op.drop_table("consultations")
    op.drop_table("patient_profiles")
    op.drop_table("doctor_profiles")
    op.drop_table("accounts")
