"""Donation and donation request models using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    Table,
    Text,
    false,
    func,
)

from telecare.models.base import metadata

donations = Table(
    "donations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("donor_name", Text),
    Column("donor_email", Text),
    Column("amount", Numeric(10, 2), nullable=False),
    Column("type", Text, nullable=False),
    Column("message", Text),
    Column("is_anonymous", Boolean, nullable=False, server_default=false()),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("type IN ('consultation', 'medicine', 'general')", name="type"),
    CheckConstraint("amount > 0", name="amount"),
)

donation_requests = Table(
    "donation_requests",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("patient_id", Integer, ForeignKey("accounts.id"), nullable=False, index=True),
    Column("type", Text, nullable=False),
    Column("amount", Numeric(10, 2), nullable=False),
    Column("reason", Text, nullable=False),
    Column("status", Text, nullable=False, server_default="pending"),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("type IN ('consultation', 'medicine')", name="type"),
    CheckConstraint(
        "status IN ('pending', 'approved', 'fulfilled', 'rejected')",
        name="status",
    ),
)
