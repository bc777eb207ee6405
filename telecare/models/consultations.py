"""Consultations table model using SQLAlchemy Core."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Table,
    Text,
    func,
)

from telecare.models.base import metadata

consultations = Table(
    "consultations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Participants
    Column("patient_id", Integer, ForeignKey("accounts.id"), nullable=False, index=True),
    Column("doctor_id", Integer, ForeignKey("accounts.id"), nullable=False, index=True),
    # Lifecycle
    Column("status", Text, nullable=False, server_default="pending", index=True),
    Column("type", Text, nullable=False, server_default="regular"),
    # Clinical content
    Column("symptoms", Text),
    Column("diagnosis", Text),
    Column("prescription", Text),
    Column("notes", Text),
    # Phase boundaries
    Column("scheduled_at", DateTime(timezone=True)),
    Column("started_at", DateTime(timezone=True)),
    Column("ended_at", DateTime(timezone=True)),
    # Audit
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint(
        "status IN ('pending', 'active', 'completed', 'cancelled')",
        name="status",
    ),
    CheckConstraint("type IN ('emergency', 'regular')", name="type"),
)
