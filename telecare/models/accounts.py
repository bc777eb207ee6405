"""Account model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    String,
    Table,
    Text,
    false,
    func,
)

from telecare.models.base import metadata

accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Identity
    Column("email", Text, nullable=False, unique=True, index=True),
    Column("password_hash", Text, nullable=False),
    Column("name", Text, nullable=False),
    Column("phone", String(20)),
    Column("role", Text, nullable=False, server_default="patient"),
    # Doctors are not matchable until an admin verifies them
    Column("is_verified", Boolean, nullable=False, server_default=false(), index=True),
    # Audit
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("role IN ('patient', 'doctor', 'admin')", name="role"),
)
