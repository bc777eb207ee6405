"""Ratings table model using SQLAlchemy Core."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Table, Text, func

from telecare.models.base import metadata

ratings = Table(
    "ratings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # One rating per consultation
    Column(
        "consultation_id",
        Integer,
        ForeignKey("consultations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("patient_id", Integer, ForeignKey("accounts.id"), nullable=False),
    Column("doctor_id", Integer, ForeignKey("accounts.id"), nullable=False, index=True),
    Column("rating", Integer, nullable=False),
    Column("review", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("rating BETWEEN 1 AND 5", name="rating"),
)
