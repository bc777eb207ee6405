"""Patient profile model definition using SQLAlchemy Core."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Table, Text

from telecare.models.base import metadata

patient_profiles = Table(
    "patient_profiles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    ),
    Column("date_of_birth", DateTime(timezone=True)),
    Column("gender", Text),
    Column("location", Text),
    Column("emergency_contact", Text),
    Column("medical_history", JSON),
)
