"""Doctor profile model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    Table,
    Text,
    false,
)

from telecare.models.base import metadata

doctor_profiles = Table(
    "doctor_profiles",
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
    # Professional details
    Column("license_number", Text, nullable=False),
    Column("specialization", Text, nullable=False, index=True),
    Column("experience", Integer, nullable=False),
    Column("location", Text, nullable=False),
    Column("consultation_fee", Numeric(10, 2), nullable=False, server_default="0"),
    # Doctor-controlled toggle
    Column("is_available", Boolean, nullable=False, server_default=false(), index=True),
    # Aggregate cache recomputed from ratings
    Column("rating", Numeric(3, 2), nullable=False, server_default="0"),
    Column("total_ratings", Integer, nullable=False, server_default="0"),
    CheckConstraint("experience >= 0", name="experience"),
    CheckConstraint("rating >= 0 AND rating <= 5", name="rating"),
)
