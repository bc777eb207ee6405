"""Pharmacy, medicine and inventory models using SQLAlchemy Core."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    Table,
    Text,
    UniqueConstraint,
    false,
)

from telecare.models.base import metadata

pharmacies = Table(
    "pharmacies",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("address", Text, nullable=False),
    Column("phone", Text, nullable=False),
    Column("latitude", Numeric(10, 8)),
    Column("longitude", Numeric(11, 8)),
    Column("is_open_24_hours", Boolean, nullable=False, server_default=false()),
    Column("opening_hours", JSON),
    Column("rating", Numeric(3, 2), nullable=False, server_default="0"),
)

medicines = Table(
    "medicines",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False, index=True),
    Column("generic_name", Text),
    Column("dosage", Text),
    Column("manufacturer", Text),
    Column("price", Numeric(10, 2)),
)

pharmacy_inventory = Table(
    "pharmacy_inventory",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "pharmacy_id",
        Integer,
        ForeignKey("pharmacies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "medicine_id",
        Integer,
        ForeignKey("medicines.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("stock", Integer, nullable=False, server_default="0"),
    Column("price", Numeric(10, 2)),
    UniqueConstraint("pharmacy_id", "medicine_id"),
)
