"""Transport provider and booking models using SQLAlchemy Core."""

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
    func,
    true,
)

from telecare.models.base import metadata

transport_providers = Table(
    "transport_providers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("phone", Text, nullable=False),
    Column("email", Text),
    Column("type", Text, nullable=False, index=True),
    # Location (no spatial index)
    Column("location", Text, nullable=False),
    Column("latitude", Numeric(10, 8)),
    Column("longitude", Numeric(11, 8)),
    Column("is_available", Boolean, nullable=False, server_default=true(), index=True),
    # Linear fare: base_fare + per_km_rate * distance
    Column("base_fare", Numeric(10, 2), nullable=False),
    Column("per_km_rate", Numeric(10, 2), nullable=False),
    Column("rating", Numeric(3, 2), nullable=False, server_default="0"),
    Column("total_ratings", Integer, nullable=False, server_default="0"),
    # Vehicle and driver
    Column("license_number", Text),
    Column("driver_name", Text),
    Column("vehicle_number", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("type IN ('ambulance', 'cab', 'motorbike')", name="type"),
    CheckConstraint("base_fare >= 0 AND per_km_rate >= 0", name="fares"),
)

transport_bookings = Table(
    "transport_bookings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("patient_id", Integer, ForeignKey("accounts.id"), nullable=False, index=True),
    Column(
        "provider_id",
        Integer,
        ForeignKey("transport_providers.id"),
        nullable=False,
        index=True,
    ),
    Column("type", Text, nullable=False),
    # Route
    Column("pickup_location", Text, nullable=False),
    Column("dropoff_location", Text, nullable=False),
    Column("pickup_latitude", Numeric(10, 8)),
    Column("pickup_longitude", Numeric(11, 8)),
    Column("dropoff_latitude", Numeric(10, 8)),
    Column("dropoff_longitude", Numeric(11, 8)),
    # Pricing
    Column("estimated_distance", Numeric(10, 2)),
    Column("estimated_fare", Numeric(10, 2)),
    Column("actual_fare", Numeric(10, 2)),
    # Lifecycle
    Column("status", Text, nullable=False, server_default="pending", index=True),
    Column("urgency", Text, nullable=False, server_default="medium"),
    # Patient details
    Column("special_requirements", Text),
    Column("patient_condition", Text),
    Column("contact_number", Text, nullable=False),
    Column("notes", Text),
    # Phase timestamps
    Column("booking_time", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("accepted_at", DateTime(timezone=True)),
    Column("arrived_at", DateTime(timezone=True)),
    Column("completed_at", DateTime(timezone=True)),
    Column("cancelled_at", DateTime(timezone=True)),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'en_route', 'arrived', 'in_transit', "
        "'completed', 'cancelled')",
        name="status",
    ),
    CheckConstraint("urgency IN ('low', 'medium', 'high', 'emergency')", name="urgency"),
    CheckConstraint("type IN ('ambulance', 'cab', 'motorbike')", name="type"),
)
