"""Status transition tables for consultations and transport bookings.

Every status write goes through :func:`ensure_transition`. A record already in
a terminal state accepts no further writes, and moving to the status a record
already has is a no-op for non-terminal records.
"""

from enum import Enum

from telecare.core.exceptions import IllegalTransitionException


class ConsultationStatus(str, Enum):
    """Consultation status enumeration."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingStatus(str, Enum):
    """Transport booking status enumeration."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EN_ROUTE = "en_route"
    ARRIVED = "arrived"
    IN_TRANSIT = "in_transit"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


CONSULTATION_TRANSITIONS: dict[ConsultationStatus, frozenset[ConsultationStatus]] = {
    ConsultationStatus.PENDING: frozenset(
        {ConsultationStatus.ACTIVE, ConsultationStatus.CANCELLED}
    ),
    ConsultationStatus.ACTIVE: frozenset(
        {ConsultationStatus.COMPLETED, ConsultationStatus.CANCELLED}
    ),
    ConsultationStatus.COMPLETED: frozenset(),
    ConsultationStatus.CANCELLED: frozenset(),
}

BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.ACCEPTED, BookingStatus.CANCELLED}),
    BookingStatus.ACCEPTED: frozenset({BookingStatus.EN_ROUTE, BookingStatus.CANCELLED}),
    BookingStatus.EN_ROUTE: frozenset({BookingStatus.ARRIVED, BookingStatus.CANCELLED}),
    BookingStatus.ARRIVED: frozenset({BookingStatus.IN_TRANSIT, BookingStatus.CANCELLED}),
    BookingStatus.IN_TRANSIT: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

_TABLES: dict[type[Enum], tuple[str, dict]] = {
    ConsultationStatus: ("consultation", CONSULTATION_TRANSITIONS),
    BookingStatus: ("transport booking", BOOKING_TRANSITIONS),
}


def is_terminal(status: ConsultationStatus | BookingStatus) -> bool:
    """Return True if no transition leaves ``status``."""
    _, table = _TABLES[type(status)]
    return not table[status]


def allowed_transitions(
    status: ConsultationStatus | BookingStatus,
) -> frozenset[ConsultationStatus] | frozenset[BookingStatus]:
    """Return the statuses reachable from ``status`` in one step."""
    _, table = _TABLES[type(status)]
    return table[status]


def ensure_transition(current: Enum, target: Enum | None) -> bool:
    """
    Validate a status write against the transition table.

    Args:
        current: Status stored on the record
        target: Requested status, or None for a write that leaves status alone

    Returns:
        True if the write changes the status, False if it keeps it

    Raises:
        IllegalTransitionException: If the record is terminal or the
            requested status is not reachable from the current one
    """
    entity, table = _TABLES[type(current)]

    if not table[current]:
        if target is None or target == current:
            raise IllegalTransitionException(entity, current.value)
        raise IllegalTransitionException(entity, current.value, target.value)

    if target is None or target == current:
        return False

    if target not in table[current]:
        raise IllegalTransitionException(entity, current.value, target.value)

    return True
