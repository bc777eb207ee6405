"""Tests for the consultation and booking transition tables."""

import pytest

from telecare.core.exceptions import IllegalTransitionException
from telecare.core.lifecycle import (
    BOOKING_TRANSITIONS,
    BookingStatus,
    ConsultationStatus,
    allowed_transitions,
    ensure_transition,
    is_terminal,
)

BOOKING_CHAIN = [
    BookingStatus.PENDING,
    BookingStatus.ACCEPTED,
    BookingStatus.EN_ROUTE,
    BookingStatus.ARRIVED,
    BookingStatus.IN_TRANSIT,
    BookingStatus.COMPLETED,
]


def test_consultation_happy_path_is_allowed():
    """Test pending -> active -> completed."""
    assert ensure_transition(ConsultationStatus.PENDING, ConsultationStatus.ACTIVE) is True
    assert ensure_transition(ConsultationStatus.ACTIVE, ConsultationStatus.COMPLETED) is True


def test_consultation_cannot_skip_active():
    """Test that a pending consultation cannot be completed directly."""
    with pytest.raises(IllegalTransitionException) as exc_info:
        ensure_transition(ConsultationStatus.PENDING, ConsultationStatus.COMPLETED)

    assert exc_info.value.status_code == 409
    assert exc_info.value.current == "pending"
    assert exc_info.value.target == "completed"


@pytest.mark.parametrize("terminal", [ConsultationStatus.COMPLETED, ConsultationStatus.CANCELLED])
def test_consultation_terminal_states_reject_every_write(terminal):
    """Test that closed consultations accept nothing, not even their own status."""
    assert is_terminal(terminal)

    for target in [*ConsultationStatus, None]:
        with pytest.raises(IllegalTransitionException):
            ensure_transition(terminal, target)


def test_same_status_is_a_noop_for_open_records():
    """Test that re-sending the current status changes nothing."""
    assert ensure_transition(ConsultationStatus.ACTIVE, ConsultationStatus.ACTIVE) is False
    assert ensure_transition(BookingStatus.EN_ROUTE, BookingStatus.EN_ROUTE) is False
    assert ensure_transition(BookingStatus.PENDING, None) is False


def test_booking_chain_advances_one_step_at_a_time():
    """Test that each booking status only reaches the next one (or cancelled)."""
    for current, following in zip(BOOKING_CHAIN, BOOKING_CHAIN[1:]):
        assert allowed_transitions(current) == {following, BookingStatus.CANCELLED}
        assert ensure_transition(current, following) is True


def test_booking_cannot_skip_steps():
    """Test that a booking cannot jump from accepted to arrived."""
    with pytest.raises(IllegalTransitionException):
        ensure_transition(BookingStatus.ACCEPTED, BookingStatus.ARRIVED)

    with pytest.raises(IllegalTransitionException):
        ensure_transition(BookingStatus.ARRIVED, BookingStatus.PENDING)


def test_cancelled_reachable_from_every_open_booking_state():
    """Test that every non-terminal booking state can be cancelled."""
    for status, targets in BOOKING_TRANSITIONS.items():
        if targets:
            assert BookingStatus.CANCELLED in targets
        else:
            assert status in (BookingStatus.COMPLETED, BookingStatus.CANCELLED)


def test_completed_booking_cannot_be_cancelled():
    """Test that completion is final."""
    with pytest.raises(IllegalTransitionException) as exc_info:
        ensure_transition(BookingStatus.COMPLETED, BookingStatus.CANCELLED)

    assert "transport booking" in exc_info.value.message


def test_edit_of_closed_record_names_its_state():
    """Test the message for a plain edit or repeat of a terminal status."""
    with pytest.raises(IllegalTransitionException) as exc_info:
        ensure_transition(ConsultationStatus.COMPLETED, None)

    assert exc_info.value.target is None
    assert exc_info.value.message == "Consultation is completed and can no longer be changed"

    with pytest.raises(IllegalTransitionException) as exc_info:
        ensure_transition(BookingStatus.CANCELLED, BookingStatus.CANCELLED)

    assert exc_info.value.message == "Transport booking is cancelled and can no longer be changed"
