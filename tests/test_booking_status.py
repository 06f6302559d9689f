"""
Tests for the booking status state machine.

Run with: pytest tests/test_booking_status.py -v
"""

import itertools

import pytest

from braidr.core.errors import ForbiddenError, InvalidTransitionError
from braidr.schemas.actor import Actor, ActorRole
from braidr.schemas.booking import BookingStatus
from braidr.services.booking_status import (
    allowed_transitions,
    ensure_reschedulable,
    ensure_transition,
    resolve_actor_role,
)

from conftest import CUSTOMER_ID, OTHER_CUSTOMER_ID, STYLIST_ID, InMemoryBookingStore

S = BookingStatus
CUSTOMER = ActorRole.CUSTOMER
STYLIST = ActorRole.STYLIST

PERMITTED = {
    (S.PENDING, CUSTOMER): {S.CANCELLED},
    (S.PENDING, STYLIST): {S.CONFIRMED, S.CANCELLED},
    (S.CONFIRMED, CUSTOMER): {S.CANCELLED},
    (S.CONFIRMED, STYLIST): {S.IN_PROGRESS, S.CANCELLED},
    (S.IN_PROGRESS, STYLIST): {S.COMPLETED, S.CANCELLED},
}


def booking_in(status):
    return InMemoryBookingStore().add(status=status)


@pytest.mark.parametrize(
    "current, role, target",
    list(itertools.product(list(S), list(ActorRole), list(S))),
)
def test_transition_table_is_complete(current, role, target):
    booking = booking_in(current)
    if target in PERMITTED.get((current, role), set()):
        assert ensure_transition(booking, target, role) is None
    else:
        with pytest.raises(InvalidTransitionError):
            ensure_transition(booking, target, role)


@pytest.mark.parametrize("terminal", [S.COMPLETED, S.CANCELLED])
def test_terminal_states_have_no_exits(terminal):
    assert allowed_transitions(terminal, CUSTOMER) == frozenset()
    assert allowed_transitions(terminal, STYLIST) == frozenset()


def test_customer_cannot_start_own_pending_booking():
    with pytest.raises(InvalidTransitionError) as exc_info:
        ensure_transition(booking_in(S.PENDING), S.IN_PROGRESS, CUSTOMER)
    assert "pending" in exc_info.value.message


class TestResolveActorRole:

    def test_customer_party(self):
        booking = booking_in(S.PENDING)
        assert resolve_actor_role(booking, Actor(id=CUSTOMER_ID, role=CUSTOMER)) == CUSTOMER

    def test_stylist_party(self):
        booking = booking_in(S.PENDING)
        assert resolve_actor_role(booking, Actor(id=STYLIST_ID, role=STYLIST)) == STYLIST

    def test_stranger_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            resolve_actor_role(booking_in(S.PENDING), Actor(id=OTHER_CUSTOMER_ID, role=CUSTOMER))

    def test_role_must_match_the_party(self):
        """The stylist's id presented with a customer role is not the customer."""
        with pytest.raises(ForbiddenError):
            resolve_actor_role(booking_in(S.PENDING), Actor(id=STYLIST_ID, role=CUSTOMER))


@pytest.mark.parametrize("status, allowed", [
    (S.PENDING, True),
    (S.CONFIRMED, True),
    (S.IN_PROGRESS, False),
    (S.COMPLETED, False),
    (S.CANCELLED, False),
])
def test_reschedulable_statuses(status, allowed):
    booking = booking_in(status)
    if allowed:
        ensure_reschedulable(booking)
    else:
        with pytest.raises(InvalidTransitionError):
            ensure_reschedulable(booking)
