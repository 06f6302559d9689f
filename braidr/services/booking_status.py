"""
Booking status state machine.

Transitions are keyed by the actor's role on the booking. Completed and
cancelled are terminal.
"""

from typing import Dict, FrozenSet

from braidr.core.errors import ForbiddenError, InvalidTransitionError
from braidr.schemas.actor import Actor, ActorRole
from braidr.schemas.booking import Booking, BookingStatus

# Statuses that occupy the stylist's time
BLOCKING_STATUSES: FrozenSet[BookingStatus] = frozenset({
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
    BookingStatus.IN_PROGRESS,
})

RESCHEDULABLE_STATUSES: FrozenSet[BookingStatus] = frozenset({
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
})

TRANSITIONS: Dict[BookingStatus, Dict[ActorRole, FrozenSet[BookingStatus]]] = {
    BookingStatus.PENDING: {
        ActorRole.CUSTOMER: frozenset({BookingStatus.CANCELLED}),
        ActorRole.STYLIST: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    },
    BookingStatus.CONFIRMED: {
        ActorRole.CUSTOMER: frozenset({BookingStatus.CANCELLED}),
        ActorRole.STYLIST: frozenset({BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED}),
    },
    BookingStatus.IN_PROGRESS: {
        ActorRole.CUSTOMER: frozenset(),
        ActorRole.STYLIST: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    },
    BookingStatus.COMPLETED: {
        ActorRole.CUSTOMER: frozenset(),
        ActorRole.STYLIST: frozenset(),
    },
    BookingStatus.CANCELLED: {
        ActorRole.CUSTOMER: frozenset(),
        ActorRole.STYLIST: frozenset(),
    },
}


def allowed_transitions(current: BookingStatus, role: ActorRole) -> FrozenSet[BookingStatus]:
    return TRANSITIONS.get(current, {}).get(role, frozenset())


def resolve_actor_role(booking: Booking, actor: Actor) -> ActorRole:
    """
    Confirm the actor is a party to the booking in the role they claim.

    Raises:
        ForbiddenError: if the actor is neither the booking's customer nor its stylist
    """
    if actor.role == ActorRole.CUSTOMER and booking.customerId == actor.id:
        return ActorRole.CUSTOMER
    if actor.role == ActorRole.STYLIST and booking.stylistId == actor.id:
        return ActorRole.STYLIST
    raise ForbiddenError("You are not a party to this booking")


def ensure_transition(booking: Booking, new_status: BookingStatus, role: ActorRole) -> None:
    if new_status not in allowed_transitions(booking.status, role):
        raise InvalidTransitionError(
            f"Invalid status transition from {booking.status.value} to {new_status.value}"
        )


def ensure_reschedulable(booking: Booking) -> None:
    if booking.status not in RESCHEDULABLE_STATUSES:
        raise InvalidTransitionError(
            f"A {booking.status.value} booking cannot be rescheduled"
        )
