"""
Availability Engine

Pure interval arithmetic over a stylist's working hours and existing
bookings. Nothing here touches the database: callers fetch the bookings and
pass them in, so every result is recomputed from scratch.

All intervals are half-open, [start, end) in minutes since midnight. A
booking ending at 12:00 does not block a slot starting at 12:00.
"""

from typing import Iterable, Iterator, List, Optional, Tuple

from braidr.core.errors import ConflictError, ValidationError
from braidr.schemas.booking import Booking, ProposedBooking, TimeSlot
from braidr.schemas.stylist import DaySchedule
from braidr.services.booking_status import BLOCKING_STATUSES
from braidr.utils.time_utils import format_time, parse_time

SLOT_GRANULARITY_MINUTES = 30


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """True if [a_start, a_end) and [b_start, b_end) share at least one minute."""
    return a_start < b_end and b_start < a_end


def booking_interval(booking: Booking) -> Tuple[int, int]:
    start = parse_time(booking.startTime)
    return start, start + booking.durationMinutes


def generate_time_slots(
    working_hours: Optional[DaySchedule],
    existing_bookings: Iterable[Booking],
    duration_minutes: int,
    granularity: int = SLOT_GRANULARITY_MINUTES,
) -> "SlotSequence":
    """
    Offerable start times for a booking of ``duration_minutes``.

    Candidates run from opening time to ``close - duration`` inclusive, one
    every ``granularity`` minutes. Every candidate is emitted; the ones that
    overlap a blocking booking come back with ``available=False`` so clients
    can render them disabled.

    A closed day, malformed hours (close <= open) or a duration longer than
    the open window all give an empty sequence. The result can be iterated
    any number of times; each pass rescans lazily.

    Raises:
        ValidationError: for a non-positive duration or granularity
    """
    if duration_minutes <= 0:
        raise ValidationError("Service duration must be a positive number of minutes")
    if granularity <= 0:
        raise ValidationError("Slot granularity must be a positive number of minutes")

    if working_hours is None or not working_hours.isOpen:
        return SlotSequence.empty()
    if working_hours.startTime is None or working_hours.endTime is None:
        return SlotSequence.empty()

    open_minutes = parse_time(working_hours.startTime)
    close_minutes = parse_time(working_hours.endTime, allow_end_of_day=True)
    busy = [
        booking_interval(booking)
        for booking in existing_bookings
        if booking.status in BLOCKING_STATUSES
    ]

    return SlotSequence(open_minutes, close_minutes, duration_minutes, granularity, busy)


class SlotSequence:
    """Candidate slots for one day. Every iteration starts a fresh scan."""

    def __init__(
        self,
        open_minutes: int,
        close_minutes: int,
        duration_minutes: int,
        granularity: int,
        busy: List[Tuple[int, int]],
    ):
        self.open_minutes = open_minutes
        self.close_minutes = close_minutes
        self.duration_minutes = duration_minutes
        self.granularity = granularity
        self.busy = busy

    @classmethod
    def empty(cls) -> "SlotSequence":
        return cls(0, 0, 1, SLOT_GRANULARITY_MINUTES, [])

    def __iter__(self) -> Iterator[TimeSlot]:
        last_start = self.close_minutes - self.duration_minutes
        for start in range(self.open_minutes, last_start + 1, self.granularity):
            end = start + self.duration_minutes
            conflict = any(
                intervals_overlap(start, end, b_start, b_end) for b_start, b_end in self.busy
            )
            yield TimeSlot(startTime=format_time(start), available=not conflict)


def find_conflicts(
    proposed: ProposedBooking,
    existing_bookings: Iterable[Booking],
    exclude_booking_id: Optional[str] = None,
) -> List[Booking]:
    """Blocking bookings on the same stylist and date that overlap ``proposed``."""
    start = parse_time(proposed.startTime)
    end = start + proposed.durationMinutes

    conflicts = []
    for booking in existing_bookings:
        if exclude_booking_id is not None and booking.id == exclude_booking_id:
            continue
        if booking.stylistId != proposed.stylistId or booking.date != proposed.date:
            continue
        if booking.status not in BLOCKING_STATUSES:
            continue
        if intervals_overlap(start, end, *booking_interval(booking)):
            conflicts.append(booking)
    return conflicts


def ensure_no_conflict(
    proposed: ProposedBooking,
    existing_bookings: Iterable[Booking],
    exclude_booking_id: Optional[str] = None,
) -> None:
    """
    Raises:
        ConflictError: if the proposed interval overlaps any blocking booking
    """
    conflicts = find_conflicts(proposed, existing_bookings, exclude_booking_id)
    if conflicts:
        start = parse_time(proposed.startTime)
        raise ConflictError(
            f"Time slot {proposed.startTime}-{format_time(start + proposed.durationMinutes)} "
            f"on {proposed.date} is not available"
        )
