import logging
import math
from typing import List, Optional

from braidr.core.clock import Clock, SystemClock
from braidr.core.errors import NotAvailableError, NotFoundError, ValidationError
from braidr.db.bookings import BookingStore
from braidr.db.services import ServiceCatalog
from braidr.db.stylists import StylistDirectory
from braidr.schemas.actor import Actor
from braidr.schemas.booking import (
    Booking, BookingPage, BookingStatus, ProposedBooking, StylistBookingStats, TimeSlot
)
from braidr.schemas.service import ServiceOffering
from braidr.services.availability import (
    SLOT_GRANULARITY_MINUTES, ensure_no_conflict, generate_time_slots
)
from braidr.services.booking_status import (
    BLOCKING_STATUSES, ensure_reschedulable, ensure_transition, resolve_actor_role
)
from braidr.services.locks import ScheduleLocks
from braidr.utils.time_utils import combine, parse_date, parse_time

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

class BookingService:
    """
    Booking operations for the Braidr API.

    Every operation validates before it writes, so a failed call leaves the
    Booking Store untouched. Creation and rescheduling hold the schedule
    lock for the target stylist and day across the conflict check and the
    write.
    """

    def __init__(
        self,
        bookings: BookingStore,
        stylists: StylistDirectory,
        services: ServiceCatalog,
        clock: Optional[Clock] = None,
        locks: Optional[ScheduleLocks] = None,
        granularity: int = SLOT_GRANULARITY_MINUTES,
    ):
        self.bookings = bookings
        self.stylists = stylists
        self.services = services
        self.clock = clock or SystemClock()
        self.locks = locks or ScheduleLocks()
        self.granularity = granularity

    async def get_available_time_slots(
        self,
        stylist_id: str,
        date: str,
        duration_minutes: Optional[int] = None,
        service_id: Optional[str] = None,
    ) -> List[TimeSlot]:
        """
        Candidate start times for a stylist on a date.

        The booking length comes from ``duration_minutes`` or, when a
        ``service_id`` is given, from the service's duration.
        """
        day = parse_date(date)

        if service_id is not None:
            service = await self._get_bookable_service(service_id, stylist_id)
            duration_minutes = service.durationMinutes
        if duration_minutes is None or duration_minutes <= 0:
            raise ValidationError("A positive service duration is required")

        stylist = await self.stylists.get_stylist(stylist_id)
        if not stylist:
            raise NotFoundError("Stylist not found")

        existing = await self.bookings.list_for_stylist_date(stylist_id, date, BLOCKING_STATUSES)
        return list(generate_time_slots(
            stylist.businessHours.for_day(day),
            existing,
            duration_minutes,
            self.granularity,
        ))

    async def validate_no_conflict(
        self,
        stylist_id: str,
        date: str,
        start_time: str,
        duration_minutes: int,
        exclude_booking_id: Optional[str] = None,
    ) -> None:
        """
        Check a proposed interval against the stylist's blocking bookings.

        Raises:
            ConflictError: if the interval overlaps any of them
        """
        parse_date(date)
        parse_time(start_time)
        if duration_minutes <= 0:
            raise ValidationError("Booking duration must be a positive number of minutes")

        proposed = ProposedBooking(
            stylistId=stylist_id,
            date=date,
            startTime=start_time,
            durationMinutes=duration_minutes,
        )
        existing = await self.bookings.list_for_stylist_date(stylist_id, date, BLOCKING_STATUSES)
        ensure_no_conflict(proposed, existing, exclude_booking_id)

    async def create_booking(
        self,
        customer_id: str,
        stylist_id: str,
        service_id: str,
        date: str,
        start_time: str,
        notes: Optional[str] = None,
    ) -> Booking:
        """
        Create a pending booking.

        Raises:
            ValidationError: the start is not in the future
            NotFoundError: unknown stylist, or missing/inactive service
            NotAvailableError: the stylist is not taking bookings
            ConflictError: the interval overlaps an existing booking
        """
        self._ensure_future(date, start_time)

        stylist = await self.stylists.get_stylist(stylist_id)
        if not stylist:
            raise NotFoundError("Stylist not found")
        if not stylist.isAvailable:
            raise NotAvailableError("Stylist is not currently available")

        service = await self._get_bookable_service(service_id, stylist_id)

        async with self.locks.hold(stylist_id, date):
            await self.validate_no_conflict(stylist_id, date, start_time, service.durationMinutes)

            booking_data = {
                "stylistId": stylist_id,
                "customerId": customer_id,
                "serviceId": service_id,
                "date": date,
                "startTime": start_time,
                "durationMinutes": service.durationMinutes,
                "totalPrice": service.price,
                "status": BookingStatus.PENDING.value,
                "notes": notes,
                "createdAt": self.clock.now(),
            }
            booking = await self.bookings.insert(booking_data)

        logger.info(
            f"Booking {booking.id} created for stylist {stylist_id} on {date} at {start_time}"
        )
        return booking

    async def reschedule_booking(
        self,
        booking_id: str,
        new_date: str,
        new_start_time: str,
        actor: Actor,
    ) -> Booking:
        """
        Move a pending or confirmed booking to a new date and time.

        The booking keeps its status and duration, and is excluded from its
        own conflict check.
        """
        booking = await self._get_existing(booking_id)
        resolve_actor_role(booking, actor)
        ensure_reschedulable(booking)
        self._ensure_future(new_date, new_start_time)

        async with self.locks.hold(booking.stylistId, new_date):
            await self.validate_no_conflict(
                booking.stylistId,
                new_date,
                new_start_time,
                booking.durationMinutes,
                exclude_booking_id=booking.id,
            )
            updated = await self.bookings.update(booking.id, {
                "date": new_date,
                "startTime": new_start_time,
                "updatedAt": self.clock.now(),
            })

        if updated is None:
            raise NotFoundError("Booking not found")

        logger.info(f"Booking {booking.id} rescheduled to {new_date} {new_start_time}")
        return updated

    async def transition_status(
        self,
        booking_id: str,
        new_status: BookingStatus,
        actor: Actor,
        reason: Optional[str] = None,
    ) -> Booking:
        booking = await self._get_existing(booking_id)
        role = resolve_actor_role(booking, actor)
        ensure_transition(booking, new_status, role)

        update_data = {
            "status": new_status.value,
            "updatedAt": self.clock.now(),
        }
        if new_status == BookingStatus.CANCELLED and reason:
            update_data["cancellationReason"] = reason

        updated = await self.bookings.update(booking.id, update_data)
        if updated is None:
            raise NotFoundError("Booking not found")

        logger.info(
            f"Booking {booking.id} moved from {booking.status.value} to {new_status.value} "
            f"by {role.value}"
        )
        return updated

    async def get_booking(self, booking_id: str, actor: Actor) -> Booking:
        booking = await self._get_existing(booking_id)
        resolve_actor_role(booking, actor)
        return booking

    async def list_customer_bookings(
        self,
        customer_id: str,
        status: Optional[BookingStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> BookingPage:
        """Customer's bookings, newest first."""
        page, limit = sanitize_pagination(page, limit)
        items, total = await self.bookings.list_for_customer(
            customer_id, status, (page - 1) * limit, limit
        )
        return _page(items, total, page, limit)

    async def list_stylist_bookings(
        self,
        stylist_id: str,
        status: Optional[BookingStatus] = None,
        page: int = 1,
        limit: int = 10,
    ) -> BookingPage:
        """Stylist's bookings, soonest first."""
        page, limit = sanitize_pagination(page, limit)
        items, total = await self.bookings.list_for_stylist(
            stylist_id, status, (page - 1) * limit, limit
        )
        return _page(items, total, page, limit)

    async def get_stylist_stats(self, stylist_id: str) -> StylistBookingStats:
        bookings = await self.bookings.list_all_for_stylist(stylist_id)

        def count(status: BookingStatus) -> int:
            return sum(1 for b in bookings if b.status == status)

        total = len(bookings)
        completed = count(BookingStatus.COMPLETED)
        revenue = sum(b.totalPrice for b in bookings if b.status == BookingStatus.COMPLETED)

        return StylistBookingStats(
            total=total,
            pending=count(BookingStatus.PENDING),
            confirmed=count(BookingStatus.CONFIRMED),
            inProgress=count(BookingStatus.IN_PROGRESS),
            completed=completed,
            cancelled=count(BookingStatus.CANCELLED),
            totalRevenue=revenue,
            completionRate=round(completed / total * 100) if total > 0 else 0,
        )

    async def _get_existing(self, booking_id: str) -> Booking:
        booking = await self.bookings.get(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    async def _get_bookable_service(self, service_id: str, stylist_id: str) -> ServiceOffering:
        service = await self.services.get_service(service_id)
        if not service or not service.isActive or service.stylistId != stylist_id:
            raise NotFoundError("Service not found or not available")
        return service

    def _ensure_future(self, date: str, start_time: str) -> None:
        if combine(date, start_time) <= self.clock.now():
            raise ValidationError("Booking must be scheduled for a future date and time")

def sanitize_pagination(page: int, limit: int):
    """Clamp page to >= 1 and limit to 1..MAX_PAGE_SIZE."""
    page = max(1, int(page or 1))
    limit = min(MAX_PAGE_SIZE, max(1, int(limit or 10)))
    return page, limit

def _page(items: List[Booking], total: int, page: int, limit: int) -> BookingPage:
    return BookingPage(
        items=items,
        total=total,
        page=page,
        limit=limit,
        totalPages=math.ceil(total / limit) if total else 0,
    )
