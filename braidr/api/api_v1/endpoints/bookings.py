from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from braidr.api.deps import get_booking_service
from braidr.core.auth import get_current_actor, require_role
from braidr.schemas.actor import Actor, ActorRole
from braidr.schemas.booking import (
    Booking, BookingCreate, BookingPage, BookingReschedule, BookingStatus,
    BookingStatusUpdate, StylistBookingStats
)
from braidr.services.booking_service import BookingService

router = APIRouter()

@router.post("/", response_model=Booking, status_code=status.HTTP_201_CREATED)
async def create_new_booking(
    booking_in: BookingCreate,
    current_user: Actor = Depends(require_role(ActorRole.CUSTOMER)),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Book a stylist's service as a customer

    The booking starts out `pending`. Answers 409 when the requested time
    overlaps another booking.
    """
    return await booking_service.create_booking(
        customer_id=current_user.id,
        stylist_id=booking_in.stylistId,
        service_id=booking_in.serviceId,
        date=booking_in.date,
        start_time=booking_in.startTime,
        notes=booking_in.notes,
    )

@router.get("/customer/me", response_model=BookingPage)
async def get_my_customer_bookings(
    status: Optional[BookingStatus] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: Actor = Depends(require_role(ActorRole.CUSTOMER)),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Get bookings for the current user as a customer, newest first
    """
    return await booking_service.list_customer_bookings(
        current_user.id, status=status, page=page, limit=limit
    )

@router.get("/stylist/me", response_model=BookingPage)
async def get_my_stylist_bookings(
    status: Optional[BookingStatus] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: Actor = Depends(require_role(ActorRole.STYLIST)),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Get bookings for the current user as a stylist, soonest first
    """
    return await booking_service.list_stylist_bookings(
        current_user.id, status=status, page=page, limit=limit
    )

@router.get("/stylist/me/stats", response_model=StylistBookingStats)
async def get_my_stylist_stats(
    current_user: Actor = Depends(require_role(ActorRole.STYLIST)),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Booking counts, completed revenue and completion rate for the current stylist
    """
    return await booking_service.get_stylist_stats(current_user.id)

@router.get("/{booking_id}", response_model=Booking)
async def get_booking(
    booking_id: str,
    current_user: Actor = Depends(get_current_actor),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Get booking details (accessible to both customer and stylist)
    """
    return await booking_service.get_booking(booking_id, current_user)

@router.patch("/{booking_id}/reschedule", response_model=Booking)
async def reschedule_booking(
    booking_id: str,
    reschedule_data: BookingReschedule,
    current_user: Actor = Depends(get_current_actor),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Reschedule a pending or confirmed booking

    - **date**: New date for the booking (YYYY-MM-DD)
    - **startTime**: New start time (format: HH:MM)
    """
    return await booking_service.reschedule_booking(
        booking_id,
        reschedule_data.date,
        reschedule_data.startTime,
        current_user,
    )

@router.patch("/{booking_id}/status", response_model=Booking)
async def update_booking_status(
    booking_id: str,
    status_update: BookingStatusUpdate,
    current_user: Actor = Depends(get_current_actor),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Move a booking through its lifecycle

    Customers may only cancel. Stylists confirm, start, complete or cancel.
    - **reason**: Optional cancellation reason
    """
    return await booking_service.transition_status(
        booking_id,
        status_update.status,
        current_user,
        reason=status_update.reason,
    )
