from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional

from braidr.api.deps import get_booking_service
from braidr.schemas.booking import TimeSlot
from braidr.services.booking_service import BookingService

router = APIRouter()

@router.get("/{stylist_id}/slots", response_model=List[TimeSlot])
async def get_stylist_time_slots(
    stylist_id: str,
    date: str = Query(..., description="Calendar date, YYYY-MM-DD"),
    duration: Optional[int] = Query(None, gt=0, description="Booking length in minutes"),
    serviceId: Optional[str] = Query(None, description="Size the booking from this service"),
    booking_service: BookingService = Depends(get_booking_service),
):
    """
    Get a stylist's candidate start times for a date

    Every candidate within working hours is returned; taken ones have
    `available: false`.
    """
    if duration is None and serviceId is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either duration or serviceId is required"
        )

    return await booking_service.get_available_time_slots(
        stylist_id,
        date,
        duration_minutes=duration,
        service_id=serviceId,
    )
