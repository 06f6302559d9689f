from pydantic import AfterValidator, BaseModel, Field, computed_field
from typing import Annotated, Optional, List
from datetime import datetime
from enum import Enum

from braidr.utils.time_utils import format_time, parse_date, parse_time

class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

def _check_date(value: str) -> str:
    parse_date(value)
    return value

def _check_time(value: str) -> str:
    parse_time(value)
    return value

IsoDate = Annotated[str, AfterValidator(_check_date)]  # YYYY-MM-DD
ClockTime = Annotated[str, AfterValidator(_check_time)]  # HH:MM

# Body dates and times are parsed by BookingService, which raises ValidationError
class BookingCreate(BaseModel):
    stylistId: str
    serviceId: str
    date: str  # YYYY-MM-DD
    startTime: str  # HH:MM
    notes: Optional[str] = None

class BookingReschedule(BaseModel):
    date: str  # YYYY-MM-DD
    startTime: str  # HH:MM

class BookingStatusUpdate(BaseModel):
    status: BookingStatus
    reason: Optional[str] = None

class ProposedBooking(BaseModel):
    """A candidate interval checked against a stylist's existing bookings."""
    stylistId: str
    date: IsoDate
    startTime: ClockTime
    durationMinutes: int = Field(..., gt=0)

class Booking(BaseModel):
    id: str
    stylistId: str
    customerId: str
    serviceId: str
    date: IsoDate
    startTime: ClockTime
    durationMinutes: int = Field(..., gt=0)
    totalPrice: float = 0
    status: BookingStatus = BookingStatus.PENDING
    notes: Optional[str] = None
    cancellationReason: Optional[str] = None
    createdAt: datetime
    updatedAt: Optional[datetime] = None

    @computed_field
    @property
    def endTime(self) -> str:
        return format_time(parse_time(self.startTime) + self.durationMinutes)

class BookingPage(BaseModel):
    items: List[Booking]
    total: int
    page: int
    limit: int
    totalPages: int

class StylistBookingStats(BaseModel):
    total: int = 0
    pending: int = 0
    confirmed: int = 0
    inProgress: int = 0
    completed: int = 0
    cancelled: int = 0
    totalRevenue: float = 0
    completionRate: int = 0  # percent of all bookings that completed

class TimeSlot(BaseModel):
    startTime: str
    available: bool
