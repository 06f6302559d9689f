from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from braidr.core.clock import SystemClock
from braidr.core.config import settings
from braidr.db.bookings import MongoBookingStore
from braidr.db.mongodb import get_database
from braidr.db.services import MongoServiceCatalog
from braidr.db.stylists import MongoStylistDirectory
from braidr.services.booking_service import BookingService
from braidr.services.locks import ScheduleLocks

# Shared by every request in this process
schedule_locks = ScheduleLocks()

async def get_booking_service(
    database: AsyncIOMotorDatabase = Depends(get_database),
) -> BookingService:
    return BookingService(
        bookings=MongoBookingStore(database),
        stylists=MongoStylistDirectory(database),
        services=MongoServiceCatalog(database),
        clock=SystemClock(),
        locks=schedule_locks,
        granularity=settings.SLOT_GRANULARITY_MINUTES,
    )
