from fastapi import APIRouter
from braidr.api.api_v1.endpoints import availability, bookings

router = APIRouter()

# Include all routers
router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
router.include_router(availability.router, prefix="/availability", tags=["Availability"])
