"""
Shared fixtures.

Collaborators are replaced with in-memory stores so the suite runs without
MongoDB. The booking store yields to the event loop on every call, like a
real database round trip, so concurrent requests can interleave.
"""
import asyncio
import itertools
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from braidr.api.deps import get_booking_service
from braidr.core.auth import create_access_token
from braidr.core.clock import FixedClock
from braidr.main import app
from braidr.schemas.booking import Booking, BookingStatus
from braidr.schemas.service import ServiceOffering
from braidr.schemas.stylist import StylistProfile
from braidr.services.booking_service import BookingService

# Monday 2 March 2026, 08:00
NOW = datetime(2026, 3, 2, 8, 0)
MONDAY = "2026-03-09"
TUESDAY = "2026-03-10"
SUNDAY = "2026-03-08"

STYLIST_ID = "stylist-1"
OFF_STYLIST_ID = "stylist-off"
OTHER_STYLIST_ID = "stylist-2"
CUSTOMER_ID = "customer-1"
OTHER_CUSTOMER_ID = "customer-2"

WEEKDAY_HOURS = {"isOpen": True, "startTime": "09:00", "endTime": "17:00"}


class InMemoryBookingStore:
    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self._ids = itertools.count(1)

    async def get(self, booking_id: str) -> Optional[Booking]:
        await asyncio.sleep(0)
        document = self.documents.get(booking_id)
        return Booking(**document) if document else None

    async def insert(self, booking_data: Dict[str, Any]) -> Booking:
        await asyncio.sleep(0)
        booking_id = f"booking-{next(self._ids)}"
        self.documents[booking_id] = dict(booking_data, id=booking_id)
        return Booking(**self.documents[booking_id])

    async def update(self, booking_id: str, fields: Dict[str, Any]) -> Optional[Booking]:
        await asyncio.sleep(0)
        if booking_id not in self.documents:
            return None
        self.documents[booking_id].update(fields)
        return Booking(**self.documents[booking_id])

    async def list_for_stylist_date(
        self, stylist_id: str, date: str, statuses: Iterable[BookingStatus]
    ) -> List[Booking]:
        await asyncio.sleep(0)
        wanted = {BookingStatus(s).value for s in statuses}
        return [
            Booking(**d) for d in self.documents.values()
            if d["stylistId"] == stylist_id and d["date"] == date
            and BookingStatus(d["status"]).value in wanted
        ]

    async def list_for_customer(self, customer_id, status, skip, limit):
        return self._page("customerId", customer_id, status, skip, limit, newest_first=True)

    async def list_for_stylist(self, stylist_id, status, skip, limit):
        return self._page("stylistId", stylist_id, status, skip, limit, newest_first=False)

    async def list_all_for_stylist(self, stylist_id: str) -> List[Booking]:
        return [Booking(**d) for d in self.documents.values() if d["stylistId"] == stylist_id]

    def _page(self, field, value, status, skip, limit, newest_first):
        matches = [
            Booking(**d) for d in self.documents.values()
            if d[field] == value and (status is None or BookingStatus(d["status"]) == status)
        ]
        matches.sort(key=lambda b: (b.date, b.startTime), reverse=newest_first)
        return matches[skip:skip + limit], len(matches)

    def add(self, **fields) -> Booking:
        """Seed a booking directly, bypassing the service checks."""
        booking_id = f"booking-{next(self._ids)}"
        document = {
            "id": booking_id,
            "stylistId": STYLIST_ID,
            "customerId": CUSTOMER_ID,
            "serviceId": "svc-cornrows",
            "date": MONDAY,
            "startTime": "10:00",
            "durationMinutes": 60,
            "totalPrice": 80.0,
            "status": BookingStatus.PENDING.value,
            "createdAt": NOW,
        }
        document.update(fields)
        if isinstance(document["status"], BookingStatus):
            document["status"] = document["status"].value
        self.documents[booking_id] = document
        return Booking(**document)


class InMemoryStylistDirectory:
    def __init__(self, stylists: Iterable[StylistProfile]):
        self.stylists = {s.id: s for s in stylists}

    async def get_stylist(self, stylist_id: str) -> Optional[StylistProfile]:
        return self.stylists.get(stylist_id)


class InMemoryServiceCatalog:
    def __init__(self, services: Iterable[ServiceOffering]):
        self.services = {s.id: s for s in services}

    async def get_service(self, service_id: str) -> Optional[ServiceOffering]:
        return self.services.get(service_id)


def business_hours(**overrides):
    hours = {day: dict(WEEKDAY_HOURS) for day in ("monday", "tuesday", "wednesday", "thursday", "friday")}
    hours["saturday"] = {"isOpen": True, "startTime": "10:00", "endTime": "14:00"}
    hours["sunday"] = {"isOpen": False}
    hours.update(overrides)
    return hours


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def store():
    return InMemoryBookingStore()


@pytest.fixture
def stylists():
    return InMemoryStylistDirectory([
        StylistProfile(id=STYLIST_ID, isAvailable=True, businessHours=business_hours()),
        StylistProfile(id=OTHER_STYLIST_ID, isAvailable=True, businessHours=business_hours()),
        StylistProfile(id=OFF_STYLIST_ID, isAvailable=False, businessHours=business_hours()),
    ])


@pytest.fixture
def services():
    return InMemoryServiceCatalog([
        ServiceOffering(id="svc-knotless", stylistId=STYLIST_ID, name="Knotless braids",
                        durationMinutes=120, price=180),
        ServiceOffering(id="svc-cornrows", stylistId=STYLIST_ID, name="Cornrows",
                        durationMinutes=60, price=80),
        ServiceOffering(id="svc-retired", stylistId=STYLIST_ID, name="Crochet",
                        durationMinutes=90, price=100, isActive=False),
        ServiceOffering(id="svc-off", stylistId=OFF_STYLIST_ID, name="Locs retwist",
                        durationMinutes=60, price=70),
        ServiceOffering(id="svc-other", stylistId=OTHER_STYLIST_ID, name="Twists",
                        durationMinutes=60, price=90),
    ])


@pytest.fixture
def booking_service(store, stylists, services, clock):
    return BookingService(store, stylists, services, clock=clock)


@pytest.fixture
async def client(booking_service):
    app.dependency_overrides[get_booking_service] = lambda: booking_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(user_id: str, role: str) -> Dict[str, str]:
    token = create_access_token({"sub": user_id, "role": role}, timedelta(minutes=5))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers():
    return auth_headers(CUSTOMER_ID, "customer")


@pytest.fixture
def stylist_headers():
    return auth_headers(STYLIST_ID, "stylist")
