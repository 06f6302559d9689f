from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from braidr.schemas.booking import Booking, BookingStatus

class BookingStore(Protocol):
    """Durable record of appointments."""

    async def get(self, booking_id: str) -> Optional[Booking]: ...

    async def insert(self, booking_data: Dict[str, Any]) -> Booking: ...

    async def update(self, booking_id: str, fields: Dict[str, Any]) -> Optional[Booking]: ...

    async def list_for_stylist_date(
        self, stylist_id: str, date: str, statuses: Iterable[BookingStatus]
    ) -> List[Booking]: ...

    async def list_for_customer(
        self, customer_id: str, status: Optional[BookingStatus], skip: int, limit: int
    ) -> Tuple[List[Booking], int]: ...

    async def list_for_stylist(
        self, stylist_id: str, status: Optional[BookingStatus], skip: int, limit: int
    ) -> Tuple[List[Booking], int]: ...

    async def list_all_for_stylist(self, stylist_id: str) -> List[Booking]: ...

def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a string id; None when it is not a valid ObjectId."""
    # ObjectId(None) mints a fresh id instead of failing
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)

def booking_from_document(document: Dict[str, Any]) -> Booking:
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    return Booking(**data)

class MongoBookingStore:
    """Booking Store backed by the ``bookings`` collection."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database.bookings

    async def get(self, booking_id: str) -> Optional[Booking]:
        object_id = to_object_id(booking_id)
        if object_id is None:
            return None
        document = await self.collection.find_one({"_id": object_id})
        return booking_from_document(document) if document else None

    async def insert(self, booking_data: Dict[str, Any]) -> Booking:
        result = await self.collection.insert_one(dict(booking_data))
        document = await self.collection.find_one({"_id": result.inserted_id})
        return booking_from_document(document)

    async def update(self, booking_id: str, fields: Dict[str, Any]) -> Optional[Booking]:
        object_id = to_object_id(booking_id)
        if object_id is None:
            return None
        await self.collection.update_one({"_id": object_id}, {"$set": fields})
        return await self.get(booking_id)

    async def list_for_stylist_date(
        self, stylist_id: str, date: str, statuses: Iterable[BookingStatus]
    ) -> List[Booking]:
        query = {
            "stylistId": stylist_id,
            "date": date,
            "status": {"$in": [BookingStatus(s).value for s in statuses]},
        }
        cursor = self.collection.find(query).sort("startTime", ASCENDING)
        documents = await cursor.to_list(length=None)
        return [booking_from_document(d) for d in documents]

    async def list_for_customer(
        self, customer_id: str, status: Optional[BookingStatus], skip: int, limit: int
    ) -> Tuple[List[Booking], int]:
        query = {"customerId": customer_id}
        if status:
            query["status"] = status.value
        return await self._page(query, DESCENDING, skip, limit)

    async def list_for_stylist(
        self, stylist_id: str, status: Optional[BookingStatus], skip: int, limit: int
    ) -> Tuple[List[Booking], int]:
        query = {"stylistId": stylist_id}
        if status:
            query["status"] = status.value
        return await self._page(query, ASCENDING, skip, limit)

    async def list_all_for_stylist(self, stylist_id: str) -> List[Booking]:
        documents = await self.collection.find({"stylistId": stylist_id}).to_list(length=None)
        return [booking_from_document(d) for d in documents]

    async def _page(
        self, query: Dict[str, Any], direction: int, skip: int, limit: int
    ) -> Tuple[List[Booking], int]:
        total = await self.collection.count_documents(query)
        cursor = (
            self.collection.find(query)
            .sort([("date", direction), ("startTime", direction)])
            .skip(skip)
            .limit(limit)
        )
        documents = await cursor.to_list(length=limit)
        return [booking_from_document(d) for d in documents], total
