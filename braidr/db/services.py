from typing import Any, Dict, Optional, Protocol
from motor.motor_asyncio import AsyncIOMotorDatabase

from braidr.db.bookings import to_object_id
from braidr.schemas.service import ServiceOffering

class ServiceCatalog(Protocol):
    async def get_service(self, service_id: str) -> Optional[ServiceOffering]: ...

def service_from_document(document: Dict[str, Any]) -> ServiceOffering:
    return ServiceOffering(
        id=str(document["_id"]),
        stylistId=document["stylistId"],
        name=document.get("name", ""),
        durationMinutes=document["durationMinutes"],
        price=document.get("price", 0),
        isActive=document.get("isActive", True),
    )

class MongoServiceCatalog:
    """Read-only view of the ``services`` collection."""

    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database.services

    async def get_service(self, service_id: str) -> Optional[ServiceOffering]:
        object_id = to_object_id(service_id)
        if object_id is None:
            return None
        document = await self.collection.find_one({"_id": object_id})
        return service_from_document(document) if document else None
