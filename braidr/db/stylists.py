from typing import Any, Dict, Optional, Protocol
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError as PydanticValidationError

from braidr.schemas.stylist import WEEKDAYS, BusinessHours, DaySchedule, StylistProfile

logger = logging.getLogger(__name__)

class StylistDirectory(Protocol):
    async def get_stylist(self, stylist_id: str) -> Optional[StylistProfile]: ...

def business_hours_from_document(stylist_id: str, raw: Optional[Dict[str, Any]]) -> BusinessHours:
    """
    Build business hours day by day. A day whose stored hours do not validate
    (open without times, malformed "HH:MM") is read as closed.
    """
    raw = raw or {}
    days = {}
    for day in WEEKDAYS:
        if day not in raw:
            continue
        try:
            days[day] = DaySchedule.model_validate(raw[day] or {})
        except PydanticValidationError as e:
            logger.warning(f"Stylist {stylist_id} has invalid {day} hours, treating as closed: {e}")
            days[day] = DaySchedule()
    return BusinessHours(**days)

def stylist_from_document(document: Dict[str, Any]) -> StylistProfile:
    return StylistProfile(
        id=document["userId"],
        isAvailable=document.get("isAvailable", True),
        businessHours=business_hours_from_document(document["userId"], document.get("businessHours")),
    )

class MongoStylistDirectory:
    """
    Read-only view of the ``stylists`` collection.

    Stylists are addressed by their user id, the same id bookings carry in
    ``stylistId``.
    """

    def __init__(self, database: AsyncIOMotorDatabase):
        self.collection = database.stylists

    async def get_stylist(self, stylist_id: str) -> Optional[StylistProfile]:
        document = await self.collection.find_one(
            {"userId": stylist_id},
            {"userId": 1, "isAvailable": 1, "businessHours": 1},
        )
        return stylist_from_document(document) if document else None
