import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Tuple

logger = logging.getLogger(__name__)

class ScheduleLocks:
    """
    One asyncio lock per (stylist, date).

    Booking creation and rescheduling hold the lock from the conflict read
    until the write lands, so two requests for the same stylist and day are
    checked one after the other. Entries are dropped once nobody holds or
    waits on them.
    """

    def __init__(self):
        self._locks: Dict[Tuple[str, str], asyncio.Lock] = {}
        self._users: Dict[Tuple[str, str], int] = {}

    @asynccontextmanager
    async def hold(self, stylist_id: str, date: str) -> AsyncIterator[None]:
        key = (stylist_id, date)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            if lock.locked():
                logger.debug(f"Waiting for schedule lock {stylist_id}/{date}")
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)
