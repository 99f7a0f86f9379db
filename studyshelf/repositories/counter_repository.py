"""
Counter repository: named integer sequences with atomic updates.
"""
from typing import Optional
import logging

from pymongo import ReturnDocument

logger = logging.getLogger(__name__)


class CounterRepository:
    """Repository for sequence counters stored as ``{_id: name, value: int}``."""

    def __init__(self, db):
        self.db = db
        self.settings = None

    def set_settings(self, settings):
        self.settings = settings

    @property
    def collection(self):
        return self.db[self.settings.counters_collection]

    async def get(self, name: str) -> Optional[int]:
        """Current value of a counter, None if it does not exist yet."""
        doc = await self.collection.find_one({"_id": name})
        return doc["value"] if doc else None

    async def increment(self, name: str, delta: int = 1) -> int:
        """Atomically add delta to a counter and return the new value."""
        doc = await self.collection.find_one_and_update(
            {"_id": name},
            {"$inc": {"value": delta}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return doc["value"]

    async def raise_to(self, name: str, value: int) -> int:
        """Atomically lift a counter to at least value; never lowers it."""
        doc = await self.collection.find_one_and_update(
            {"_id": name},
            {"$max": {"value": value}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        if doc["value"] == value:
            logger.info(f"Counter {name} synced to {value}")
        return doc["value"]
