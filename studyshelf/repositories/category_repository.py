"""
Category repository for database operations.
"""
from typing import Dict, Iterable, List, Optional
import logging
import uuid

from studyshelf.schemas import Category, utcnow_ms

logger = logging.getLogger(__name__)


class CategoryRepository:
    """Repository for category CRUD operations."""

    def __init__(self, db):
        self.db = db
        self.settings = None

    def set_settings(self, settings):
        self.settings = settings

    @property
    def collection(self):
        return self.db[self.settings.categories_collection]

    async def ensure_indexes(self) -> None:
        """Category names are unique (exact, case-sensitive match)."""
        await self.collection.create_index("name", unique=True)

    async def create(self, name: str) -> Category:
        """
        Create a new category.

        Raises:
            pymongo.errors.DuplicateKeyError: the name is already taken.
        """
        category = Category(
            category_id=f"cat_{uuid.uuid4().hex[:12]}",
            name=name,
            created_at=utcnow_ms()
        )

        await self.collection.insert_one({
            "_id": category.category_id,
            **category.model_dump(exclude={"category_id"})
        })

        logger.info(f"Created category: {category.category_id} - {name}")
        return category

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        """Get a category by ID."""
        doc = await self.collection.find_one({"_id": category_id})
        if doc:
            doc["category_id"] = doc.pop("_id")
            return Category(**doc)
        return None

    async def get_by_name(self, name: str) -> Optional[Category]:
        """Get a category by its exact name."""
        doc = await self.collection.find_one({"name": name})
        if doc:
            doc["category_id"] = doc.pop("_id")
            return Category(**doc)
        return None

    async def get_all(self) -> List[Category]:
        """Get all categories sorted by name."""
        cursor = self.collection.find({}, sort=[("name", 1)])
        categories = []
        async for doc in cursor:
            doc["category_id"] = doc.pop("_id")
            categories.append(Category(**doc))
        return categories

    async def get_names(self, category_ids: Iterable[str]) -> Dict[str, str]:
        """Map category IDs to names for the given IDs."""
        ids = list(set(category_ids))
        if not ids:
            return {}
        cursor = self.collection.find({"_id": {"$in": ids}})
        names = {}
        async for doc in cursor:
            names[doc["_id"]] = doc["name"]
        return names
