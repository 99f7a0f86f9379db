"""
Category controller with business logic.
"""
from typing import List
import logging

from pymongo.errors import DuplicateKeyError

from studyshelf.repositories import CategoryRepository
from studyshelf.schemas import Category, CategoryCreate, CategoryResponse
from studyshelf.utils.exceptions import CategoryNotFoundError, DuplicateNameError, InvalidInputError

logger = logging.getLogger(__name__)


class CategoryController:
    """Controller for category operations."""

    def __init__(self, category_repo: CategoryRepository):
        self.category_repo = category_repo

    @staticmethod
    def _to_response(category: Category) -> CategoryResponse:
        return CategoryResponse(
            id=category.category_id,
            name=category.name,
            created_at=category.created_at
        )

    async def create_category(self, request: CategoryCreate) -> CategoryResponse:
        """Create a new category. Names must be unique (exact match)."""
        name = (request.name or "").strip()
        if not name:
            raise InvalidInputError("Category name is required")

        if await self.category_repo.get_by_name(name):
            raise DuplicateNameError(name)

        try:
            category = await self.category_repo.create(name=name)
        except DuplicateKeyError:
            # Lost a race with a concurrent create of the same name
            raise DuplicateNameError(name)

        return self._to_response(category)

    async def get_category(self, category_id: str) -> CategoryResponse:
        """Get a category by ID."""
        category = await self.category_repo.get_by_id(category_id)
        if not category:
            raise CategoryNotFoundError(category_id)
        return self._to_response(category)

    async def list_categories(self) -> List[CategoryResponse]:
        """Get all categories, sorted by name."""
        categories = await self.category_repo.get_all()
        return [self._to_response(cat) for cat in categories]
