"""Category service for database operations."""

from contextlib import contextmanager
from typing import List, Optional, Set
from models.category import Category
from services.exceptions import (
    CategoryHasChildrenError,
    CategoryHierarchyDepthExceededError,
    CategoryNotFoundError,
    CircularCategoryReferenceError,
    DuplicateCategoryError,
)
from services.hierarchy import DEFAULT_MAX_DEPTH, CategoryHierarchy
from logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, name, description, parent_id, active"


def _to_category(row) -> Category:
    return Category(
        id=row[0],
        name=row[1],
        description=row[2],
        parent_id=row[3],
        active=bool(row[4]),
    )


@contextmanager
def _logged_hierarchy_errors(action: str):
    """Log guard failures with a severity matching what they mean, then re-raise."""
    try:
        yield
    except CircularCategoryReferenceError as e:
        # A loop can only come from corrupted data
        logger.error(f"{action} failed, category hierarchy is corrupted: {e}")
        raise
    except CategoryHierarchyDepthExceededError as e:
        logger.warning(f"{action} rejected: {e}")
        raise


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager, max_depth: int = DEFAULT_MAX_DEPTH):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
            max_depth: Maximum hierarchy depth (exclusive), see CategoryHierarchy.
        """
        self.db_manager = db_manager
        self.hierarchy = CategoryHierarchy(self, max_depth)

    @property
    def max_depth(self) -> int:
        return self.hierarchy.max_depth

    def find_all(self, include_inactive: bool = True) -> List[Category]:
        """Get all categories from the database.

        Args:
            include_inactive: Whether soft-deleted categories are returned.

        Returns:
            List of Category objects, ordered by name.
        """
        query = f"SELECT {_COLUMNS} FROM categories"
        if not include_inactive:
            query += " WHERE active = 1"
        query += " ORDER BY name"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query)
            return [_to_category(row) for row in cursor.fetchall()]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_COLUMNS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return _to_category(row)
            return None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by name.

        Args:
            name: The category name to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_COLUMNS} FROM categories WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row:
                return _to_category(row)
            return None

    def find_roots(self, include_inactive: bool = False) -> List[Category]:
        """Get all categories without a parent, ordered by name."""
        query = f"SELECT {_COLUMNS} FROM categories WHERE parent_id IS NULL"
        if not include_inactive:
            query += " AND active = 1"
        query += " ORDER BY name"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query)
            return [_to_category(row) for row in cursor.fetchall()]

    def find_children(
        self, parent_id: int, include_inactive: bool = False
    ) -> List[Category]:
        """Get the direct children of a category.

        Args:
            parent_id: The parent category ID.
            include_inactive: Whether soft-deleted children are returned.

        Returns:
            List of Category objects, ordered by name.
        """
        query = f"SELECT {_COLUMNS} FROM categories WHERE parent_id = ?"
        if not include_inactive:
            query += " AND active = 1"
        query += " ORDER BY name"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, (parent_id,))
            return [_to_category(row) for row in cursor.fetchall()]

    def find_all_subcategory_ids(
        self, category_id: int, include_inactive: bool = False
    ) -> Set[int]:
        """Get the IDs of every category below ``category_id``.

        Args:
            category_id: Root of the subtree. Not included in the result.
            include_inactive: Whether soft-deleted categories are traversed.

        Raises:
            CategoryNotFoundError: If the category does not exist.
            CircularCategoryReferenceError: If the subtree contains a loop.
            CategoryHierarchyDepthExceededError: If the subtree is too deep.
        """
        with _logged_hierarchy_errors(f"Collecting subcategories of {category_id}"):
            return self.hierarchy.collect_descendant_ids(category_id, include_inactive)

    def find_all_active_subcategory_ids(self, category_id: int) -> Set[int]:
        """Get the IDs of every active category below ``category_id``."""
        return self.find_all_subcategory_ids(category_id, include_inactive=False)

    def depth(self, category_id: int) -> int:
        """Get the depth of a category (roots are at depth 0)."""
        with _logged_hierarchy_errors(f"Computing depth of {category_id}"):
            return self.hierarchy.depth_of(category_id)

    def insertion_depth(self, parent_id: Optional[int]) -> int:
        """Get the depth a new category would have under ``parent_id``."""
        with _logged_hierarchy_errors(f"Validating parent {parent_id}"):
            return self.hierarchy.compute_insertion_depth(parent_id)

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Create a new category.

        Args:
            name: Category name (must be unique).
            description: Optional description of the category.
            parent_id: Optional parent category ID for hierarchical categories.

        Returns:
            The created Category object with id populated.

        Raises:
            DuplicateCategoryError: If the name is already taken.
            CategoryNotFoundError: If the parent does not exist.
            CategoryHierarchyDepthExceededError: If the new category would be
                too deep.
            CircularCategoryReferenceError: If the parent's ancestors loop.
        """
        if self.find_by_name(name):
            raise DuplicateCategoryError(name)

        if parent_id is not None:
            self.insertion_depth(parent_id)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO categories (name, description, parent_id, active) "
                "VALUES (?, ?, ?, 1)",
                (name, description, parent_id),
            )
            conn.commit()
            category_id = cursor.lastrowid

        logger.debug(f"Created category {category_id} '{name}' (parent: {parent_id})")

        return Category(
            id=category_id,
            name=name,
            description=description,
            parent_id=parent_id,
        )

    def update(
        self,
        category_id: int,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Update an existing category.

        Args:
            category_id: The category ID to update.
            name: New category name.
            description: New description (can be None).
            parent_id: New parent category ID (can be None).

        Returns:
            The updated Category object.

        Raises:
            CategoryNotFoundError: If the category or new parent is not found.
            DuplicateCategoryError: If another category already has ``name``.
            CircularCategoryReferenceError: If the new parent is the category
                itself or one of its descendants.
            CategoryHierarchyDepthExceededError: If the move would push part of
                the subtree too deep.
        """
        existing = self.find(category_id)
        if existing is None:
            raise CategoryNotFoundError(category_id)

        other = self.find_by_name(name)
        if other is not None and other.id != category_id:
            raise DuplicateCategoryError(name)

        if parent_id is not None and parent_id != existing.parent_id:
            self._validate_move(category_id, parent_id)

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE categories SET name = ?, description = ?, parent_id = ? WHERE id = ?",
                (name, description, parent_id, category_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise CategoryNotFoundError(category_id)

        return Category(
            id=category_id,
            name=name,
            description=description,
            parent_id=parent_id,
            active=existing.active,
        )

    def _validate_move(self, category_id: int, parent_id: int) -> None:
        """Check that re-parenting ``category_id`` under ``parent_id`` keeps a valid tree."""
        action = f"Moving category {category_id} under {parent_id}"
        with _logged_hierarchy_errors(action):
            if parent_id == category_id:
                raise CircularCategoryReferenceError(category_id, parent_id)

            subtree = self.hierarchy.collect_descendant_depths(
                category_id, include_inactive=True
            )
            if parent_id in subtree:
                raise CircularCategoryReferenceError(category_id, parent_id)

            new_depth = self.hierarchy.compute_insertion_depth(parent_id)
            deepest = new_depth + max(subtree.values(), default=0)
            if deepest >= self.max_depth:
                raise CategoryHierarchyDepthExceededError(
                    self.max_depth, category_id, deepest
                )

    def activate(self, category_id: int) -> Category:
        """Mark a category as active again."""
        return self._set_active(category_id, True)

    def deactivate(self, category_id: int) -> Category:
        """Soft-delete a category.

        The row stays in the database and is still visible to traversals that
        include inactive categories.
        """
        return self._set_active(category_id, False)

    def _set_active(self, category_id: int, active: bool) -> Category:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "UPDATE categories SET active = ? WHERE id = ?",
                (1 if active else 0, category_id),
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise CategoryNotFoundError(category_id)

        return self.find(category_id)

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.

        Raises:
            CategoryHasChildrenError: If the category still has subcategories,
                active or not. Deactivate it instead, or move the children first.
        """
        if self.find_children(category_id, include_inactive=True):
            raise CategoryHasChildrenError(category_id)

        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            return cursor.rowcount > 0
