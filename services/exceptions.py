"""Errors raised by the category services."""

from typing import Optional


class CategoryError(Exception):
    """Base class for all category errors."""


class CategoryNotFoundError(CategoryError):
    """Raised when a referenced category does not exist."""

    def __init__(self, category_id: int, message: Optional[str] = None):
        self.category_id = category_id
        super().__init__(message or f"Category not found with id {category_id}")


class CircularCategoryReferenceError(CategoryError):
    """Raised when a category is reached twice while walking the hierarchy.

    Example: A has parent B, B has parent C, C has parent A (A -> B -> C -> A).
    """

    def __init__(self, category_id: int, parent_id: Optional[int] = None):
        self.category_id = category_id
        self.parent_id = parent_id
        if parent_id is None:
            message = (
                f"Circular reference detected: Category {category_id} "
                "already visited in hierarchy"
            )
        else:
            message = (
                f"Circular reference detected: Category {category_id} "
                f"already visited in hierarchy when processing parent {parent_id}"
            )
        super().__init__(message)


class CategoryHierarchyDepthExceededError(CategoryError):
    """Raised when the hierarchy reaches the configured maximum depth."""

    def __init__(
        self,
        max_depth: int,
        category_id: Optional[int] = None,
        depth: Optional[int] = None,
    ):
        self.max_depth = max_depth
        self.category_id = category_id
        self.depth = depth
        if category_id is None:
            message = (
                "Category hierarchy depth exceeded maximum allowed depth of "
                f"{max_depth} levels. This may indicate a circular reference "
                "or excessively deep hierarchy."
            )
        else:
            message = (
                f"Category {category_id}: hierarchy depth ({depth}) exceeded "
                f"maximum allowed depth of {max_depth} levels"
            )
        super().__init__(message)


class DuplicateCategoryError(CategoryError):
    """Raised when creating a category whose name is already taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Category with name '{name}' already exists")


class CategoryHasChildrenError(CategoryError):
    """Raised when deleting a category that still has subcategories."""

    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(
            f"Category {category_id} cannot be deleted while it has subcategories"
        )
