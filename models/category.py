"""Category model for the business directory."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    """Represents a node in the category hierarchy.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Category name (unique).
        description: Optional description of what belongs in this category.
        parent_id: Optional parent category ID. None means a root category.
        active: False when the category has been soft-deleted.
    """

    id: int
    name: str
    description: Optional[str]
    parent_id: Optional[int] = None
    active: bool = True

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
