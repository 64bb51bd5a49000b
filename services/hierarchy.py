"""Guarded traversal of the category hierarchy.

Categories form a parent-pointer tree: each row stores an optional
``parent_id`` and nothing else links them. Nothing in the database stops that
tree from being corrupted (a loop introduced by a direct UPDATE, or a chain
deeper than the application ever allows), so every traversal here checks for
both conditions and raises instead of recursing forever.

``max_depth`` is an exclusive ceiling on node depth: roots sit at depth 0 and
a node at depth ``max_depth`` is never allowed. Because the descendant
collector recurses once per level, ``max_depth`` is also its call-stack budget
and should stay well below ``sys.getrecursionlimit()``.
"""

from typing import Dict, Optional, Set
from models.category import Category
from services.exceptions import (
    CategoryHierarchyDepthExceededError,
    CategoryNotFoundError,
    CircularCategoryReferenceError,
)
from logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 5


class CategoryHierarchy:
    """Walks the category tree through a lookup collaborator.

    The lookup only needs two methods:

    * ``find(category_id) -> Optional[Category]``
    * ``find_children(parent_id, include_inactive) -> List[Category]``

    The hierarchy never writes through the lookup and keeps no state between
    calls, so one instance can be shared by concurrent callers.

    Args:
        lookup: Object providing ``find`` and ``find_children``.
        max_depth: Maximum hierarchy depth (exclusive). Must be at least 1.
    """

    def __init__(self, lookup, max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {max_depth}")
        self.lookup = lookup
        self.max_depth = max_depth

    def collect_descendant_ids(
        self, root_id: int, include_inactive: bool = False
    ) -> Set[int]:
        """Collect the ids of every category below ``root_id``.

        Args:
            root_id: The category whose subtree should be collected.
            include_inactive: If False, inactive children (and everything
                under them) are left out.

        Returns:
            Set of descendant ids. ``root_id`` itself is never included.

        Raises:
            CategoryNotFoundError: If ``root_id`` does not exist.
            CategoryHierarchyDepthExceededError: If a node sits at or below
                ``max_depth``.
            CircularCategoryReferenceError: If a node is reached twice.
        """
        return set(self.collect_descendant_depths(root_id, include_inactive))

    def collect_descendant_depths(
        self, root_id: int, include_inactive: bool = False
    ) -> Dict[int, int]:
        """Like ``collect_descendant_ids`` but maps each id to its depth below root.

        Direct children of ``root_id`` have depth 1.
        """
        self._require(root_id)

        depths: Dict[int, int] = {}
        visited: Set[int] = set()
        self._collect(root_id, include_inactive, depths, visited, 0)

        logger.debug(
            f"Collected {len(depths)} descendant(s) of category {root_id} "
            f"(include_inactive={include_inactive})"
        )
        return depths

    def _collect(
        self,
        category_id: int,
        include_inactive: bool,
        depths: Dict[int, int],
        visited: Set[int],
        depth: int,
    ) -> None:
        if depth >= self.max_depth:
            raise CategoryHierarchyDepthExceededError(self.max_depth, category_id, depth)

        # Any id seen twice means a loop; a tree never shares nodes
        if category_id in visited:
            raise CircularCategoryReferenceError(category_id)
        visited.add(category_id)

        for child in self.lookup.find_children(category_id, include_inactive):
            depths[child.id] = depth + 1
            self._collect(child.id, include_inactive, depths, visited, depth + 1)

    def depth_of(self, category_id: int) -> int:
        """Get the depth of an existing category (roots are at depth 0).

        Raises:
            CategoryNotFoundError: If the category or one of its ancestors
                does not exist.
            CircularCategoryReferenceError: If the ancestor chain loops.
            CategoryHierarchyDepthExceededError: If the chain does not reach
                a root within ``max_depth`` hops.
        """
        return self._depth_from_root(self._require(category_id))

    def compute_insertion_depth(self, parent_id: Optional[int]) -> int:
        """Compute the depth a new category would have under ``parent_id``.

        Args:
            parent_id: Prospective parent, or None for a root category.

        Returns:
            Depth of the new category: 0 for a root, parent depth + 1 otherwise.

        Raises:
            CategoryNotFoundError: If the parent or one of its ancestors does
                not exist.
            CircularCategoryReferenceError: If the parent's ancestor chain loops.
            CategoryHierarchyDepthExceededError: If the new category would sit
                at depth ``max_depth`` or deeper.
        """
        if parent_id is None:
            return 0

        parent = self.lookup.find(parent_id)
        if parent is None:
            raise CategoryNotFoundError(
                parent_id, f"Parent category not found with id {parent_id}"
            )

        depth = self._depth_from_root(parent) + 1
        if depth >= self.max_depth:
            raise CategoryHierarchyDepthExceededError(self.max_depth, parent_id, depth)
        return depth

    def _depth_from_root(self, category: Category) -> int:
        depth = 0
        current = category
        visited: Set[int] = set()

        while current.parent_id is not None:
            if current.id in visited:
                raise CircularCategoryReferenceError(current.id, current.parent_id)
            visited.add(current.id)

            if depth >= self.max_depth:
                raise CategoryHierarchyDepthExceededError(
                    self.max_depth, current.id, depth
                )

            depth += 1

            parent_id = current.parent_id
            current = self.lookup.find(parent_id)
            if current is None:
                raise CategoryNotFoundError(
                    parent_id, f"Parent category not found with id {parent_id}"
                )

        return depth

    def _require(self, category_id: int) -> Category:
        category = self.lookup.find(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category
