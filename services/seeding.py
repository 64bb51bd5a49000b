"""Seeding of the category tree from YAML."""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from db.manager import get_seed_dir
from services.exceptions import (
    CategoryHierarchyDepthExceededError,
    CategoryNotFoundError,
    CircularCategoryReferenceError,
)
from logger import get_logger

logger = get_logger(__name__)


@dataclass
class SeedResult:
    """Outcome of a seeding run."""

    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.created) + len(self.skipped) + len(self.failed)


class CategorySeeder:
    """Creates a nested category tree through the category service.

    The seed file is a YAML list of nodes, each with a ``name``, an optional
    ``description`` and an optional list of ``children`` of the same shape::

        - name: Beauty
          description: Hair, nails and skin care
          children:
            - name: Hair Salons

    Every category goes through ``CategoryService.create``, so the configured
    depth limit applies to seeded data as well.
    """

    def __init__(self, category_service, seed_file: Optional[Path] = None):
        """Initialize the seeder.

        Args:
            category_service: CategoryService used to look up and create categories.
            seed_file: YAML file to load. Defaults to db/seed/categories.yaml.
        """
        self.categories = category_service
        self.seed_file = seed_file or get_seed_dir() / "categories.yaml"

    def load(self) -> List[Dict[str, Any]]:
        """Load the seed tree from the YAML file.

        Raises:
            FileNotFoundError: If the seed file doesn't exist.
            yaml.YAMLError: If YAML is invalid.
            ValueError: If the top level is not a list.
        """
        if not self.seed_file.exists():
            raise FileNotFoundError(f"Seed file not found: {self.seed_file}")

        logger.info(f"Loading categories from {self.seed_file}")

        with open(self.seed_file, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"Seed file {self.seed_file} must contain a list of categories")
        return data

    def seed(self) -> SeedResult:
        """Create every category from the seed file that doesn't exist yet.

        Existing categories (matched by name) are skipped but still used as
        parents for their seeded children. A category that cannot be created
        is counted as failed and its children are not attempted.

        Returns:
            SeedResult listing created, skipped and failed category names.
        """
        result = SeedResult()
        for node in self.load():
            self._seed_node(node, None, result)
        return result

    def _seed_node(
        self, node: Dict[str, Any], parent_id: Optional[int], result: SeedResult
    ) -> None:
        name = node.get("name")
        if not name:
            logger.warning(f"Skipping category with no name (parent: {parent_id})")
            return

        existing = self.categories.find_by_name(name)
        if existing:
            logger.info(f"⊘ Skipped '{name}' (already exists)")
            result.skipped.append(name)
            category_id = existing.id
        else:
            try:
                category = self.categories.create(
                    name, node.get("description"), parent_id
                )
            except (
                CategoryHierarchyDepthExceededError,
                CircularCategoryReferenceError,
                CategoryNotFoundError,
            ) as e:
                logger.error(f"Error creating category '{name}': {e}")
                result.failed.append(name)
                return

            logger.info(f"✓ Created '{name}' (ID: {category.id})")
            result.created.append(name)
            category_id = category.id

        for child in node.get("children") or []:
            self._seed_node(child, category_id, result)
