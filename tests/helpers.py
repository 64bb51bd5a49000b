"""Helper utilities for tests."""

from pathlib import Path
import sqlite3
from typing import Dict, List, Optional

from models.category import Category


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    # Get all .sql files and sort them
    migration_files = sorted(migrations_dir.glob("*.sql"))

    for migration_file in migration_files:
        with open(migration_file, "r") as f:
            sql = f.read()

        conn.executescript(sql)

    conn.commit()


class InMemoryCategoryLookup:
    """Dictionary-backed stand-in for CategoryService in hierarchy tests.

    Parent links can point anywhere, including at missing ids or back into a
    node's own subtree, which makes corrupted hierarchies easy to build.
    """

    def __init__(self):
        self.categories: Dict[int, Category] = {}
        self.find_calls: List[int] = []
        self.children_calls: List[int] = []

    def add(
        self, category_id: int, parent_id: Optional[int] = None, active: bool = True
    ) -> Category:
        category = Category(
            id=category_id,
            name=f"Category {category_id}",
            description=None,
            parent_id=parent_id,
            active=active,
        )
        self.categories[category_id] = category
        return category

    def set_parent(self, category_id: int, parent_id: Optional[int]) -> None:
        self.categories[category_id].parent_id = parent_id

    def find(self, category_id: int) -> Optional[Category]:
        self.find_calls.append(category_id)
        return self.categories.get(category_id)

    def find_children(
        self, parent_id: int, include_inactive: bool = False
    ) -> List[Category]:
        self.children_calls.append(parent_id)
        return [
            c
            for _, c in sorted(self.categories.items())
            if c.parent_id == parent_id and (include_inactive or c.active)
        ]


def build_chain(lookup: InMemoryCategoryLookup, length: int) -> List[int]:
    """Add a single-branch hierarchy 1 -> 2 -> ... -> length.

    Category 1 is the root, category n sits at depth n - 1.
    """
    ids = list(range(1, length + 1))
    for category_id in ids:
        lookup.add(category_id, parent_id=category_id - 1 if category_id > 1 else None)
    return ids
