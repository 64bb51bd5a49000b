#!/usr/bin/env python3

import sys
from logger import get_logger
from services.exceptions import CategoryError

logger = get_logger(__name__)


def cmd_list(args, services):
    """List all categories in the database."""
    categories = services.categories.find_all(include_inactive=args.include_inactive)

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.id}")
        logger.info(f"Name: {category.name}")
        if category.description:
            logger.info(f"Description: {category.description}")
        if category.parent_id:
            parent = services.categories.find(category.parent_id)
            parent_name = parent.name if parent else "Unknown"
            logger.info(f"Parent: {parent_name} (ID: {category.parent_id})")
        if not category.active:
            logger.info("Status: inactive")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_tree(args, services):
    """Print the category hierarchy as an indented tree."""
    roots = services.categories.find_roots(include_inactive=args.include_inactive)

    if not roots:
        logger.info("No categories found.")
        return

    for root in roots:
        _print_subtree(services, root, args.include_inactive, 0)


def _print_subtree(services, category, include_inactive, level):
    # Collecting first runs the cycle and depth guards before any recursion here
    if level == 0:
        services.categories.find_all_subcategory_ids(category.id, include_inactive)

    suffix = "" if category.active else " (inactive)"
    logger.info(f"{'  ' * level}{category.name} [{category.id}]{suffix}")
    for child in services.categories.find_children(category.id, include_inactive):
        _print_subtree(services, child, include_inactive, level + 1)


def cmd_create(args, services):
    """Interactively create a new category."""
    print("\nCreate New Category")
    print("=" * 80)

    # Get category name
    name = input("Category name (e.g., Hair Salons): ").strip()
    if not name:
        logger.error("Category name cannot be empty.")
        sys.exit(1)

    # Get description
    description = input("Description (optional, press Enter to skip): ").strip()
    if not description:
        description = None

    # Get parent category
    parent_id = None
    parent_input = input("Parent category ID (optional, press Enter to skip): ").strip()
    if parent_input:
        try:
            parent_id = int(parent_input)
        except ValueError:
            logger.error("Parent category ID must be a number.")
            sys.exit(1)

    try:
        category = services.categories.create(name, description, parent_id)
    except CategoryError as e:
        logger.error(f"Error creating category: {e}")
        sys.exit(1)

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    if category.description:
        logger.info(f"  Description: {category.description}")
    if category.parent_id:
        logger.info(f"  Parent ID: {category.parent_id}")


def cmd_delete(args, services):
    """Delete a category by ID."""
    category_id = args.category_id

    # Check if category exists
    category = services.categories.find(category_id)
    if not category:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)

    # Confirm deletion
    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    if category.description:
        logger.info(f"  Description: {category.description}")

    confirm = (
        input("\nAre you sure you want to delete this category? (yes/no): ")
        .strip()
        .lower()
    )
    if confirm != "yes":
        logger.info("Deletion cancelled.")
        return

    try:
        if services.categories.delete(category_id):
            logger.info(f"✓ Category '{category.name}' deleted successfully.")
        else:
            logger.error("Failed to delete category.")
            sys.exit(1)
    except CategoryError as e:
        logger.error(f"Error deleting category: {e}")
        sys.exit(1)


def cmd_activate(args, services):
    """Re-activate a soft-deleted category."""
    try:
        category = services.categories.activate(args.category_id)
    except CategoryError as e:
        logger.error(str(e))
        sys.exit(1)
    logger.info(f"✓ Category '{category.name}' is active.")


def cmd_deactivate(args, services):
    """Soft-delete a category."""
    try:
        category = services.categories.deactivate(args.category_id)
    except CategoryError as e:
        logger.error(str(e))
        sys.exit(1)
    logger.info(f"✓ Category '{category.name}' is inactive.")


def cmd_descendants(args, services):
    """List the IDs of every category below a category."""
    try:
        ids = services.categories.find_all_subcategory_ids(
            args.category_id, args.include_inactive
        )
    except CategoryError as e:
        logger.error(str(e))
        sys.exit(1)

    if not ids:
        logger.info(f"Category {args.category_id} has no subcategories.")
        return

    logger.info(", ".join(str(category_id) for category_id in sorted(ids)))
    logger.info(f"\nTotal subcategories: {len(ids)}")


def cmd_depth(args, services):
    """Show a category's depth and whether it can take another level."""
    try:
        depth = services.categories.depth(args.category_id)
    except CategoryError as e:
        logger.error(str(e))
        sys.exit(1)

    max_depth = services.categories.max_depth
    logger.info(f"Category {args.category_id} is at depth {depth} (max: {max_depth})")
    if depth + 1 < max_depth:
        logger.info(f"New subcategories would be created at depth {depth + 1}.")
    else:
        logger.info("No subcategories can be added below this category.")


def cmd_seed(args, services):
    """Seed categories from the YAML seed file."""
    try:
        categories_data = services.seeder.load()
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    if not categories_data:
        logger.info("Seed file is empty.")
        return

    logger.info(f"\nSeeding categories from {services.seeder.seed_file}")
    logger.info("=" * 80)

    result = services.seeder.seed()

    logger.info("=" * 80)
    logger.info("\nSeeding complete!")
    logger.info(f"Created: {len(result.created)}")
    logger.info(f"Skipped: {len(result.skipped)}")
    logger.info(f"Failed: {len(result.failed)}")
    logger.info(f"Total: {result.total}")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, and inspect business categories",
    )

    # Add subcommands for categories
    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.add_argument(
        "--active-only",
        dest="include_inactive",
        action="store_false",
        help="Hide inactive categories",
    )
    list_parser.set_defaults(func=cmd_list)

    # categories tree
    tree_parser = categories_subparsers.add_parser(
        "tree", help="Show the category hierarchy"
    )
    tree_parser.add_argument(
        "--include-inactive",
        action="store_true",
        help="Include inactive categories",
    )
    tree_parser.set_defaults(func=cmd_tree)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category interactively"
    )
    create_parser.set_defaults(func=cmd_create)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.set_defaults(func=cmd_delete)

    # categories activate / deactivate
    for name, func, help_text in (
        ("activate", cmd_activate, "Re-activate a category"),
        ("deactivate", cmd_deactivate, "Soft-delete a category"),
    ):
        toggle_parser = categories_subparsers.add_parser(name, help=help_text)
        toggle_parser.add_argument("category_id", type=int, help="Category ID")
        toggle_parser.set_defaults(func=func)

    # categories descendants
    descendants_parser = categories_subparsers.add_parser(
        "descendants", help="List all subcategory IDs of a category"
    )
    descendants_parser.add_argument("category_id", type=int, help="Category ID")
    descendants_parser.add_argument(
        "--include-inactive",
        action="store_true",
        help="Include inactive subcategories",
    )
    descendants_parser.set_defaults(func=cmd_descendants)

    # categories depth
    depth_parser = categories_subparsers.add_parser(
        "depth", help="Show the hierarchy depth of a category"
    )
    depth_parser.add_argument("category_id", type=int, help="Category ID")
    depth_parser.set_defaults(func=cmd_depth)

    # categories seed
    seed_parser = categories_subparsers.add_parser(
        "seed", help="Seed categories from db/seed/categories.yaml"
    )
    seed_parser.set_defaults(func=cmd_seed)
