#!/usr/bin/env python3

import sys

from cli.prompts import confirm
from logger import get_logger
from models.category import FALLBACK_CATEGORY
from models.decision import Outcome

logger = get_logger()


def cmd_list(args, services):
    """List all categories."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        suffix = " (fallback)" if services.categories.is_fallback(category) else ""
        logger.info(f"ID: {category.id}  Name: {category.name}{suffix}")

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Create a new category."""
    category = services.categories.create(args.name)
    if category is None:
        if args.name.strip() == FALLBACK_CATEGORY:
            logger.error(f"The name '{FALLBACK_CATEGORY}' is reserved.")
        else:
            logger.error("Category name cannot be empty.")
        sys.exit(1)

    logger.info(f"✓ Category created successfully with ID: {category.id}")


def cmd_rename(args, services):
    """Rename a category; its expenses and item mappings follow."""
    category = services.categories.find(args.category_id)
    if category is None:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)

    renamed = services.categories.rename(args.category_id, args.name)
    if renamed is None:
        if services.categories.is_fallback(category):
            logger.error(f"The '{category.name}' category cannot be renamed.")
        elif args.name.strip() == FALLBACK_CATEGORY:
            logger.error(f"The name '{FALLBACK_CATEGORY}' is reserved.")
        else:
            logger.error("Category name cannot be empty.")
        sys.exit(1)

    logger.info(f"✓ Category '{category.name}' renamed to '{renamed.name}'.")


def cmd_delete(args, services):
    """Delete a category by ID."""
    result = services.categories.delete(args.category_id)

    if result.outcome is Outcome.NEEDS_CONFIRMATION:
        category = services.categories.find(args.category_id)
        question = (
            f'Category "{category.name}" is used in {result.affected} expense(s). '
            f'Delete anyway? They will be moved to "{FALLBACK_CATEGORY}".'
        )
        if not (args.yes or confirm(question)):
            logger.info("Deletion cancelled.")
            return
        result = services.categories.delete(args.category_id, confirmed=True)

    if result.outcome is Outcome.NOT_FOUND:
        logger.error(f"Category with ID {args.category_id} not found.")
        sys.exit(1)
    if result.outcome is Outcome.PROTECTED:
        logger.error("The fallback category cannot be deleted.")
        sys.exit(1)

    logger.info("✓ Category deleted successfully.")
    if result.affected:
        logger.info(f"  {result.affected} expense(s) moved to '{FALLBACK_CATEGORY}'.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, rename and delete expense categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category"
    )
    create_parser.add_argument("name", help="Category name, e.g. Spices")
    create_parser.set_defaults(func=cmd_create)

    rename_parser = categories_subparsers.add_parser(
        "rename", help="Rename a category"
    )
    rename_parser.add_argument("category_id", type=int, help="ID of the category")
    rename_parser.add_argument("name", help="New category name")
    rename_parser.set_defaults(func=cmd_rename)

    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument(
        "category_id",
        type=int,
        help="ID of the category to delete",
    )
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)
