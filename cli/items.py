#!/usr/bin/env python3

import sys

from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the item -> category mappings."""
    mappings = services.items.find_all()

    if not mappings:
        logger.info("No items mapped yet.")
        return

    logger.info("\nItems:")
    logger.info("=" * 80)
    for item, category in mappings.items():
        logger.info(f"{item.capitalize():<24} {category.name}")

    logger.info(f"\nTotal items: {len(mappings)}")


def cmd_set(args, services):
    """Map an item to a category, replacing any existing mapping."""
    category = services.categories.find_by_name(args.category)
    if category is None:
        logger.error(f"Category '{args.category}' not found.")
        sys.exit(1)

    if not services.items.upsert(args.item, category.id):
        logger.error("Item name cannot be empty.")
        sys.exit(1)

    logger.info(f"✓ '{args.item.strip().lower()}' now maps to '{category.name}'.")


def cmd_remove(args, services):
    """Forget the mapping for an item."""
    if services.items.remove(args.item):
        logger.info(f"✓ Removed '{args.item.strip().lower()}'.")
    else:
        logger.info(f"No mapping for '{args.item}'.")


def cmd_classify(args, services):
    """Show which category an item would be assigned."""
    logger.info(services.items.classify(args.item).name)


def setup_parser(subparsers):
    """Setup items subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "items",
        help="Manage item mappings",
        description="Manage the item -> category map used to classify expenses",
    )

    items_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available item commands",
        dest="subcommand",
        required=True,
    )

    list_parser = items_subparsers.add_parser("list", help="List item mappings")
    list_parser.set_defaults(func=cmd_list)

    set_parser = items_subparsers.add_parser("set", help="Map an item to a category")
    set_parser.add_argument("item", help="Item label, e.g. paneer")
    set_parser.add_argument("category", help="Category name, e.g. Dairy")
    set_parser.set_defaults(func=cmd_set)

    remove_parser = items_subparsers.add_parser("remove", help="Remove an item mapping")
    remove_parser.add_argument("item", help="Item label")
    remove_parser.set_defaults(func=cmd_remove)

    classify_parser = items_subparsers.add_parser(
        "classify", help="Show the category an item would get"
    )
    classify_parser.add_argument("item", help="Item label")
    classify_parser.set_defaults(func=cmd_classify)
