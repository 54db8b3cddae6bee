#!/usr/bin/env python3

from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all categories in the database."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found. Run 'python -m cli categories seed'.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"{category.id:>4}  {category.name:<20} {category.type}")

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_seed(args, services):
    """Seed the default category set into an empty database."""
    created = services.categories.seed_defaults()

    if created:
        logger.info(f"✓ Created {created} default categories.")
    else:
        logger.info("⊘ Categories already exist, nothing to seed.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="List and seed transaction categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    seed_parser = categories_subparsers.add_parser(
        "seed", help="Create the default categories if none exist"
    )
    seed_parser.set_defaults(func=cmd_seed)
