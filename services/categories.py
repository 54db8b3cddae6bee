"""Category service for database operations."""

import sqlite3
from typing import List, Optional
from categorization import REQUIRED_CATEGORIES, PASS_THROUGH_CATEGORIES
from models.category import Category, EXPENSE
from logger import get_logger

logger = get_logger()


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Category]:
        """Get all categories from the database.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, category_type FROM categories ORDER BY name"
            )
            rows = cursor.fetchall()

            return [Category(id=row[0], name=row[1], type=row[2]) for row in rows]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, category_type FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return Category(id=row[0], name=row[1], type=row[2])
            return None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Get a single category by name.

        Args:
            name: The category name to find (case-sensitive).

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, category_type FROM categories WHERE name = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row:
                return Category(id=row[0], name=row[1], type=row[2])
            return None

    def create(self, name: str, category_type: str = EXPENSE) -> Category:
        """Create a new category.

        Args:
            name: Category name (must be unique).
            category_type: "Income" or "Expense".

        Returns:
            The persisted Category object with id populated.

        Raises:
            sqlite3.IntegrityError: If the name already exists.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO categories (name, category_type) VALUES (?, ?)",
                (name, category_type),
            )
            conn.commit()

            return Category(id=cursor.lastrowid, name=name, type=category_type)

    def find_or_create(self, name: str, category_type: str = EXPENSE) -> Category:
        """Return the category named ``name``, creating it on first use.

        Args:
            name: Category name.
            category_type: Type used only when the category has to be created.

        Returns:
            A Category that exists in the store.
        """
        with self.db_manager.write_lock():
            category = self.find_by_name(name)
            if category is not None:
                logger.debug(f"Using existing category: {name} (ID {category.id})")
                return category

            try:
                category = self.create(name, category_type)
            except sqlite3.IntegrityError:
                # Another process inserted it between the lookup and the insert
                category = self.find_by_name(name)
                if category is None:
                    raise
                return category

            logger.info(f"Created new category: {name} (ID {category.id})")
            return category

    def seed_defaults(self) -> int:
        """Insert the default category set if the table is empty.

        Returns:
            Number of categories created (0 if any category already existed).
        """
        with self.db_manager.write_lock():
            with self.db_manager.connect() as conn:
                (count,) = conn.execute("SELECT COUNT(*) FROM categories").fetchone()
                if count:
                    logger.debug("Categories already present, skipping seed")
                    return 0

                defaults = [(name, EXPENSE) for name in REQUIRED_CATEGORIES]
                defaults.extend(PASS_THROUGH_CATEGORIES)

                conn.executemany(
                    "INSERT INTO categories (name, category_type) VALUES (?, ?)",
                    defaults,
                )
                conn.commit()

        logger.info(f"Seeded {len(defaults)} default categories")
        return len(defaults)
