"""Category service for database operations."""

from typing import List, Optional
from models.category import Category
from services.errors import NotFoundError
from services.queries import contains_pattern, parse_timestamp
from logger import get_logger

logger = get_logger()

_CATEGORY_SELECT_FIELDS = "id, user_id, title, type, description, created_at"


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(
        self,
        user_id: int,
        category_type: str,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> List[Category]:
        """Get a user's categories of one type.

        Args:
            user_id: Owning user.
            category_type: Exact type to match.
            title: Optional case-insensitive substring filter. Empty means no filter.
            description: Optional case-insensitive substring filter. Empty means no filter.

        Returns:
            List of Category objects, ordered by title then id.
        """
        query = f"""
            SELECT {_CATEGORY_SELECT_FIELDS}
            FROM categories
            WHERE user_id = ? AND type = ?
        """
        params = [user_id, category_type]

        if title:
            query += " AND LOWER(title) LIKE ? ESCAPE '\\'"
            params.append(contains_pattern(title))

        if description:
            query += " AND LOWER(description) LIKE ? ESCAPE '\\'"
            params.append(contains_pattern(description))

        query += " ORDER BY title, id"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            rows = cursor.fetchall()

            return [self._row_to_category(row) for row in rows]

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            return self.find_with(conn, category_id)

    def find_with(self, conn, category_id: int) -> Optional[Category]:
        """Get a single category by ID using an already open connection.

        Lets callers read the category inside their own transaction.
        """
        cursor = conn.execute(
            f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
            (category_id,),
        )
        row = cursor.fetchone()

        if row:
            return self._row_to_category(row)
        return None

    def create(
        self, user_id: int, title: str, category_type: str, description: str
    ) -> Category:
        """Create a new category.

        Args:
            user_id: Owning user.
            title: Category title.
            category_type: Fixed type, e.g. "expense".
            description: Description of the category.

        Returns:
            The created Category object with id and created_at populated.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO categories (user_id, title, type, description)
                VALUES (?, ?, ?, ?)
                """,
                (user_id, title, category_type, description),
            )
            conn.commit()
            category_id = cursor.lastrowid

            category = self.find_with(conn, category_id)

        logger.info(f"Created category {category.id} for user {user_id}")
        return category

    def update(
        self,
        category_id: int,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Category:
        """Update a category's title and/or description.

        Fields left as None keep their stored value. The type never changes.

        Args:
            category_id: The category ID to update.
            title: New title, or None to keep it.
            description: New description, or None to keep it.

        Returns:
            The updated Category object.

        Raises:
            NotFoundError: If the category does not exist.
        """
        changes = {"title": title, "description": description}
        changes = {field: value for field, value in changes.items() if value is not None}

        with self.db_manager.connect() as conn:
            if changes:
                set_clause = ", ".join([f"{field} = ?" for field in changes])
                cursor = conn.execute(
                    f"UPDATE categories SET {set_clause} WHERE id = ?",
                    (*changes.values(), category_id),
                )
                conn.commit()

                if cursor.rowcount == 0:
                    raise NotFoundError("Category", category_id)

            category = self.find_with(conn, category_id)

        if category is None:
            raise NotFoundError("Category", category_id)

        if changes:
            logger.info(f"Updated category {category_id}: {', '.join(changes)}")
        return category

    def delete(self, category_id: int) -> bool:
        """Delete a category by ID.

        Accounts referencing the category are left untouched.

        Args:
            category_id: The category ID to delete.

        Returns:
            True if category was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted category {category_id}")
        return deleted

    def _row_to_category(self, row: tuple) -> Category:
        """Convert a database row to a Category object."""
        return Category(
            id=row[0],
            user_id=row[1],
            title=row[2],
            type=row[3],
            description=row[4],
            created_at=parse_timestamp(row[5]),
        )
