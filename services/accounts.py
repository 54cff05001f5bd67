"""Account service for database operations."""

from datetime import date, datetime
from typing import Dict, List, Optional, Union
from models.account import Account
from services.categories import CategoryService
from services.errors import CategoryTypeMismatchError, NotFoundError
from services.queries import contains_pattern, parse_timestamp
from logger import get_logger

logger = get_logger()

# SQL Query Constants
_ACCOUNT_SELECT_FIELDS = """a.id, a.user_id, a.category_id, a.title, a.type, a.description,
       a.value, a.date, a.created_at, c.title"""

_ACCOUNT_FROM = "accounts a LEFT JOIN categories c ON c.id = a.category_id"


class AccountService:
    """Service for managing accounts and their aggregates."""

    def __init__(self, db_manager, categories: Optional[CategoryService] = None):
        """Initialize the account service.

        Args:
            db_manager: Database manager instance for database operations.
            categories: Category service used for the type check on create.
                       Defaults to one over the same database manager.
        """
        self.db_manager = db_manager
        self.categories = categories or CategoryService(db_manager)

    def create(
        self,
        user_id: int,
        category_id: int,
        title: str,
        account_type: str,
        description: str,
        value: int,
        account_date: datetime,
    ) -> Account:
        """Create a new account after checking it against its category.

        The category lookup and the insert run in one immediate transaction,
        so the category cannot change between the check and the write.

        Args:
            user_id: Owning user.
            category_id: Category to file the account under. Must belong to user_id.
            title: Account title.
            account_type: Account type, must equal the category's type.
            description: Account description.
            value: Amount in minor units.
            account_date: When the entry occurred.

        Returns:
            The created Account object with id and created_at populated.

        Raises:
            NotFoundError: If the category does not exist or belongs to another user.
            CategoryTypeMismatchError: If the category's type differs from account_type.
        """
        with self.db_manager.connect() as conn:
            try:
                conn.execute("BEGIN IMMEDIATE")

                category = self.categories.find_with(conn, category_id)
                if category is None or category.user_id != user_id:
                    raise NotFoundError("Category", category_id)

                if category.type != account_type:
                    raise CategoryTypeMismatchError(account_type, category.type)

                cursor = conn.execute(
                    """
                    INSERT INTO accounts
                        (user_id, category_id, title, type, description, value, date)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        category_id,
                        title,
                        account_type,
                        description,
                        value,
                        account_date.isoformat(),
                    ),
                )
                account = self._find_with(conn, cursor.lastrowid)
                conn.commit()
            except Exception:
                conn.rollback()
                raise

        logger.info(
            f"Created account {account.id} for user {user_id} in category {category_id}"
        )
        return account

    def find(self, account_id: int) -> Optional[Account]:
        """Get a single account by ID.

        Args:
            account_id: The account ID to find.

        Returns:
            Account object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            return self._find_with(conn, account_id)

    def find_all(
        self,
        user_id: int,
        account_type: str,
        *,
        category_id: Optional[int] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        on_date: Optional[Union[date, datetime]] = None,
    ) -> List[Account]:
        """Get a user's accounts of one type, optionally filtered.

        Args:
            user_id: Owning user.
            account_type: Exact type to match.
            category_id: Optional exact category filter (0 or None means no filter).
            title: Optional case-insensitive substring filter. Empty means no filter.
            description: Optional case-insensitive substring filter. Empty means no filter.
            on_date: Optional day (or timestamp) whose UTC calendar day the
                account date must fall on.

        Returns:
            List of Account objects with category_title populated, ordered by
            date (newest first), then id.
        """
        query = f"""
            SELECT {_ACCOUNT_SELECT_FIELDS}
            FROM {_ACCOUNT_FROM}
            WHERE a.user_id = ? AND a.type = ?
        """
        params = [user_id, account_type]

        if category_id:
            query += " AND a.category_id = ?"
            params.append(category_id)

        if title:
            query += " AND LOWER(a.title) LIKE ? ESCAPE '\\'"
            params.append(contains_pattern(title))

        if description:
            query += " AND LOWER(a.description) LIKE ? ESCAPE '\\'"
            params.append(contains_pattern(description))

        if on_date is not None:
            query += " AND date(a.date) = date(?)"
            params.append(on_date.isoformat())

        query += " ORDER BY julianday(a.date) DESC, a.id"

        with self.db_manager.connect() as conn:
            cursor = conn.execute(query, params)
            rows = cursor.fetchall()

            return [self._row_to_account(row) for row in rows]

    def update(
        self,
        account_id: int,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        value: Optional[int] = None,
    ) -> Account:
        """Update an account's title, description and/or value.

        Fields left as None keep their stored value. Type, owner, category
        and date never change.

        Args:
            account_id: The account ID to update.
            title: New title, or None to keep it.
            description: New description, or None to keep it.
            value: New value, or None to keep it.

        Returns:
            The updated Account object.

        Raises:
            NotFoundError: If the account does not exist.
        """
        changes = {"title": title, "description": description, "value": value}
        changes = {field: v for field, v in changes.items() if v is not None}

        with self.db_manager.connect() as conn:
            if changes:
                set_clause = ", ".join([f"{field} = ?" for field in changes])
                cursor = conn.execute(
                    f"UPDATE accounts SET {set_clause} WHERE id = ?",
                    (*changes.values(), account_id),
                )
                conn.commit()

                if cursor.rowcount == 0:
                    raise NotFoundError("Account", account_id)

            account = self._find_with(conn, account_id)

        if account is None:
            raise NotFoundError("Account", account_id)

        if changes:
            logger.info(f"Updated account {account_id}: {', '.join(changes)}")
        return account

    def delete(self, account_id: int) -> bool:
        """Delete an account by ID.

        Args:
            account_id: The account ID to delete.

        Returns:
            True if account was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute("DELETE FROM accounts WHERE id = ?", (account_id,))
            conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted account {account_id}")
        return deleted

    def graph(self, user_id: int, account_type: str) -> Dict:
        """Count a user's accounts of one type, by category and by month.

        Returns:
            Dictionary of the form::

                {
                    "user_id": 1,
                    "type": "expense",
                    "count": 3,
                    "by_category": [
                        {"category_id": 5, "category_title": "Housing", "count": 2},
                        {"category_id": 7, "category_title": "Food", "count": 1},
                    ],
                    "by_month": [
                        {"month": "2024-01", "count": 2},
                        {"month": "2024-02", "count": 1},
                    ],
                }

            An empty result has count 0 and empty lists.
        """
        return self._aggregate(user_id, account_type, "COUNT(*)", "count")

    def reports(self, user_id: int, account_type: str) -> Dict:
        """Sum the values of a user's accounts of one type, by category and by month.

        Same shape as graph() with "sum" in place of "count".
        """
        return self._aggregate(user_id, account_type, "SUM(a.value)", "sum")

    def _aggregate(
        self, user_id: int, account_type: str, expression: str, key: str
    ) -> Dict:
        """Run one aggregate expression grouped by category and by month."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT a.category_id, c.title, {expression}
                FROM {_ACCOUNT_FROM}
                WHERE a.user_id = ? AND a.type = ?
                GROUP BY a.category_id, c.title
                ORDER BY a.category_id
                """,
                (user_id, account_type),
            )
            by_category = [
                {"category_id": row[0], "category_title": row[1], key: row[2]}
                for row in cursor.fetchall()
            ]

            cursor = conn.execute(
                f"""
                SELECT strftime('%Y-%m', a.date) AS month, {expression}
                FROM {_ACCOUNT_FROM}
                WHERE a.user_id = ? AND a.type = ?
                GROUP BY month
                ORDER BY month
                """,
                (user_id, account_type),
            )
            by_month = [{"month": row[0], key: row[1]} for row in cursor.fetchall()]

        return {
            "user_id": user_id,
            "type": account_type,
            key: sum(bucket[key] for bucket in by_category),
            "by_category": by_category,
            "by_month": by_month,
        }

    def _find_with(self, conn, account_id: int) -> Optional[Account]:
        """Get a single account by ID using an already open connection."""
        cursor = conn.execute(
            f"SELECT {_ACCOUNT_SELECT_FIELDS} FROM {_ACCOUNT_FROM} WHERE a.id = ?",
            (account_id,),
        )
        row = cursor.fetchone()

        if row:
            return self._row_to_account(row)
        return None

    def _row_to_account(self, row: tuple) -> Account:
        """Convert a database row to an Account object."""
        return Account(
            id=row[0],
            user_id=row[1],
            category_id=row[2],
            title=row[3],
            type=row[4],
            description=row[5],
            value=row[6],
            date=parse_timestamp(row[7]),
            created_at=parse_timestamp(row[8]),
            category_title=row[9],
        )
