"""Category model for account classification."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Category:
    """Represents a user-defined category.

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: Owning user.
        title: Category title.
        type: Fixed discriminator, e.g. "income" or "expense". Accounts
            filed under this category must carry the same type.
        description: Description of what belongs in this category.
        created_at: When the row was created.
    """

    id: int
    user_id: int
    title: str
    type: str
    description: str
    created_at: datetime

    def to_dict(self) -> dict:
        """Convert category to a JSON-serializable dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "type": self.type,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
        }
