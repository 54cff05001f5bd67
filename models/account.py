"""Account model: a single financial entry owned by a user."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Account:
    """Represents a financial transaction classified by a category.

    Attributes:
        id: Unique identifier (auto-generated).
        user_id: Owning user.
        category_id: Category this entry is classified under.
        title: Short title, e.g. "Rent".
        type: Discriminator shared with the category, e.g. "expense".
        description: Free-form description.
        value: Amount in minor units (cents).
        date: When the entry occurred.
        created_at: When the row was created.
        category_title: Title of the referenced category, only populated by
            listings (None if the category no longer exists).
    """

    id: int
    user_id: int
    category_id: int
    title: str
    type: str
    description: str
    value: int
    date: datetime
    created_at: datetime
    category_title: Optional[str] = None

    def to_dict(self, include_category_title: bool = False) -> dict:
        """Convert account to a JSON-serializable dictionary."""
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "category_id": self.category_id,
            "title": self.title,
            "type": self.type,
            "description": self.description,
            "value": self.value,
            "date": self.date.isoformat(),
            "created_at": self.created_at.isoformat(),
        }
        if include_category_title:
            data["category_title"] = self.category_title
        return data
