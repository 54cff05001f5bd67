"""Domain errors raised by the services."""


class NotFoundError(Exception):
    """Raised when a requested row does not exist."""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")


class CategoryTypeMismatchError(ValueError):
    """Raised when an account's type differs from its category's type."""

    def __init__(self, account_type: str, category_type: str):
        self.account_type = account_type
        self.category_type = category_type
        super().__init__("Account type is different from category type")
