"""
Domain exceptions for vending app.

Exception Hierarchy:
    CollectionsServiceError (base)
    ├── CollectionValidationError
    ├── DuplicateCollectionError
    ├── CollectionNotFoundError
    └── MalformedCollectionInputError

Views translate these into HTTP responses (400, 409, 404, 400).
"""


class CollectionsServiceError(Exception):
    """Base exception for all vending service errors."""
    pass


class CollectionValidationError(CollectionsServiceError):
    """
    One or more fields failed validation.

    Attributes:
        errors: dict mapping field name to a list of messages, e.g.
            ``{'round_number': ['Round number must be 1 or 2']}``.
    """

    def __init__(self, errors):
        self.errors = errors
        super().__init__("Validation failed")


class DuplicateCollectionError(CollectionsServiceError):
    """A collection already exists for this date, round, and location."""
    pass


class CollectionNotFoundError(CollectionsServiceError):
    """Collection does not exist."""
    pass


class MalformedCollectionInputError(CollectionsServiceError):
    """Request input is structurally invalid (e.g. non-numeric ID)."""
    pass
