"""
Trash Errors

Exception hierarchy raised by the trash helpers and the bundled data store.
"""

from typing import Any, Optional


class TrashError(Exception):
    """Base exception for all trash errors"""

    def __init__(self, message: str = "Trash error"):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(TrashError):
    """Raised when a repository is built without a data store"""

    def __init__(self, message: str = "missing data store for TrashRepo"):
        super().__init__(message)


class InvalidChangesetError(TrashError):
    """
    Raised by the strict mutation helpers when the update is rejected.

    Carries the name of the action that failed and the rejected changeset,
    including every validation error it collected.
    """

    def __init__(self, action: str, changeset: Any):
        self.action = action
        self.changeset = changeset
        errors = ", ".join(f"{field} {msg}" for field, msg in changeset.errors)
        super().__init__(f"could not perform {action} because changeset is invalid: {errors}")


class NotFoundError(TrashError):
    """Raised when a query expected at least one result but got none"""

    def __init__(self, message: str = "expected at least one result but got none", entity: Optional[Any] = None):
        self.entity = entity
        super().__init__(message)


class MultipleResultsError(TrashError):
    """Raised when a query expected at most one result but got more"""

    def __init__(self, message: str = "expected at most one result but got more", entity: Optional[Any] = None):
        self.entity = entity
        super().__init__(message)
