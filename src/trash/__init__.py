"""
Trash

Soft deletes for SQLAlchemy models: update a timestamp instead of issuing a
SQL DELETE, then query for discarded or kept rows and restore them.

Terminology:
    soft-deletion: removing a row by updating an attribute instead of deleting it
    discarded: a row that has been soft deleted
    kept: a row that has not been soft deleted
    restore: reverse a soft deletion to keep a row
"""

from .changeset import Changeset, Err, Ok, Result
from .datastore import DataStore, SessionDataStore
from .errors import (
    ConfigurationError,
    InvalidChangesetError,
    MultipleResultsError,
    NotFoundError,
    TrashError,
)
from .query import select_trashable, where_discarded, where_kept
from .repo import TrashRepo, discard, discard_or_raise, restore, restore_or_raise
from .schema import Trashable, trashable_fields

__all__ = [
    "Changeset",
    "ConfigurationError",
    "DataStore",
    "Err",
    "InvalidChangesetError",
    "MultipleResultsError",
    "NotFoundError",
    "Ok",
    "Result",
    "SessionDataStore",
    "Trashable",
    "TrashError",
    "TrashRepo",
    "discard",
    "discard_or_raise",
    "restore",
    "restore_or_raise",
    "select_trashable",
    "trashable_fields",
    "where_discarded",
    "where_kept",
]
