"""
Trash Repository Helpers

Discard and restore model instances, and run the usual read operations
restricted to discarded or kept rows. Every function takes the DataStore
first, the way service functions take the database session:

    post = get_kept_or_raise(store, Post, 1)
    result = discard(store, post)

`TrashRepo` binds a store once and exposes the same operations as methods.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from .changeset import Changeset, Err, Ok, Result, as_changeset
from .datastore import DataStore
from .errors import ConfigurationError, InvalidChangesetError
from .query import Queryable, where_discarded, where_kept

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


# ============================================================================
# Reads
# ============================================================================


def all_discarded(store: DataStore, queryable: Queryable, **options: Any) -> List[Any]:
    """Fetch all discarded rows matching the query"""
    return store.all(where_discarded(queryable), **options)


def all_kept(store: DataStore, queryable: Queryable, **options: Any) -> List[Any]:
    """Fetch all kept rows matching the query"""
    return store.all(where_kept(queryable), **options)


def exists_discarded(store: DataStore, queryable: Queryable, **options: Any) -> bool:
    """Check whether any discarded row matches the query"""
    return store.exists(where_discarded(queryable), **options)


def exists_kept(store: DataStore, queryable: Queryable, **options: Any) -> bool:
    """Check whether any kept row matches the query"""
    return store.exists(where_kept(queryable), **options)


def get_discarded(store: DataStore, queryable: Queryable, id: Any, **options: Any) -> Optional[Any]:
    """
    Fetch a discarded row by primary key.

    Returns None when no discarded row has that id, including when the row
    exists but is kept.
    """
    return store.get(where_discarded(queryable), id, **options)


def get_discarded_or_raise(store: DataStore, queryable: Queryable, id: Any, **options: Any) -> Any:
    """Like get_discarded, but raises NotFoundError when nothing matches"""
    return store.get_or_raise(where_discarded(queryable), id, **options)


def get_kept(store: DataStore, queryable: Queryable, id: Any, **options: Any) -> Optional[Any]:
    """Fetch a kept row by primary key, None if missing or discarded"""
    return store.get(where_kept(queryable), id, **options)


def get_kept_or_raise(store: DataStore, queryable: Queryable, id: Any, **options: Any) -> Any:
    """Like get_kept, but raises NotFoundError when nothing matches"""
    return store.get_or_raise(where_kept(queryable), id, **options)


def get_discarded_by(
    store: DataStore, queryable: Queryable, clauses: Mapping[str, Any], **options: Any
) -> Optional[Any]:
    """
    Fetch a single discarded row matching the clauses.

    Args:
        store: Data store executing the query
        queryable: Mapped class, select() or Query to start from
        clauses: Column names and values to match
        options: Passed through to the store

    Returns:
        The row, or None. Raises MultipleResultsError when more than one
        row matches.
    """
    return store.get_by(where_discarded(queryable), clauses, **options)


def get_discarded_by_or_raise(
    store: DataStore, queryable: Queryable, clauses: Mapping[str, Any], **options: Any
) -> Any:
    """Like get_discarded_by, but raises NotFoundError when nothing matches"""
    return store.get_by_or_raise(where_discarded(queryable), clauses, **options)


def get_kept_by(store: DataStore, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Optional[Any]:
    """Fetch a single kept row matching the clauses"""
    return store.get_by(where_kept(queryable), clauses, **options)


def get_kept_by_or_raise(store: DataStore, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Any:
    """Like get_kept_by, but raises NotFoundError when nothing matches"""
    return store.get_by_or_raise(where_kept(queryable), clauses, **options)


def one_discarded(store: DataStore, queryable: Queryable, **options: Any) -> Optional[Any]:
    """Fetch the single discarded row the query returns, or None"""
    return store.one(where_discarded(queryable), **options)


def one_discarded_or_raise(store: DataStore, queryable: Queryable, **options: Any) -> Any:
    return store.one_or_raise(where_discarded(queryable), **options)


def one_kept(store: DataStore, queryable: Queryable, **options: Any) -> Optional[Any]:
    """Fetch the single kept row the query returns, or None"""
    return store.one(where_kept(queryable), **options)


def one_kept_or_raise(store: DataStore, queryable: Queryable, **options: Any) -> Any:
    return store.one_or_raise(where_kept(queryable), **options)


# ============================================================================
# Discard / Restore
# ============================================================================


def _commit(store: DataStore, action: str, changeset: Changeset) -> Result:
    logger.debug("Committing %s for %s", action, type(changeset.data).__name__)
    result = store.update(changeset)
    if isinstance(result, Ok):
        logger.info(f"{action.capitalize()} succeeded for {type(result.value).__name__}")
    return result


def _unwrap(action: str, result: Result) -> Any:
    if isinstance(result, Err):
        raise InvalidChangesetError(action, result.changeset)
    return result.value


def discard(store: DataStore, intent: Any) -> Result:
    """
    Mark a row as discarded.

    Accepts a model instance or a Changeset. A bare instance gets an empty
    changeset first. `discarded_at` is set to the current UTC time truncated
    to seconds, alongside any changes already pending, and the changeset is
    committed with store.update().

    Args:
        store: Data store committing the change
        intent: Model instance or Changeset

    Returns:
        Ok(instance) on success, Err(changeset) when validation fails
    """
    changeset = as_changeset(intent).put_change("discarded_at", _now())
    return _commit(store, "discard", changeset)


def discard_or_raise(store: DataStore, intent: Any) -> Any:
    """
    Mark a row as discarded, raising InvalidChangesetError if rejected.

    A bare model instance only fails if the model's own validation rejects it.
    """
    return _unwrap("discard", discard(store, intent))


def restore(store: DataStore, intent: Any) -> Result:
    """
    Mark a row as kept again by clearing `discarded_at`.

    Same inputs and results as discard().
    """
    changeset = as_changeset(intent).put_change("discarded_at", None)
    return _commit(store, "restore", changeset)


def restore_or_raise(store: DataStore, intent: Any) -> Any:
    """Restore a row, raising InvalidChangesetError if rejected"""
    return _unwrap("restore", restore(store, intent))


# ============================================================================
# Bound repository
# ============================================================================


class TrashRepo:
    """
    Trash operations bound to a single DataStore.

        repo = TrashRepo(SessionDataStore(db))
        repo.all_discarded(Post)
    """

    def __init__(self, store: Optional[DataStore]):
        if store is None:
            raise ConfigurationError()
        self.store = store

    def all_discarded(self, queryable: Queryable, **options: Any) -> List[Any]:
        return all_discarded(self.store, queryable, **options)

    def all_kept(self, queryable: Queryable, **options: Any) -> List[Any]:
        return all_kept(self.store, queryable, **options)

    def exists_discarded(self, queryable: Queryable, **options: Any) -> bool:
        return exists_discarded(self.store, queryable, **options)

    def exists_kept(self, queryable: Queryable, **options: Any) -> bool:
        return exists_kept(self.store, queryable, **options)

    def get_discarded(self, queryable: Queryable, id: Any, **options: Any) -> Optional[Any]:
        return get_discarded(self.store, queryable, id, **options)

    def get_discarded_or_raise(self, queryable: Queryable, id: Any, **options: Any) -> Any:
        return get_discarded_or_raise(self.store, queryable, id, **options)

    def get_kept(self, queryable: Queryable, id: Any, **options: Any) -> Optional[Any]:
        return get_kept(self.store, queryable, id, **options)

    def get_kept_or_raise(self, queryable: Queryable, id: Any, **options: Any) -> Any:
        return get_kept_or_raise(self.store, queryable, id, **options)

    def get_discarded_by(self, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Optional[Any]:
        return get_discarded_by(self.store, queryable, clauses, **options)

    def get_discarded_by_or_raise(self, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Any:
        return get_discarded_by_or_raise(self.store, queryable, clauses, **options)

    def get_kept_by(self, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Optional[Any]:
        return get_kept_by(self.store, queryable, clauses, **options)

    def get_kept_by_or_raise(self, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Any:
        return get_kept_by_or_raise(self.store, queryable, clauses, **options)

    def one_discarded(self, queryable: Queryable, **options: Any) -> Optional[Any]:
        return one_discarded(self.store, queryable, **options)

    def one_discarded_or_raise(self, queryable: Queryable, **options: Any) -> Any:
        return one_discarded_or_raise(self.store, queryable, **options)

    def one_kept(self, queryable: Queryable, **options: Any) -> Optional[Any]:
        return one_kept(self.store, queryable, **options)

    def one_kept_or_raise(self, queryable: Queryable, **options: Any) -> Any:
        return one_kept_or_raise(self.store, queryable, **options)

    def discard(self, intent: Any) -> Result:
        return discard(self.store, intent)

    def discard_or_raise(self, intent: Any) -> Any:
        return discard_or_raise(self.store, intent)

    def restore(self, intent: Any) -> Result:
        return restore(self.store, intent)

    def restore_or_raise(self, intent: Any) -> Any:
        return restore_or_raise(self.store, intent)
