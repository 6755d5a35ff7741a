"""
Trash Query Helpers

Adds soft delete predicates and the computed `discarded` projection to
SQLAlchemy queries. Accepts a mapped class, a `select()` statement or a legacy
`Query`, and returns the same kind of object (a mapped class becomes
`select(cls)`). Nothing here executes SQL.
"""

from typing import Any, Union

from sqlalchemy import inspect, select
from sqlalchemy.orm import Query, undefer, with_expression
from sqlalchemy.sql.expression import Select

from .schema import trashable_fields

Queryable = Union[type, Select, Query]


def to_select(queryable: Queryable) -> Union[Select, Query]:
    """Normalize a queryable into a statement that supports where()/options()"""
    if isinstance(queryable, (Select, Query)):
        return queryable
    if isinstance(queryable, type):
        # raises NoInspectionAvailable for classes that are not mapped
        inspect(queryable)
        return select(queryable)
    raise TypeError(f"expected a mapped class, Select or Query, got {type(queryable).__name__}")


def primary_entity(queryable: Queryable) -> type:
    """Return the mapped class the queryable selects from"""
    if isinstance(queryable, type):
        return queryable

    descriptions = queryable.column_descriptions
    entity = descriptions[0].get("entity") if descriptions else None
    if entity is None:
        raise TypeError("queryable does not select from a mapped entity")
    return entity


def _trashable_entity(queryable: Queryable) -> Any:
    entity = primary_entity(queryable)
    missing = [name for name in trashable_fields() if not hasattr(entity, name)]
    if missing:
        raise TypeError(f"{entity.__name__} is missing trashable fields: {', '.join(missing)}")
    return entity


def where_discarded(queryable: Queryable) -> Union[Select, Query]:
    """
    Filter to discarded rows.

    Adds `discarded_at IS NOT NULL`, combined with any existing criteria
    using AND.
    """
    entity = _trashable_entity(queryable)
    return to_select(queryable).where(entity.discarded_at.is_not(None))


def where_kept(queryable: Queryable) -> Union[Select, Query]:
    """
    Filter to kept rows.

    Adds `discarded_at IS NULL`, combined with any existing criteria using AND.
    """
    entity = _trashable_entity(queryable)
    return to_select(queryable).where(entity.discarded_at.is_(None))


def select_trashable(queryable: Queryable) -> Union[Select, Query]:
    """
    Load both trashable fields along with the rest of the row.

    `discarded_at` is undeferred in case a load_only() left it out, and
    `discarded` is computed in SQL as `discarded_at IS NOT NULL`. Existing
    loader options are kept. Rows already in the session are repopulated,
    otherwise the identity map would hand back objects without the computed
    value.
    """
    entity = _trashable_entity(queryable)
    return (
        to_select(queryable)
        .options(
            undefer(entity.discarded_at),
            with_expression(entity.discarded, entity.discarded_at.is_not(None)),
        )
        .execution_options(populate_existing=True)
    )
