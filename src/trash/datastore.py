"""
Data Stores

The persistence operations trash delegates to, and an implementation of them
on top of a SQLAlchemy Session.
"""

import logging
from dataclasses import replace
from typing import Any, List, Mapping, Optional, Protocol

from sqlalchemy import MetaData, and_, create_engine, inspect, select
from sqlalchemy.exc import MultipleResultsFound, NoResultFound, SQLAlchemyError
from sqlalchemy.orm import Query, Session, sessionmaker

from . import config
from .changeset import Changeset, Err, Ok, Result
from .errors import MultipleResultsError, NotFoundError
from .query import Queryable, primary_entity, to_select

logger = logging.getLogger(__name__)


class DataStore(Protocol):
    """Contract for the store that executes queries and commits changesets"""

    def all(self, queryable: Queryable, **options: Any) -> List[Any]: ...
    def exists(self, queryable: Queryable, **options: Any) -> bool: ...
    def get(self, queryable: Queryable, id: Any, **options: Any) -> Optional[Any]: ...
    def get_or_raise(self, queryable: Queryable, id: Any, **options: Any) -> Any: ...
    def get_by(self, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Optional[Any]: ...
    def get_by_or_raise(self, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Any: ...
    def one(self, queryable: Queryable, **options: Any) -> Optional[Any]: ...
    def one_or_raise(self, queryable: Queryable, **options: Any) -> Any: ...
    def update(self, changeset: Changeset) -> Result: ...


class SessionDataStore:
    """
    DataStore backed by a SQLAlchemy Session.

    Keyword options passed to the read methods are forwarded to
    `Session.execute` as execution options.
    """

    def __init__(self, session: Session):
        self.session = session

    @classmethod
    def from_url(cls, url: Optional[str] = None, metadata: Optional[MetaData] = None) -> "SessionDataStore":
        """
        Build a store with its own engine and session

        Args:
            url: Database URL, defaults to TRASH_DATABASE_URL
            metadata: Tables to create before returning, if given

        Returns:
            SessionDataStore bound to a new session
        """
        url = url or config.DATABASE_URL
        engine = create_engine(
            url,
            echo=config.SQL_ECHO,
            connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
        )
        if metadata is not None:
            try:
                metadata.create_all(bind=engine)
                logger.info("Database tables created successfully")
            except SQLAlchemyError as e:
                logger.error(f"Failed to create database tables: {e}")
                raise

        SessionLocal = sessionmaker(autoflush=False, bind=engine)
        return cls(SessionLocal())

    def _statement(self, queryable: Queryable):
        statement = to_select(queryable)
        if isinstance(statement, Query):
            return statement.statement
        return statement

    def _execute(self, statement, options: Mapping[str, Any]):
        return self.session.execute(statement, execution_options=dict(options))

    def _by_id(self, queryable: Queryable, id: Any):
        entity = primary_entity(queryable)
        # aliased entities inspect to an AliasedInsp, which exposes the mapper
        mapper = inspect(entity).mapper
        values = id if isinstance(id, tuple) else (id,)
        if len(values) != len(mapper.primary_key):
            raise ValueError(
                f"{mapper.class_.__name__} has {len(mapper.primary_key)} primary key column(s), "
                f"got {len(values)} value(s)"
            )
        if any(value is None for value in values):
            raise ValueError(f"cannot fetch {mapper.class_.__name__} by a None primary key")
        criteria = [
            getattr(entity, mapper.get_property_by_column(column).key) == value
            for column, value in zip(mapper.primary_key, values)
        ]
        return self._statement(queryable).where(and_(*criteria))

    def all(self, queryable: Queryable, **options: Any) -> List[Any]:
        return list(self._execute(self._statement(queryable), options).scalars().all())

    def exists(self, queryable: Queryable, **options: Any) -> bool:
        statement = select(self._statement(queryable).exists())
        return bool(self._execute(statement, options).scalar())

    def get(self, queryable: Queryable, id: Any, **options: Any) -> Optional[Any]:
        return self._one_or_none(self._by_id(queryable, id), options)

    def get_or_raise(self, queryable: Queryable, id: Any, **options: Any) -> Any:
        return self._one(self._by_id(queryable, id), options)

    def get_by(self, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Optional[Any]:
        return self._one_or_none(self._statement(queryable).filter_by(**clauses), options)

    def get_by_or_raise(self, queryable: Queryable, clauses: Mapping[str, Any], **options: Any) -> Any:
        return self._one(self._statement(queryable).filter_by(**clauses), options)

    def one(self, queryable: Queryable, **options: Any) -> Optional[Any]:
        return self._one_or_none(self._statement(queryable), options)

    def one_or_raise(self, queryable: Queryable, **options: Any) -> Any:
        return self._one(self._statement(queryable), options)

    def _one_or_none(self, statement, options: Mapping[str, Any]) -> Optional[Any]:
        try:
            return self._execute(statement, options).scalars().one_or_none()
        except MultipleResultsFound as e:
            raise MultipleResultsError(entity=statement.column_descriptions[0].get("entity")) from e

    def _one(self, statement, options: Mapping[str, Any]) -> Any:
        entity = statement.column_descriptions[0].get("entity")
        try:
            return self._execute(statement, options).scalars().one()
        except NoResultFound as e:
            raise NotFoundError(entity=entity) from e
        except MultipleResultsFound as e:
            raise MultipleResultsError(entity=entity) from e

    def update(self, changeset: Changeset) -> Result:
        """
        Commit a changeset.

        Invalid changesets are returned as Err without touching the database.
        Database errors roll the session back and propagate.
        """
        if not changeset.valid:
            logger.warning(
                "Rejected update for %s: %s",
                type(changeset.data).__name__,
                ", ".join(f"{field} {msg}" for field, msg in changeset.errors),
            )
            return Err(replace(changeset, action="update"))

        entity = changeset.apply_changes()
        try:
            self.session.add(entity)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to update {type(entity).__name__}: {e}")
            raise

        self.session.refresh(entity)
        return Ok(entity)
