"""
Trashable Schema Fields

Declarative mixin adding the columns a model needs to be soft deleted.

    class Post(Base, Trashable):
        __tablename__ = "posts"

        id = Column(Integer, primary_key=True)
        title = Column(String(255))
"""

from typing import Tuple

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declared_attr, query_expression


def trashable_fields() -> Tuple[str, str]:
    """Names of the fields added by Trashable"""
    return ("discarded_at", "discarded")


class Trashable:
    """
    Mixin for soft deletable models.

    Fields:
        discarded_at: timestamp of the soft delete, NULL while the row is kept
        discarded: computed boolean, not stored in the table

    `discarded` stays None on normally loaded rows. Use
    `trash.query.select_trashable` to fill it from `discarded_at IS NOT NULL`.
    """

    discarded_at = Column(DateTime(timezone=True), nullable=True, default=None, index=True)

    @declared_attr
    def discarded(cls):
        return query_expression()

    @property
    def is_discarded(self) -> bool:
        """Check the loaded timestamp without hitting the database"""
        return self.discarded_at is not None
