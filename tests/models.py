"""
Test models
"""

from typing import Any, Dict

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import declarative_base

from trash import Changeset, Trashable

Base = declarative_base()


class Post(Base, Trashable):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255))
    author = Column(String(100))


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    body = Column(Text)


def post_changeset(post: Post, attrs: Dict[str, Any]) -> Changeset:
    """Changeset requiring an author"""
    return Changeset.cast(post, attrs, ["title", "author"]).validate_required("author")
