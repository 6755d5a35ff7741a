"""
Changesets

A pending set of field changes against a model instance, plus the validation
errors collected for it. Nothing is written until a data store commits it.

    changeset = Changeset.cast(post, {"title": "Hello, Again"}, ["title", "author"])
    changeset = changeset.validate_required("author")
    changeset.valid  # False when post has no author
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

BLANK_MESSAGE = "can't be blank"


@dataclass(frozen=True)
class Changeset:
    """Immutable set of changes for a single model instance"""

    data: Any
    changes: Dict[str, Any] = field(default_factory=dict)
    errors: Tuple[Tuple[str, str], ...] = ()
    action: Optional[str] = None

    @classmethod
    def change(cls, data: Any, **changes: Any) -> "Changeset":
        """Start a changeset with the given changes and no validation"""
        return cls(data=data, changes=dict(changes))

    @classmethod
    def cast(cls, data: Any, attrs: Mapping[str, Any], permitted: Iterable[str]) -> "Changeset":
        """
        Build a changeset from untrusted attributes.

        Args:
            data: Model instance being changed
            attrs: Incoming attributes
            permitted: Field names allowed to change

        Returns:
            Changeset holding only permitted fields whose value differs
            from the current one
        """
        changes = {
            name: attrs[name]
            for name in permitted
            if name in attrs and getattr(data, name, None) != attrs[name]
        }
        return cls(data=data, changes=changes)

    @property
    def valid(self) -> bool:
        return not self.errors

    def get_field(self, name: str) -> Any:
        """Value of a field with pending changes applied"""
        if name in self.changes:
            return self.changes[name]
        return getattr(self.data, name, None)

    def put_change(self, name: str, value: Any) -> "Changeset":
        """Return a copy with one more change, keeping existing changes and errors"""
        return replace(self, changes={**self.changes, name: value})

    def add_error(self, name: str, message: str) -> "Changeset":
        return replace(self, errors=self.errors + ((name, message),))

    def validate_required(self, *names: str) -> "Changeset":
        """Add an error for every field that is missing or blank"""
        changeset = self
        for name in names:
            value = self.get_field(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                changeset = changeset.add_error(name, BLANK_MESSAGE)
        return changeset

    def apply_changes(self) -> Any:
        """Write pending changes onto the model instance and return it"""
        for name, value in self.changes.items():
            setattr(self.data, name, value)
        return self.data


@dataclass(frozen=True)
class Ok:
    """Successful update, holding the updated model instance"""

    value: Any


@dataclass(frozen=True)
class Err:
    """Rejected update, holding the changeset with its errors"""

    changeset: Changeset


Result = Union[Ok, Err]


def as_changeset(intent: Any) -> Changeset:
    """Use a changeset as is, or start an empty one for a bare model instance"""
    if isinstance(intent, Changeset):
        return intent
    return Changeset.change(intent)
