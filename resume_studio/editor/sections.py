from __future__ import annotations

import uuid
from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from resume_studio.errors import ValidationFailure, first_validation_message
from resume_studio.schemas.document import DocumentModel

EntryT = TypeVar("EntryT", bound=DocumentModel)


def _new_key() -> str:
    return uuid.uuid4().hex


class SectionEditor(Generic[EntryT]):
    """
    Ordered collection of repeated entries (experience, education).

    Entries are addressed by position. Each entry also carries an ephemeral
    key for stable rendering; keys live only here and are never part of the
    document returned by ``values()``.
    """

    def __init__(self, name: str, entry_type: type[EntryT], entries: list[EntryT] | None = None):
        self.name = name
        self.entry_type = entry_type
        self._entries: list[EntryT] = []
        self._keys: list[str] = []
        self.replace(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EntryT]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> EntryT:
        return self._entries[index]

    @property
    def keys(self) -> list[str]:
        return list(self._keys)

    def values(self) -> list[EntryT]:
        return [entry.model_copy(deep=True) for entry in self._entries]

    def replace(self, entries: list[EntryT]) -> None:
        self._entries = [self._coerce(entry) for entry in entries]
        self._keys = [_new_key() for _ in self._entries]

    def append(self, default: EntryT | dict | None = None) -> str:
        """Add an entry at the end and return its key."""
        entry = self._coerce(default if default is not None else self.entry_type())
        key = _new_key()
        self._entries.append(entry)
        self._keys.append(key)
        return key

    def remove(self, index: int) -> None:
        self._check_index(index)
        del self._entries[index]
        del self._keys[index]

    def update(self, index: int, field: str, value: Any) -> None:
        self._check_index(index)
        attr = self.entry_type.resolve_field(field)
        path = f"{self.name}.{index}.{field}"
        if attr is None:
            raise ValidationFailure("Unknown field", field=path)
        try:
            setattr(self._entries[index], attr, value)
        except ValidationError as e:
            _, message = first_validation_message(e.errors())
            raise ValidationFailure(message, field=path) from e

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise IndexError(f"{self.name} has no entry at index {index}")

    def _coerce(self, entry: EntryT | dict) -> EntryT:
        if isinstance(entry, self.entry_type):
            return entry.model_copy(deep=True)
        try:
            return self.entry_type.model_validate(entry)
        except ValidationError as e:
            field, message = first_validation_message(e.errors())
            raise ValidationFailure(message, field=f"{self.name}.{field}" if field else self.name) from e
