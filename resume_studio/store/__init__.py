from __future__ import annotations

from pathlib import Path

from resume_studio.store.base import BaseStorage
from resume_studio.store.memory import MemoryStorage
from resume_studio.store.sqlite import SqliteStorage

MEMORY = "memory"


def open_storage(database_path: str) -> BaseStorage:
    """``memory`` selects the in-process store; anything else is a SQLite file path."""
    if database_path == MEMORY:
        return MemoryStorage()
    return SqliteStorage(Path(database_path))


__all__ = ["BaseStorage", "MemoryStorage", "SqliteStorage", "open_storage"]
