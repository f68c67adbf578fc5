"""
SQLite storage for users and résumés.

Résumé content is kept as a JSON text column in wire (camelCase) form, so a
row can be inspected or exported without going through the API.
"""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime
from pathlib import Path

from loguru import logger

from resume_studio.schemas.document import ResumeDocument
from resume_studio.schemas.resume import Resume, UserRecord
from resume_studio.store.base import BaseStorage, utcnow

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    name TEXT NOT NULL DEFAULT ''
);

CREATE TABLE IF NOT EXISTS resumes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id),
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    is_ai_generated INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_resumes_user_id ON resumes(user_id);
"""


class SqliteStorage(BaseStorage):
    """
    Single shared connection; writes are serialized with a lock.

    Args:
        db_path: Database file, created with its parent directory if missing
    """

    name = "sqlite"

    def __init__(self, db_path: Path):
        self.db_path = db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")
        self.conn.executescript(SCHEMA)
        self.conn.commit()
        self._lock = threading.Lock()
        logger.debug(f"Opened SQLite storage at {db_path}")

    # Users

    def get_user(self, user_id: int) -> UserRecord | None:
        row = self._fetchone("SELECT * FROM users WHERE id = ?", (user_id,))
        return UserRecord(**dict(row)) if row else None

    def get_user_by_username(self, username: str) -> UserRecord | None:
        row = self._fetchone("SELECT * FROM users WHERE username = ?", (username,))
        return UserRecord(**dict(row)) if row else None

    def create_user(self, username: str, password: str, name: str = "") -> UserRecord:
        with self._lock:
            try:
                cursor = self.conn.execute(
                    "INSERT INTO users (username, password, name) VALUES (?, ?, ?)",
                    (username, password, name),
                )
            except sqlite3.IntegrityError as e:
                raise ValueError(f"Username '{username}' already exists") from e
            self.conn.commit()
        return UserRecord(id=cursor.lastrowid, username=username, password=password, name=name)

    # Résumés

    def get_resume(self, resume_id: int) -> Resume | None:
        row = self._fetchone("SELECT * FROM resumes WHERE id = ?", (resume_id,))
        return self._to_resume(row) if row else None

    def list_resumes(self, user_id: int) -> list[Resume]:
        with self._lock:
            rows = self.conn.execute(
                "SELECT * FROM resumes WHERE user_id = ? ORDER BY id", (user_id,)
            ).fetchall()
        return [self._to_resume(row) for row in rows]

    def create_resume(
        self,
        user_id: int,
        title: str,
        content: ResumeDocument,
        is_ai_generated: bool = False,
    ) -> Resume:
        now = utcnow().isoformat()
        with self._lock:
            cursor = self.conn.execute(
                """
                INSERT INTO resumes (user_id, title, content, is_ai_generated, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (user_id, title, content.model_dump_json(by_alias=True), int(is_ai_generated), now, now),
            )
            self.conn.commit()
        return self.get_resume(cursor.lastrowid)

    def replace_resume(
        self,
        resume_id: int,
        content: ResumeDocument | None = None,
        title: str | None = None,
    ) -> Resume | None:
        assignments = ["updated_at = ?"]
        params: list = [utcnow().isoformat()]
        if content is not None:
            assignments.append("content = ?")
            params.append(content.model_dump_json(by_alias=True))
        if title is not None:
            assignments.append("title = ?")
            params.append(title)
        params.append(resume_id)

        with self._lock:
            cursor = self.conn.execute(
                f"UPDATE resumes SET {', '.join(assignments)} WHERE id = ?", tuple(params)
            )
            self.conn.commit()
        if cursor.rowcount == 0:
            return None
        return self.get_resume(resume_id)

    def delete_resume(self, resume_id: int) -> bool:
        with self._lock:
            cursor = self.conn.execute("DELETE FROM resumes WHERE id = ?", (resume_id,))
            self.conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        self.conn.close()

    def _fetchone(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        with self._lock:
            return self.conn.execute(sql, params).fetchone()

    @staticmethod
    def _to_resume(row: sqlite3.Row) -> Resume:
        return Resume(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            content=ResumeDocument.model_validate_json(row["content"]),
            is_ai_generated=bool(row["is_ai_generated"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
