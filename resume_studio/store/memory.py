from __future__ import annotations

import itertools
import threading

from resume_studio.schemas.document import ResumeDocument
from resume_studio.schemas.resume import Resume, UserRecord
from resume_studio.store.base import BaseStorage, utcnow


class MemoryStorage(BaseStorage):
    name = "memory"

    def __init__(self):
        self._users: dict[int, UserRecord] = {}
        self._resumes: dict[int, Resume] = {}
        self._user_ids = itertools.count(1)
        self._resume_ids = itertools.count(1)
        self._lock = threading.Lock()

    def get_user(self, user_id: int) -> UserRecord | None:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> UserRecord | None:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy()
        return None

    def create_user(self, username: str, password: str, name: str = "") -> UserRecord:
        with self._lock:
            if any(u.username == username for u in self._users.values()):
                raise ValueError(f"Username '{username}' already exists")
            user = UserRecord(id=next(self._user_ids), username=username, password=password, name=name)
            self._users[user.id] = user
        return user.model_copy()

    def get_resume(self, resume_id: int) -> Resume | None:
        resume = self._resumes.get(resume_id)
        return resume.model_copy(deep=True) if resume else None

    def list_resumes(self, user_id: int) -> list[Resume]:
        return [
            r.model_copy(deep=True)
            for r in sorted(self._resumes.values(), key=lambda r: r.id)
            if r.user_id == user_id
        ]

    def create_resume(
        self,
        user_id: int,
        title: str,
        content: ResumeDocument,
        is_ai_generated: bool = False,
    ) -> Resume:
        now = utcnow()
        with self._lock:
            resume = Resume(
                id=next(self._resume_ids),
                user_id=user_id,
                title=title,
                content=content.model_copy(deep=True),
                is_ai_generated=is_ai_generated,
                created_at=now,
                updated_at=now,
            )
            self._resumes[resume.id] = resume
        return resume.model_copy(deep=True)

    def replace_resume(
        self,
        resume_id: int,
        content: ResumeDocument | None = None,
        title: str | None = None,
    ) -> Resume | None:
        with self._lock:
            existing = self._resumes.get(resume_id)
            if existing is None:
                return None
            update: dict = {"updated_at": utcnow()}
            if content is not None:
                update["content"] = content.model_copy(deep=True)
            if title is not None:
                update["title"] = title
            replaced = existing.model_copy(update=update, deep=True)
            self._resumes[resume_id] = replaced
        return replaced.model_copy(deep=True)

    def delete_resume(self, resume_id: int) -> bool:
        with self._lock:
            return self._resumes.pop(resume_id, None) is not None
