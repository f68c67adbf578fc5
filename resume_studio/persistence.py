"""
Persistence bridge between editors/routes and the entity store.

Every operation checks existence and ownership before touching the store.
Saves replace the stored document wholesale: there is no merge and no
concurrency token, so the last save wins.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from resume_studio.errors import Forbidden, NotFound
from resume_studio.schemas.document import ResumeDocument
from resume_studio.schemas.resume import Resume, User
from resume_studio.store.base import BaseStorage


class ResumeService:
    def __init__(self, storage: BaseStorage):
        self.storage = storage
        self._delete_listeners: list[Callable[[int], None]] = []

    def on_delete(self, listener: Callable[[int], None]) -> None:
        """Call ``listener(resume_id)`` after each successful delete."""
        self._delete_listeners.append(listener)

    def list_resumes(self, user: User) -> list[Resume]:
        return self.storage.list_resumes(user.id)

    def load(self, user: User, resume_id: int) -> Resume:
        resume = self.storage.get_resume(resume_id)
        if resume is None:
            raise NotFound(f"Resume {resume_id} not found")
        if resume.user_id != user.id:
            logger.warning(f"User {user.id} denied access to resume {resume_id}")
            raise Forbidden()
        return resume

    def create(
        self,
        user: User,
        title: str,
        document: ResumeDocument | None = None,
        is_ai_generated: bool = False,
    ) -> Resume:
        resume = self.storage.create_resume(
            user_id=user.id,
            title=title,
            content=document or ResumeDocument.empty(),
            is_ai_generated=is_ai_generated,
        )
        logger.info(f"Created resume {resume.id} '{title}' for user {user.id}")
        return resume

    def save(
        self,
        user: User,
        resume_id: int,
        document: ResumeDocument | None = None,
        title: str | None = None,
    ) -> Resume:
        self.load(user, resume_id)
        saved = self.storage.replace_resume(resume_id, content=document, title=title)
        if saved is None:
            # Deleted between the ownership check and the write.
            raise NotFound(f"Resume {resume_id} not found")
        logger.info(f"Saved resume {resume_id} for user {user.id}")
        return saved

    def delete(self, user: User, resume_id: int) -> None:
        self.load(user, resume_id)
        self.storage.delete_resume(resume_id)
        logger.info(f"Deleted resume {resume_id} for user {user.id}")
        for listener in self._delete_listeners:
            listener(resume_id)
