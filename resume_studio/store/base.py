from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone

from resume_studio.schemas.document import ResumeDocument
from resume_studio.schemas.resume import Resume, UserRecord


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseStorage(ABC):
    """
    Entity store for users and résumés.

    Résumé content is replaced wholesale on every write; there is no revision
    tracking, so concurrent writers resolve as last-write-wins. Returned
    objects are copies: mutating them never touches stored state.
    """

    name: str = ""

    @abstractmethod
    def get_user(self, user_id: int) -> UserRecord | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> UserRecord | None: ...

    @abstractmethod
    def create_user(self, username: str, password: str, name: str = "") -> UserRecord: ...

    @abstractmethod
    def get_resume(self, resume_id: int) -> Resume | None: ...

    @abstractmethod
    def list_resumes(self, user_id: int) -> list[Resume]: ...

    @abstractmethod
    def create_resume(
        self,
        user_id: int,
        title: str,
        content: ResumeDocument,
        is_ai_generated: bool = False,
    ) -> Resume: ...

    @abstractmethod
    def replace_resume(
        self,
        resume_id: int,
        content: ResumeDocument | None = None,
        title: str | None = None,
    ) -> Resume | None:
        """Overwrite content and/or title. Returns None when the id is unknown."""

    @abstractmethod
    def delete_resume(self, resume_id: int) -> bool: ...

    def close(self) -> None:
        pass
