from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from resume_studio.schemas.document import ResumeDocument


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Resume(WireModel):
    id: int
    user_id: int = Field(description="Owner, fixed at creation")
    title: str
    content: ResumeDocument = Field(default_factory=ResumeDocument)
    is_ai_generated: bool = False
    created_at: datetime
    updated_at: datetime


class ResumeCreate(WireModel):
    title: str = Field(min_length=1, description="Résumé title, also names exported files")
    content: ResumeDocument = Field(default_factory=ResumeDocument)
    is_ai_generated: bool = False


class ResumeUpdate(WireModel):
    """Full-document replacement. ``content`` replaces the stored document wholesale."""

    title: str | None = Field(default=None, min_length=1)
    content: ResumeDocument | None = None


class User(WireModel):
    id: int
    username: str
    name: str = ""


class UserRecord(User):
    password: str = Field(description="Salted password hash, never sent to clients")

    def public(self) -> User:
        return User(id=self.id, username=self.username, name=self.name)


class Credentials(WireModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class Registration(Credentials):
    name: str = ""
