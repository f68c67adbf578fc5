from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from resume_studio.editor.session import EditorSession
from resume_studio.preview.printing import ExportArtifact
from resume_studio.schemas.document import ResumeDocument
from resume_studio.schemas.resume import WireModel


class OpenEditorRequest(WireModel):
    resume_id: int = Field(description="Résumé to open")
    address: str | None = Field(
        default=None,
        description="Address the editor was opened at, e.g. /editor/3?download=true",
    )


class EditorCommand(WireModel):
    op: Literal["append", "remove", "set"]
    section: str | None = Field(default=None, description="experience or education")
    index: int | None = Field(default=None, description="Entry position for remove")
    path: str | None = Field(default=None, description="Dotted field path for set, e.g. experience.0.role")
    value: Any = None
    entry: dict[str, Any] | None = Field(default=None, description="Initial values for append")


class ExportInfo(WireModel):
    filename: str
    media_type: str
    content: str

    @classmethod
    def from_artifact(cls, artifact: ExportArtifact) -> ExportInfo:
        return cls(
            filename=artifact.filename,
            media_type=artifact.media_type,
            content=artifact.content.decode("utf-8"),
        )


class SectionKeys(WireModel):
    experience: list[str] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)


class EditorSessionView(WireModel):
    session_id: str
    resume_id: int
    title: str
    address: str
    values: ResumeDocument
    skills_text: str
    keys: SectionKeys
    preview: str
    pending: list[str] = Field(default_factory=list)
    unsaved_changes: bool = False
    export: ExportInfo | None = None

    @classmethod
    def from_session(
        cls,
        session: EditorSession,
        address: str | None = None,
        artifact: ExportArtifact | None = None,
    ) -> EditorSessionView:
        return cls(
            session_id=session.id,
            resume_id=session.resume_id,
            title=session.title,
            address=address or f"/editor/{session.resume_id}",
            values=session.values(),
            skills_text=session.form.skills_text,
            keys=SectionKeys(
                experience=session.form.experience.keys,
                education=session.form.education.keys,
            ),
            preview=session.preview(),
            pending=sorted(op for op in ("load", "save", "export") if session.is_pending(op)),
            unsaved_changes=session.has_unsaved_changes,
            export=ExportInfo.from_artifact(artifact) if artifact else None,
        )
