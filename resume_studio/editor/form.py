"""
Working copy of a résumé document while it is being edited.

Values are addressed with dotted paths in wire form, the same names the
persisted JSON uses: ``personalInfo.fullName``, ``experience.0.role``,
``education.1.school``, ``skills``.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from resume_studio.editor.sections import SectionEditor
from resume_studio.editor.skills import format_skills, parse_skills
from resume_studio.errors import ValidationFailure, first_validation_message
from resume_studio.schemas.document import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    ResumeDocument,
)

PERSONAL_INFO = "personalInfo"
EXPERIENCE = "experience"
EDUCATION = "education"
SKILLS = "skills"


class ResumeForm:
    def __init__(self, document: ResumeDocument | None = None):
        self.personal_info = PersonalInfo()
        self.experience: SectionEditor[ExperienceEntry] = SectionEditor(EXPERIENCE, ExperienceEntry)
        self.education: SectionEditor[EducationEntry] = SectionEditor(EDUCATION, EducationEntry)
        self.skills: list[str] = []
        # Not editable here; carried through so a save does not drop them.
        self.projects: list[ProjectEntry] = []
        self.reset(document or ResumeDocument.empty())

    def section(self, name: str) -> SectionEditor:
        if name == EXPERIENCE:
            return self.experience
        if name == EDUCATION:
            return self.education
        raise ValidationFailure("Unknown section", field=name)

    def reset(self, document: ResumeDocument) -> None:
        """Replace the whole working copy, discarding any unsaved edits."""
        document = document.model_copy(deep=True)
        self.personal_info = document.personal_info
        self.experience.replace(document.experience)
        self.education.replace(document.education)
        self.skills = list(document.skills)
        self.projects = list(document.projects)

    def get_values(self) -> ResumeDocument:
        return ResumeDocument(
            personal_info=self.personal_info.model_copy(),
            experience=self.experience.values(),
            education=self.education.values(),
            skills=list(self.skills),
            projects=[p.model_copy(deep=True) for p in self.projects],
        )

    @property
    def skills_text(self) -> str:
        return format_skills(self.skills)

    def set_skills_text(self, text: str) -> None:
        self.skills = parse_skills(text)

    def set_value(self, path: str, value: Any) -> None:
        parts = path.split(".")
        head = parts[0]

        if head == PERSONAL_INFO and len(parts) == 2:
            self._set_personal_info(parts[1], value, path)
        elif head in (EXPERIENCE, EDUCATION) and len(parts) == 3:
            try:
                index = int(parts[1])
            except ValueError:
                raise ValidationFailure("Index must be an integer", field=path) from None
            self.section(head).update(index, parts[2], value)
        elif head == SKILLS and len(parts) == 1:
            self._set_skills(value, path)
        else:
            raise ValidationFailure("Unknown field", field=path)

    def _set_personal_info(self, field: str, value: Any, path: str) -> None:
        attr = PersonalInfo.resolve_field(field)
        if attr is None:
            raise ValidationFailure("Unknown field", field=path)
        try:
            setattr(self.personal_info, attr, value)
        except ValidationError as e:
            _, message = first_validation_message(e.errors())
            raise ValidationFailure(message, field=path) from e

    def _set_skills(self, value: Any, path: str) -> None:
        if isinstance(value, str):
            self.set_skills_text(value)
        elif isinstance(value, list) and all(isinstance(v, str) for v in value):
            self.set_skills_text(format_skills(value))
        else:
            raise ValidationFailure("Expected comma-separated text or a list of strings", field=path)
