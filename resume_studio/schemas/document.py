from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base for résumé content: camelCase on the wire, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    @classmethod
    def resolve_field(cls, name: str) -> str | None:
        """Map a wire name (``startDate``) or attribute name to the attribute name."""
        if name in cls.model_fields:
            return name
        for attr, info in cls.model_fields.items():
            if info.alias == name:
                return attr
        return None


class PersonalInfo(DocumentModel):
    full_name: str = Field(default="", description="Full name")
    email: str = Field(default="", description="Email address")
    phone: str = Field(default="", description="Phone number")
    bio: str = Field(default="", description="Professional title or short bio")
    linkedin: str = Field(default="", description="LinkedIn URL")
    github: str = Field(default="", description="GitHub URL")
    location: str = Field(default="", description="City, country")


class ExperienceEntry(DocumentModel):
    role: str = Field(default="", description="Job title")
    company: str = Field(default="", description="Company name")
    start_date: str = Field(default="", description="Start date, free text (e.g. 2020-01)")
    end_date: str = Field(default="", description="End date, free text or 'Present'")
    description: str = Field(default="", description="Responsibilities, one bullet per line")
    current: bool = Field(default=False, description="Still working here")


class EducationEntry(DocumentModel):
    school: str = Field(default="", description="School or university")
    degree: str = Field(default="", description="Degree or major")
    start_date: str = Field(default="", description="Start date")
    end_date: str = Field(default="", description="End date")


class ProjectEntry(DocumentModel):
    name: str = Field(default="", description="Project name")
    description: str = Field(default="", description="What the project does")
    link: str = Field(default="", description="Project URL")
    tech_stack: list[str] = Field(default_factory=list, description="Technologies used")


class ResumeDocument(DocumentModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> ResumeDocument:
        return cls()

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
