from __future__ import annotations

from pydantic import Field

from resume_studio.schemas.resume import WireModel


class GenerateResumeRequest(WireModel):
    job_role: str = Field(min_length=1, description="Target job role")
    experience_level: str = Field(min_length=1, description="e.g. Junior, Mid, Senior")
    skills: str | None = Field(default=None, description="Skills to highlight")
    current_education: str | None = Field(default=None, description="Current education")
    projects_context: str | None = Field(default=None, description="Projects to mention")
