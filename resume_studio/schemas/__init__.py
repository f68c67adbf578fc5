from resume_studio.schemas.document import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    ResumeDocument,
)
from resume_studio.schemas.generation import GenerateResumeRequest
from resume_studio.schemas.resume import (
    Credentials,
    Registration,
    Resume,
    ResumeCreate,
    ResumeUpdate,
    User,
    UserRecord,
)

__all__ = [
    "Credentials",
    "EducationEntry",
    "ExperienceEntry",
    "GenerateResumeRequest",
    "PersonalInfo",
    "ProjectEntry",
    "Registration",
    "Resume",
    "ResumeCreate",
    "ResumeDocument",
    "ResumeUpdate",
    "User",
    "UserRecord",
]
