"""Demo account and sample résumé for non-production environments."""

from __future__ import annotations

from loguru import logger

from resume_studio.auth import IdentityService
from resume_studio.persistence import ResumeService
from resume_studio.schemas.document import ResumeDocument

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo123"

SAMPLE_RESUME = {
    "personalInfo": {
        "fullName": "Demo User",
        "email": "demo@example.com",
        "phone": "+1 234 567 8900",
        "bio": "Experienced Software Engineer with a passion for building scalable applications.",
        "location": "San Francisco, CA",
    },
    "experience": [
        {
            "role": "Senior Developer",
            "company": "Tech Corp",
            "startDate": "2020-01",
            "endDate": "Present",
            "description": "• Led a team of 5 developers.\n• Architected microservices.",
            "current": True,
        }
    ],
    "education": [
        {
            "degree": "BS Computer Science",
            "school": "University of Tech",
            "startDate": "2015-09",
            "endDate": "2019-05",
        }
    ],
    "skills": ["React", "Node.js", "TypeScript", "PostgreSQL"],
    "projects": [
        {
            "name": "Resume Builder",
            "description": "An AI-powered resume builder app.",
            "link": "https://example.com",
        }
    ],
}


def seed_demo_data(identity: IdentityService, resumes: ResumeService) -> bool:
    """Create the demo user and its sample résumé unless the user already exists."""
    user, created = identity.ensure_user(DEMO_USERNAME, DEMO_PASSWORD, name="Demo User")
    if not created:
        return False
    resumes.create(user, "Sample Resume", ResumeDocument.model_validate(SAMPLE_RESUME))
    logger.info("Seeded demo user and resume")
    return True
