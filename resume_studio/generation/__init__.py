# Importing the adapter modules registers them.
from resume_studio.generation import instructor_fw, langchain_fw, openai_native  # noqa: F401
from resume_studio.generation.base import BaseGeneratorAdapter, GenerationResult
from resume_studio.generation.drafts import DraftGenerator, parse_draft
from resume_studio.generation.registry import GeneratorRegistry

__all__ = [
    "BaseGeneratorAdapter",
    "DraftGenerator",
    "GenerationResult",
    "GeneratorRegistry",
    "parse_draft",
]
