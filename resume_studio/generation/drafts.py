"""
AI draft generation.

The provider is asked for JSON only. Its answer is accepted only when it
parses as a JSON object matching the résumé document shape; anything else
fails the whole request, never yielding a partial document.
"""

from __future__ import annotations

import json

from loguru import logger
from pydantic import ValidationError

from resume_studio.config import Settings
from resume_studio.errors import GenerationFailure, first_validation_message
from resume_studio.generation.base import BaseGeneratorAdapter
from resume_studio.generation.registry import GeneratorRegistry
from resume_studio.prompts.loader import PromptTemplate, load_prompt
from resume_studio.schemas.document import ResumeDocument
from resume_studio.schemas.generation import GenerateResumeRequest

PROMPT_NAME = "generate_resume"


def parse_draft(text: str | None) -> ResumeDocument:
    if not text or not text.strip():
        raise GenerationFailure(reason="empty response")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GenerationFailure(reason=f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise GenerationFailure(reason=f"expected a JSON object, got {type(data).__name__}")
    try:
        return ResumeDocument.model_validate(data)
    except ValidationError as e:
        field, message = first_validation_message(e.errors())
        raise GenerationFailure(reason=f"schema mismatch at {field}: {message}") from e


class DraftGenerator:
    def __init__(self, adapter: BaseGeneratorAdapter, prompt: PromptTemplate | None = None):
        self.adapter = adapter
        self.prompt = prompt or load_prompt(PROMPT_NAME)

    @classmethod
    def from_settings(cls, settings: Settings) -> DraftGenerator:
        return cls(GeneratorRegistry.build(settings))

    def build_prompt(self, request: GenerateResumeRequest) -> str:
        return self.prompt.render_user(
            job_role=request.job_role,
            experience_level=request.experience_level,
            skills=request.skills,
            current_education=request.current_education,
            projects_context=request.projects_context,
        )

    async def generate(self, request: GenerateResumeRequest) -> ResumeDocument:
        result = await self.adapter.run(self.prompt.system_prompt, self.build_prompt(request))
        if not result.success:
            logger.error(f"Draft generation failed ({result.framework}/{result.model}): {result.error}")
            raise GenerationFailure(reason=result.error)
        try:
            draft = parse_draft(result.text)
        except GenerationFailure as e:
            logger.error(f"Draft rejected ({result.framework}/{result.model}): {e.reason}")
            raise
        logger.info(
            f"Generated draft for '{request.job_role}' with {result.framework}/{result.model} "
            f"in {result.latency_ms:.0f}ms"
        )
        return draft
