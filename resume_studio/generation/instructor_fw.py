from __future__ import annotations

import instructor
from openai import AsyncOpenAI

from resume_studio.generation.base import BaseGeneratorAdapter, GenerationResult
from resume_studio.generation.registry import GeneratorRegistry
from resume_studio.schemas.document import ResumeDocument


@GeneratorRegistry.register("instructor")
class InstructorAdapter(BaseGeneratorAdapter):
    """Structured output: the draft comes back already shaped as a ResumeDocument."""

    async def complete(self, system_prompt: str, user_prompt: str) -> GenerationResult:
        client = instructor.from_openai(
            AsyncOpenAI(base_url=self.base_url, api_key=self.api_key),
            mode=instructor.Mode.JSON,
        )
        draft = await client.chat.completions.create(
            model=self.model,
            response_model=ResumeDocument,
            messages=self.messages(system_prompt, user_prompt),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return GenerationResult(success=True, text=draft.model_dump_json(by_alias=True))
