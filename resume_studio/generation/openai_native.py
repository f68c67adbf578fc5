from __future__ import annotations

import asyncio

from openai import OpenAI

from resume_studio.generation.base import BaseGeneratorAdapter, GenerationResult
from resume_studio.generation.registry import GeneratorRegistry


@GeneratorRegistry.register("openai")
class OpenAINativeAdapter(BaseGeneratorAdapter):
    """Plain chat completion against any OpenAI-compatible endpoint (Groq by default)."""

    async def complete(self, system_prompt: str, user_prompt: str) -> GenerationResult:
        client = OpenAI(base_url=self.base_url, api_key=self.api_key)

        def _call():
            return client.chat.completions.create(
                model=self.model,
                messages=self.messages(system_prompt, user_prompt),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )

        completion = await asyncio.to_thread(_call)
        content = completion.choices[0].message.content if completion.choices else None

        if content:
            return GenerationResult(success=True, text=content)
        return GenerationResult(success=False, error="Empty completion")
