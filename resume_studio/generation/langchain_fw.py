from __future__ import annotations

from langchain_openai import ChatOpenAI

from resume_studio.generation.base import BaseGeneratorAdapter, GenerationResult
from resume_studio.generation.registry import GeneratorRegistry


@GeneratorRegistry.register("langchain")
class LangChainAdapter(BaseGeneratorAdapter):
    async def complete(self, system_prompt: str, user_prompt: str) -> GenerationResult:
        llm = ChatOpenAI(
            model=self.model,
            base_url=self.base_url,
            api_key=self.api_key,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        message = await llm.ainvoke(self.messages(system_prompt, user_prompt))
        content = message.content if isinstance(message.content, str) else ""

        if content:
            return GenerationResult(success=True, text=content)
        return GenerationResult(success=False, error="Empty completion")
