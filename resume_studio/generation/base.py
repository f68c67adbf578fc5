from __future__ import annotations

import time
from abc import ABC, abstractmethod

from pydantic import BaseModel


class GenerationResult(BaseModel):
    success: bool
    text: str | None = None
    error: str | None = None
    latency_ms: float = 0.0
    framework: str = ""
    model: str = ""


class BaseGeneratorAdapter(ABC):
    name: str = ""

    def __init__(
        self,
        model: str,
        base_url: str | None = None,
        api_key: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 900,
    ):
        self.model = model
        self.base_url = base_url
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str) -> GenerationResult:
        """Return the raw answer text, expected to be a JSON document."""

    async def run(self, system_prompt: str, user_prompt: str) -> GenerationResult:
        start = time.perf_counter()
        try:
            result = await self.complete(system_prompt, user_prompt)
        except Exception as e:
            result = GenerationResult(success=False, error=str(e) or type(e).__name__)
        elapsed = (time.perf_counter() - start) * 1000
        result.latency_ms = elapsed
        result.framework = self.name
        result.model = self.model
        return result

    def messages(self, system_prompt: str, user_prompt: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
