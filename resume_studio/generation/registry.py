"""Generator adapters by name. The ``generator_framework`` setting picks one."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resume_studio.config import Settings
    from resume_studio.generation.base import BaseGeneratorAdapter


class GeneratorRegistry:
    _adapters: dict[str, type[BaseGeneratorAdapter]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[BaseGeneratorAdapter]], type[BaseGeneratorAdapter]]:
        def add(adapter_cls: type[BaseGeneratorAdapter]) -> type[BaseGeneratorAdapter]:
            adapter_cls.name = name
            cls._adapters[name] = adapter_cls
            return adapter_cls

        return add

    @classmethod
    def names(cls) -> list[str]:
        return sorted(cls._adapters)

    @classmethod
    def build(cls, settings: Settings) -> BaseGeneratorAdapter:
        """Instantiate the configured adapter against the configured endpoint."""
        adapter_cls = cls._adapters.get(settings.generator_framework)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown generator_framework {settings.generator_framework!r}; "
                f"choose one of: {', '.join(cls.names())}"
            )
        return adapter_cls(
            model=settings.default_model,
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_tokens,
        )
