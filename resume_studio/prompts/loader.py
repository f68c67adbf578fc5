"""
Prompt templates kept as YAML files next to this module.

Each file holds a ``system_prompt``, a ``user_template`` with ``{field}``
placeholders, and ``defaults`` used for placeholders the caller leaves empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    system_prompt: str
    user_template: str
    defaults: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: Path) -> PromptTemplate:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        missing = [key for key in ("system_prompt", "user_template") if not data.get(key)]
        if missing:
            raise ValueError(f"Prompt file {path.name} is missing {', '.join(missing)}")
        return cls(
            name=data.get("name", path.stem),
            system_prompt=data["system_prompt"],
            user_template=data["user_template"],
            defaults={k: str(v) for k, v in (data.get("defaults") or {}).items()},
        )

    def render_user(self, **fields: str | None) -> str:
        values = {**self.defaults, **{k: v for k, v in fields.items() if v}}
        return self.user_template.format_map(values)


def list_prompts() -> list[str]:
    return sorted(p.stem for p in TEMPLATES_DIR.glob("*.yaml"))


@lru_cache(maxsize=None)
def load_prompt(name: str) -> PromptTemplate:
    path = TEMPLATES_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Prompt '{name}' not found. Available: {', '.join(list_prompts())}")
    return PromptTemplate.from_yaml(path)
