"""Skills are edited as one comma-separated text field."""

from __future__ import annotations

SEPARATOR = ","


def parse_skills(text: str) -> list[str]:
    """Split on commas, trim each piece, drop empty pieces."""
    return [piece.strip() for piece in text.split(SEPARATOR) if piece.strip()]


def format_skills(skills: list[str]) -> str:
    return SEPARATOR.join(skills)
