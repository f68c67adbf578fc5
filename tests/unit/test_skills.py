"""Unit tests for the comma-separated skills field."""

import pytest

from resume_studio.editor.skills import format_skills, parse_skills


@pytest.mark.unit
def test_parse_drops_empty_pieces_and_whitespace():
    """Test that blank pieces and surrounding whitespace are removed."""
    assert parse_skills("React, , TypeScript ,") == ["React", "TypeScript"]


@pytest.mark.unit
def test_parse_empty_text():
    assert parse_skills("") == []
    assert parse_skills(" , ,, ") == []


@pytest.mark.unit
def test_parse_keeps_order_and_inner_spaces():
    assert parse_skills("Node.js,Machine Learning ,  SQL") == ["Node.js", "Machine Learning", "SQL"]


@pytest.mark.unit
def test_format_joins_with_comma():
    assert format_skills(["React", "TypeScript"]) == "React,TypeScript"
    assert format_skills([]) == ""


@pytest.mark.unit
def test_trailing_comma_is_not_kept():
    """Test that an in-progress trailing comma does not survive a write/read cycle."""
    assert format_skills(parse_skills("React,")) == "React"
