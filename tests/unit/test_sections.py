"""Unit tests for SectionEditor (repeated experience/education entries)."""

import pytest

from resume_studio.editor.sections import SectionEditor
from resume_studio.errors import ValidationFailure
from resume_studio.schemas.document import EducationEntry, ExperienceEntry


@pytest.fixture
def experience():
    return SectionEditor("experience", ExperienceEntry)


@pytest.mark.unit
def test_append_adds_default_entry_at_end(experience):
    experience.append({"role": "Engineer"})
    experience.append()

    assert len(experience) == 2
    assert experience[0].role == "Engineer"
    assert experience[1] == ExperienceEntry()


@pytest.mark.unit
def test_append_then_remove_restores_previous_list(experience):
    """Test that an append/remove pair on the same index is a no-op."""
    before = experience.values()
    experience.append(ExperienceEntry(role="Intern"))
    experience.remove(0)

    assert experience.values() == before
    assert experience.keys == []


@pytest.mark.unit
def test_remove_shifts_later_entries_down(experience):
    for role in ("A", "B", "C"):
        experience.append({"role": role})
    keys = experience.keys

    experience.remove(1)

    assert [e.role for e in experience] == ["A", "C"]
    assert experience.keys == [keys[0], keys[2]]


@pytest.mark.unit
def test_remove_out_of_range(experience):
    experience.append()
    with pytest.raises(IndexError):
        experience.remove(1)
    with pytest.raises(IndexError):
        experience.remove(-1)


@pytest.mark.unit
def test_update_accepts_wire_and_attribute_names(experience):
    experience.append()
    experience.append()

    experience.update(0, "startDate", "2020-01")
    experience.update(0, "end_date", "2021-06")
    experience.update(0, "current", True)

    assert experience[0].start_date == "2020-01"
    assert experience[0].end_date == "2021-06"
    assert experience[0].current is True
    assert experience[1] == ExperienceEntry()
    assert len(experience) == 2


@pytest.mark.unit
def test_update_unknown_field_names_path(experience):
    experience.append()
    with pytest.raises(ValidationFailure) as exc_info:
        experience.update(0, "salary", "lots")
    assert exc_info.value.field == "experience.0.salary"


@pytest.mark.unit
def test_update_rejects_wrong_type(experience):
    experience.append()
    with pytest.raises(ValidationFailure) as exc_info:
        experience.update(0, "role", 42)
    assert exc_info.value.field == "experience.0.role"
    assert experience[0].role == ""


@pytest.mark.unit
def test_keys_are_unique_and_not_in_values():
    education = SectionEditor("education", EducationEntry)
    education.append()
    education.append()

    assert len(set(education.keys)) == 2
    dumped = [entry.model_dump(by_alias=True) for entry in education.values()]
    assert all(set(d) == {"school", "degree", "startDate", "endDate"} for d in dumped)


@pytest.mark.unit
def test_values_are_copies(experience):
    experience.append({"role": "Dev"})
    values = experience.values()
    values[0].role = "Changed"
    assert experience[0].role == "Dev"


@pytest.mark.unit
def test_replace_assigns_fresh_keys(experience):
    experience.append()
    old_keys = experience.keys
    experience.replace([ExperienceEntry(role="X")])
    assert experience.keys != old_keys
    assert [e.role for e in experience] == ["X"]
