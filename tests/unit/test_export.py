"""Unit tests for the export trigger, print surface and download auto-trigger."""

import asyncio

import pytest

from resume_studio.editor.export import (
    AutoExport,
    ExportTrigger,
    has_download_marker,
    strip_download_marker,
)
from resume_studio.preview.printing import ExportArtifact, HtmlPrintSurface, artifact_basename


@pytest.mark.unit
@pytest.mark.parametrize(
    "address, expected",
    [
        ("/editor/3?download=true", True),
        ("/editor/3?tab=skills&download=true", True),
        ("/editor/3?download=false", False),
        ("/editor/3", False),
        ("/editor/3?downloads=true", False),
    ],
)
def test_has_download_marker(address, expected):
    assert has_download_marker(address) is expected


@pytest.mark.unit
def test_strip_download_marker_keeps_other_parameters():
    assert strip_download_marker("/editor/3?download=true") == "/editor/3"
    assert strip_download_marker("/editor/3?tab=skills&download=true") == "/editor/3?tab=skills"


@pytest.mark.unit
@pytest.mark.parametrize(
    "title, expected",
    [
        ("Backend Engineer CV", "Backend Engineer CV"),
        ("", "Resume"),
        ("   ", "Resume"),
        ("a/b\\c:d", "a_b_c_d"),
    ],
)
def test_artifact_basename(title, expected):
    assert artifact_basename(title) == expected


@pytest.mark.unit
def test_html_print_surface_names_artifact_after_title():
    artifact = HtmlPrintSurface().print("<html></html>", "My Resume")
    assert artifact.filename == "My Resume.html"
    assert artifact.media_type.startswith("text/html")
    assert artifact.content == b"<html></html>"


@pytest.mark.unit
def test_export_trigger_renders_full_page(sample_document):
    artifact = ExportTrigger().export(sample_document, "Sample Resume")

    html = artifact.content.decode("utf-8")
    assert artifact.filename == "Sample Resume.html"
    assert "<title>Sample Resume</title>" in html
    assert "Demo User" in html
    assert "scale(" not in html


@pytest.mark.unit
def test_export_trigger_blank_title_falls_back(sample_document):
    artifact = ExportTrigger().export(sample_document, "")
    assert artifact.filename == "Resume.html"
    assert artifact.title == "Resume"


def _counting_export():
    calls = []

    async def export() -> ExportArtifact:
        calls.append(1)
        return ExportArtifact(filename="x.html", media_type="text/html", content=b"", title="x")

    return export, calls


@pytest.mark.unit
def test_auto_export_fires_once_and_cleans_address():
    export, calls = _counting_export()
    auto = AutoExport(delay_seconds=0.01)

    navigation = asyncio.run(auto.navigate("/editor/7?download=true", export))

    assert len(calls) == 1
    assert navigation.export is not None
    assert navigation.address == "/editor/7"

    # Reloading the cleaned address does not export again.
    reloaded = asyncio.run(auto.navigate(navigation.address, export))
    assert len(calls) == 1
    assert reloaded.export is None


@pytest.mark.unit
def test_auto_export_waits_before_exporting():
    export, calls = _counting_export()
    auto = AutoExport(delay_seconds=0.05)

    async def scenario():
        task = asyncio.create_task(auto.navigate("/editor/1?download=true", export))
        await asyncio.sleep(0)
        exported_early = len(calls)
        await task
        return exported_early

    assert asyncio.run(scenario()) == 0
    assert len(calls) == 1
