from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from loguru import logger

from resume_studio.preview.printing import ExportArtifact, HtmlPrintSurface, PrintSurface
from resume_studio.preview.renderer import render_page
from resume_studio.schemas.document import ResumeDocument

DOWNLOAD_MARKER = "download"


def has_download_marker(address: str) -> bool:
    query = parse_qsl(urlsplit(address).query, keep_blank_values=True)
    return (DOWNLOAD_MARKER, "true") in query


def strip_download_marker(address: str) -> str:
    """Drop ``download`` from the query string, keeping every other parameter."""
    parts = urlsplit(address)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key != DOWNLOAD_MARKER
    ]
    return urlunsplit(parts._replace(query=urlencode(query)))


class ExportTrigger:
    def __init__(self, surface: PrintSurface | None = None):
        self.surface = surface or HtmlPrintSurface()

    def export(self, document: ResumeDocument, title: str) -> ExportArtifact:
        html = render_page(document, title=title or "Resume", auto_print=True)
        artifact = self.surface.print(html, title)
        logger.info(f"Exported '{artifact.title}' as {artifact.filename} ({len(artifact.content)} bytes)")
        return artifact


@dataclass
class Navigation:
    address: str
    export: ExportArtifact | None = None


class AutoExport:
    """
    Export on open when the address asks for a download.

    The export runs once, after a short delay that lets the preview finish
    rendering. The returned address no longer carries the marker, so
    reopening it does not export again.
    """

    def __init__(self, delay_seconds: float = 0.5):
        self.delay_seconds = delay_seconds

    async def navigate(
        self, address: str, export: Callable[[], Awaitable[ExportArtifact]]
    ) -> Navigation:
        if not has_download_marker(address):
            return Navigation(address=address)
        await asyncio.sleep(self.delay_seconds)
        artifact = await export()
        cleaned = strip_download_marker(address)
        logger.debug(f"Auto-export done, address rewritten to {cleaned}")
        return Navigation(address=cleaned, export=artifact)
