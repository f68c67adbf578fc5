from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

DEFAULT_TITLE = "Resume"
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9 ._-]")


@dataclass
class ExportArtifact:
    filename: str
    media_type: str
    content: bytes
    title: str


def artifact_basename(title: str | None) -> str:
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", (title or "").strip()).strip(" .")
    return cleaned or DEFAULT_TITLE


class PrintSurface(ABC):
    """Takes a rendered full-scale page and produces a printable artifact."""

    @abstractmethod
    def print(self, html: str, title: str) -> ExportArtifact: ...


class HtmlPrintSurface(PrintSurface):
    """
    Emits the page as a standalone HTML file. The page opens the browser's
    print dialog on load, where it can be saved as PDF.
    """

    extension = "html"
    media_type = "text/html; charset=utf-8"

    def print(self, html: str, title: str) -> ExportArtifact:
        title = (title or "").strip() or DEFAULT_TITLE
        return ExportArtifact(
            filename=f"{artifact_basename(title)}.{self.extension}",
            media_type=self.media_type,
            content=html.encode("utf-8"),
            title=title,
        )
