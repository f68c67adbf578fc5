from resume_studio.preview.printing import ExportArtifact, HtmlPrintSurface, PrintSurface
from resume_studio.preview.renderer import render, render_page, render_preview

__all__ = [
    "ExportArtifact",
    "HtmlPrintSurface",
    "PrintSurface",
    "render",
    "render_page",
    "render_preview",
]
