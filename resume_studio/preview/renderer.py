"""
Live preview renderer: résumé document -> HTML.

Rendering is a pure projection of the document. Any field may be missing or
of the wrong type; such fields render as empty rather than failing.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

from jinja2 import ChainableUndefined, Environment, FileSystemLoader, Undefined
from markupsafe import Markup
from pydantic import BaseModel

TEMPLATES_DIR = Path(__file__).parent / "templates"
_CSS_PATH = TEMPLATES_DIR / "preview.css"


def _text(value: Any) -> str:
    if isinstance(value, Undefined) or value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def _entries(value: Any) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _safe_url(value: Any) -> str:
    """The link if it is an absolute http(s) URL, else empty."""
    url = _text(value).strip()
    try:
        parts = urlsplit(url)
    except ValueError:
        return ""
    if parts.scheme.lower() in ("http", "https") and parts.netloc:
        return url
    return ""


env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=True,
    undefined=ChainableUndefined,
)
env.filters["text"] = _text
env.filters["entries"] = _entries
env.filters["safe_url"] = _safe_url


def _as_context(document: BaseModel | Mapping | None) -> dict:
    if isinstance(document, BaseModel):
        return document.model_dump(by_alias=True)
    if isinstance(document, Mapping):
        return dict(document)
    return {}


def render(document: BaseModel | Mapping | None) -> str:
    """Render the résumé body as an HTML fragment."""
    return env.get_template("resume.html.jinja").render(r=_as_context(document))


def render_preview(document: BaseModel | Mapping | None, scale: float = 1.0) -> str:
    """Inline editor preview, scaled to fit beside the form."""
    return env.get_template("preview.html.jinja").render(
        body=Markup(render(document)), scale=scale
    )


def render_page(
    document: BaseModel | Mapping | None,
    title: str = "Resume",
    auto_print: bool = False,
) -> str:
    """Full-scale standalone page with embedded CSS, used for export."""
    return env.get_template("page.html.jinja").render(
        body=Markup(render(document)),
        title=title,
        css=Markup(_CSS_PATH.read_text(encoding="utf-8")),
        auto_print=auto_print,
    )
