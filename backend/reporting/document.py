"""
Wrap a caller-supplied clinical fragment with the branded letterhead into one
self-contained HTML document. All styling is embedded so the result renders
identically in a print window, an offscreen staging container or a file.
"""
from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from models import ExportRequest, PageSize
from models_branding import DEFAULT_THEME_COLOR, BrandProfile

from .format_utils import escape
from .header import compose_footer, compose_header

_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
_PLACEHOLDER = re.compile(r"__([A-Z_]+)__")

# CSS @page size keyword and margins per paper size
PAGE_SETTINGS: dict[PageSize, tuple[str, str]] = {
    PageSize.A4: ("A4", "15mm 20mm"),
    PageSize.A5: ("A5", "10mm 15mm"),
    PageSize.A6: ("A6", "8mm 10mm"),
    PageSize.LETTER: ("letter", "15mm 20mm"),
}


@lru_cache(maxsize=None)
def load_template(name: str) -> str:
    return (_TEMPLATE_DIR / name).read_text(encoding="utf-8")


def render_template(name: str, values: dict[str, str]) -> str:
    """Fill __NAME__ placeholders in one pass so substituted text is never rescanned."""
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), load_template(name))


def compose_document(content: str, request: ExportRequest, brand: BrandProfile | None) -> str:
    page_size, margin = PAGE_SETTINGS[request.page_size]
    accent = brand.primary_color if brand else DEFAULT_THEME_COLOR
    doc_title = f"{request.title} - {brand.name}" if brand else request.title

    header_html = compose_header(
        brand,
        request.title,
        document_id=request.document_id,
        document_date=request.document_date,
        subject=request.subject,
    )
    footer_html = compose_footer(brand) if request.show_footer else ""

    return render_template(
        "document.html",
        {
            "DOCUMENT_TITLE": escape(doc_title),
            "PAGE_SIZE": page_size,
            "ORIENTATION": request.orientation.value,
            "PAGE_MARGIN": margin,
            "PRIMARY_COLOR": escape(accent),
            "HEADER_HTML": header_html,
            "CONTENT_HTML": content or "",
            "FOOTER_HTML": footer_html,
        },
    )
