"""
Rasterized PDF export.

The source (an element already on the host page, or a composed document in a
staging container) is captured as a PNG at RASTER_SCALE, cut into page-height
strips and laid onto reportlab pages inside fixed PAGE_MARGIN_MM margins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image
from reportlab.lib.pagesizes import A4, A5, A6, landscape, letter, portrait
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from models import ExportRequest, Orientation, PageSize, PdfOptions
from models_branding import BrandProfile

from .document import compose_document
from .errors import ElementNotFoundError, RasterizationError
from .surfaces import FileSink, RenderHost, SavedFile

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
RASTER_SCALE = 2
PAGE_MARGIN_MM = 10
JPEG_QUALITY = 98
CSS_PX_PER_PT = 96 / 72

PAGE_FORMATS: dict[PageSize, str] = {
    PageSize.A4: "a4",
    PageSize.A5: "a5",
    PageSize.A6: "a6",
    PageSize.LETTER: "letter",
}

PAPER_SIZES: dict[str, tuple[float, float]] = {
    "a4": A4,
    "a5": A5,
    "a6": A6,
    "letter": letter,
}


@dataclass(frozen=True)
class PageLayout:
    format: str
    orientation: Orientation
    pagesize: tuple[float, float]
    margin: float

    @property
    def content_width(self) -> float:
        return self.pagesize[0] - 2 * self.margin

    @property
    def content_height(self) -> float:
        return self.pagesize[1] - 2 * self.margin

    @property
    def content_width_px(self) -> int:
        return int(round(self.content_width * CSS_PX_PER_PT))


@dataclass(frozen=True)
class RenderedPdf:
    file: SavedFile
    layout: PageLayout
    page_count: int


def resolve_page_layout(page_size: PageSize, orientation: Orientation) -> PageLayout:
    fmt = PAGE_FORMATS[page_size]
    base = PAPER_SIZES[fmt]
    pagesize = landscape(base) if orientation == Orientation.LANDSCAPE else portrait(base)
    return PageLayout(format=fmt, orientation=orientation, pagesize=pagesize, margin=PAGE_MARGIN_MM * mm)


def paginate_image(png: bytes, layout: PageLayout, *, title: str = "", author: str = "") -> tuple[bytes, int]:
    """Lay a tall capture onto as many pages as it needs. Returns (pdf bytes, page count)."""
    image = Image.open(BytesIO(png))
    image.load()
    rgb = image.convert("RGB")

    px_per_pt = rgb.width / layout.content_width
    strip_px = max(1, int(layout.content_height * px_per_pt))
    page_w, page_h = layout.pagesize

    out = BytesIO()
    c = canvas.Canvas(out, pagesize=layout.pagesize)
    if title:
        c.setTitle(title)
    if author:
        c.setAuthor(author)

    pages = 0
    for top in range(0, rgb.height, strip_px):
        bottom = min(top + strip_px, rgb.height)
        strip = rgb.crop((0, top, rgb.width, bottom))
        buf = BytesIO()
        strip.save(buf, format="JPEG", quality=JPEG_QUALITY)
        buf.seek(0)
        draw_h = (bottom - top) / px_per_pt
        c.drawImage(
            ImageReader(buf),
            layout.margin,
            page_h - layout.margin - draw_h,
            width=layout.content_width,
            height=draw_h,
        )
        c.showPage()
        pages += 1
    c.save()
    return out.getvalue(), pages


class PdfChannel:
    def __init__(self, host: RenderHost, sink: FileSink) -> None:
        self._host = host
        self._sink = sink

    async def export_to_pdf(self, element_id: str, options: PdfOptions) -> RenderedPdf:
        """Rasterize an element that is already on the host page."""
        element = await self._host.find_element(element_id)
        if element is None:
            raise ElementNotFoundError(element_id)
        layout = resolve_page_layout(options.format, options.orientation)
        return await self._render(element, layout, options.filename, title=options.filename)

    async def export_document(self, content: str, request: ExportRequest, brand: BrandProfile | None) -> RenderedPdf:
        """Compose the branded document offscreen, rasterize it, and always remove the staging container."""
        layout = resolve_page_layout(request.page_size, request.orientation)
        markup = compose_document(content, request, brand)
        try:
            # a failed attach leaves nothing behind; the host removes partial containers itself
            container = await self._host.attach_container(markup, layout.content_width_px)
        except Exception as e:
            raise RasterizationError(f"Failed to export PDF file: {e}") from e
        try:
            return await self._render(
                container,
                layout,
                request.filename,
                title=request.title,
                author=brand.name if brand else "",
            )
        finally:
            await self._host.detach_container(container)

    async def _render(self, source, layout: PageLayout, filename: str, *, title: str = "", author: str = "") -> RenderedPdf:
        try:
            png = await self._host.capture(source, RASTER_SCALE)
            data, pages = paginate_image(png, layout, title=title, author=author)
        except Exception as e:
            raise RasterizationError(f"Failed to export PDF file: {e}") from e

        saved = SavedFile(filename=f"{filename}.pdf", media_type=PDF_MEDIA_TYPE, data=data)
        self._sink.save(saved)
        logger.info(
            "pdf export filename=%s format=%s orientation=%s pages=%d bytes=%d",
            saved.filename, layout.format, layout.orientation.value, pages, len(data),
        )
        return RenderedPdf(file=saved, layout=layout, page_count=pages)
