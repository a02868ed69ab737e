import asyncio
import math

import pytest
from reportlab.lib.pagesizes import A4, A5, letter
from reportlab.lib.units import mm

from models import ExportRequest, Orientation, PageSize, PdfOptions
from models_branding import BrandProfile
from reporting.errors import ElementNotFoundError, RasterizationError
from reporting.pdf_channel import (
    PAGE_FORMATS,
    PDF_MEDIA_TYPE,
    RASTER_SCALE,
    PdfChannel,
    paginate_image,
    resolve_page_layout,
)
from reporting.surfaces import MemorySink

from fakes import FakeElement, FakeHost, make_png


def _expected_pages(width_px: int, height_px: int, layout) -> int:
    strip = max(1, int(layout.content_height * width_px / layout.content_width))
    return math.ceil(height_px / strip)


# --- layout ---
def test_page_formats_are_lowercase_names():
    assert PAGE_FORMATS == {
        PageSize.A4: "a4",
        PageSize.A5: "a5",
        PageSize.A6: "a6",
        PageSize.LETTER: "letter",
    }


def test_resolve_page_layout_portrait_and_landscape():
    portrait = resolve_page_layout(PageSize.A5, Orientation.PORTRAIT)
    assert portrait.format == "a5"
    assert portrait.pagesize == A5
    assert portrait.margin == pytest.approx(10 * mm)
    assert portrait.content_width == pytest.approx(A5[0] - 20 * mm)

    wide = resolve_page_layout(PageSize.LETTER, Orientation.LANDSCAPE)
    assert wide.pagesize == (letter[1], letter[0])
    assert wide.content_width > wide.content_height


# --- pagination ---
def test_short_capture_fits_one_page():
    layout = resolve_page_layout(PageSize.A4, Orientation.PORTRAIT)
    data, pages = paginate_image(make_png(1000, 400), layout, title="Invoice")
    assert pages == 1
    assert data.startswith(b"%PDF")


def test_tall_capture_spans_several_pages():
    layout = resolve_page_layout(PageSize.A4, Orientation.PORTRAIT)
    data, pages = paginate_image(make_png(1000, 4000), layout)
    assert pages == _expected_pages(1000, 4000, layout)
    assert pages >= 3


# --- element export ---
def test_export_element_to_pdf_saves_file():
    host = FakeHost([FakeElement("chart", "<p>chart</p>")], capture_size=(800, 600))
    sink = MemorySink()
    rendered = asyncio.run(
        PdfChannel(host, sink).export_to_pdf("chart", PdfOptions(filename="vitals", format="a4"))
    )
    assert rendered.file.filename == "vitals.pdf"
    assert rendered.file.media_type == PDF_MEDIA_TYPE
    assert rendered.page_count == 1
    assert sink.last is rendered.file
    assert host.captures[0][1] == RASTER_SCALE


def test_export_missing_element_raises():
    host = FakeHost()
    sink = MemorySink()
    with pytest.raises(ElementNotFoundError):
        asyncio.run(PdfChannel(host, sink).export_to_pdf("ghost", PdfOptions(filename="x")))
    assert host.captures == []
    assert sink.files == []


# --- composed document export ---
def _request(**kwargs) -> ExportRequest:
    base = dict(filename="RX-1", title="Prescription", page_size=PageSize.A5, document_id="RX-1")
    base.update(kwargs)
    return ExportRequest(**base)


def test_export_document_detaches_staging_container():
    host = FakeHost(capture_size=(1000, 3000))
    sink = MemorySink()
    brand = BrandProfile(brand_id="c", name="Clinic")
    rendered = asyncio.run(PdfChannel(host, sink).export_document("<p>Rx</p>", _request(), brand))

    assert host.attached == []
    assert len(host.detached) == 1
    assert "<p>Rx</p>" in host.detached[0].html
    assert "Clinic" in host.detached[0].html
    assert rendered.layout.format == "a5"
    assert rendered.page_count == _expected_pages(1000, 3000, rendered.layout)
    assert sink.last.filename == "RX-1.pdf"


def test_export_document_detaches_on_capture_failure():
    host = FakeHost(capture_error=RuntimeError("renderer crashed"))
    sink = MemorySink()
    with pytest.raises(RasterizationError) as exc_info:
        asyncio.run(PdfChannel(host, sink).export_document("<p>Rx</p>", _request(), None))
    assert "renderer crashed" in str(exc_info.value)
    assert str(exc_info.value).startswith("Failed to export PDF file")
    assert host.attached == []
    assert len(host.detached) == 1
    assert sink.files == []


def test_export_document_landscape_layout():
    host = FakeHost(capture_size=(1200, 500))
    rendered = asyncio.run(
        PdfChannel(host, MemorySink()).export_document(
            "", _request(page_size=PageSize.A4, orientation=Orientation.LANDSCAPE), None
        )
    )
    assert rendered.layout.pagesize == (A4[1], A4[0])
    assert rendered.layout.orientation == Orientation.LANDSCAPE
