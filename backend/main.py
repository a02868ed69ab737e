from __future__ import annotations

import logging
import os
import time
import uuid
from pathlib import Path

from dotenv import load_dotenv

# Load .env from backend directory so ALLOWED_ORIGINS etc. are available
load_dotenv(Path(__file__).resolve().parent / ".env")

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from brands import get_brand, list_brands
from models import DocumentExportBody, ExportFormat, TabularExportRequest
from models_branding import BrandProfile
from reporting.csv_export import export_tabular
from reporting.errors import ExportError, RasterizationError, SerializationError
from reporting.facade import DocumentExporter, preview_document
from reporting.presets import DocumentType, get_preset, list_presets
from reporting.surfaces import MemorySink

_LOG = logging.getLogger("uvicorn.error")

VERSION = (os.environ.get("RENDER_GIT_COMMIT") or "").strip() or "unknown"

app = FastAPI(title="Clinic Document Export", version="0.1.0")

# CORS: use ALLOWED_ORIGINS env (comma-separated) if set, else default
_origins_env = os.environ.get("ALLOWED_ORIGINS", "").strip()
if _origins_env:
    ALLOWED_ORIGINS = [o.strip() for o in _origins_env.split(",") if o.strip()]
else:
    ALLOWED_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "X-Export-Pages", "X-Request-Id"],
)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        _LOG.info(
            "request_id=%s method=%s path=%s status=%s duration_ms=%.0f",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        response.headers["X-Request-Id"] = request_id
        return response


app.add_middleware(RequestLogMiddleware)


@app.on_event("startup")
def startup_log() -> None:
    port = os.environ.get("PORT", "8010")
    host = os.environ.get("HOST", "127.0.0.1")
    _LOG.info("Export service starting on http://%s:%s version=%s", host, port, VERSION)


def _open_render_host():
    """Imported lazily so the app (and HTML previews) run without Playwright installed."""
    from reporting.browser import open_render_host

    return open_render_host()


def _document_type_or_404(document_type: str) -> DocumentType:
    try:
        return DocumentType(document_type)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown document type: {document_type}")


def _resolve_brand(body: DocumentExportBody) -> BrandProfile:
    if body.brand is not None:
        return body.brand
    brand = get_brand(body.brand_id)
    if brand is None:
        raise HTTPException(status_code=400, detail=f"Unknown brand_id: {body.brand_id}")
    return brand


def _title_for(document_type: DocumentType, body: DocumentExportBody) -> str | None:
    if document_type == DocumentType.CERTIFICATE and body.certificate_type:
        return f"{get_preset(document_type).title} - {body.certificate_type}"
    return None


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@app.get("/health")
def health():
    return {"status": "ok", "version": VERSION}


@app.get("/health/pdf")
async def health_pdf():
    """
    Runtime check for Playwright PDF dependencies.
    Returns 200 only when Chromium can launch successfully.
    """
    try:
        async with _open_render_host():
            pass
    except ImportError:
        raise HTTPException(status_code=503, detail="Playwright is not installed.")
    except Exception as e:
        msg = str(e)
        if len(msg) > 500:
            msg = msg[:500]
        raise HTTPException(status_code=503, detail=f"Playwright runtime unavailable: {msg}") from e
    return {"status": "ok", "pdf_runtime": "ready"}


@app.get("/brands")
def get_brands() -> list[BrandProfile]:
    return list_brands()


@app.get("/presets")
def get_presets() -> list[dict]:
    return [
        {"document_type": key.value, **preset.model_dump(mode="json")}
        for key, preset in list_presets()
    ]


@app.post("/exports/{document_type}/preview", response_class=HTMLResponse)
def export_document_preview(document_type: str, body: DocumentExportBody) -> HTMLResponse:
    """Return the branded document as HTML (no Playwright required)."""
    kind = _document_type_or_404(document_type)
    brand = _resolve_brand(body)
    html_str = preview_document(
        kind,
        brand,
        body.patient_name,
        body.document_id,
        body.content,
        document_date=body.document_date,
        orientation=body.orientation,
        show_footer=body.show_footer,
        title=_title_for(kind, body),
    )
    return HTMLResponse(html_str)


@app.post("/exports/{document_type}/pdf")
async def export_document_pdf(document_type: str, body: DocumentExportBody) -> Response:
    """
    Compose the branded document, rasterize it in headless Chromium and return
    it as a PDF attachment named <PREFIX>-<document_id>.pdf.
    """
    kind = _document_type_or_404(document_type)
    brand = _resolve_brand(body)
    sink = MemorySink()
    try:
        async with _open_render_host() as host:
            exporter = DocumentExporter(host, sink)
            rendered = await exporter.export_document(
                kind,
                brand,
                body.patient_name,
                body.document_id,
                body.content,
                output=ExportFormat.PDF,
                document_date=body.document_date,
                orientation=body.orientation,
                show_footer=body.show_footer,
                title=_title_for(kind, body),
            )
    except ImportError:
        raise HTTPException(
            status_code=503,
            detail="Playwright is required for PDF. Install: pip install playwright && playwright install chromium. Use POST /exports/{document_type}/preview for HTML.",
        )
    except RasterizationError as e:
        _LOG.warning("pdf export failed type=%s: %s", kind.value, e)
        raise HTTPException(status_code=503, detail=str(e)) from e
    except ExportError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    except Exception as e:
        _LOG.exception("pdf runtime failure type=%s", kind.value)
        raise HTTPException(
            status_code=503,
            detail="PDF generation runtime unavailable. Use POST /exports/{document_type}/preview to get HTML instead.",
        ) from e

    return Response(
        content=rendered.file.data,
        media_type=rendered.file.media_type,
        headers={**_attachment(rendered.file.filename), "X-Export-Pages": str(rendered.page_count)},
    )


@app.post("/exports/csv")
def export_csv(req: TabularExportRequest) -> Response:
    try:
        saved = export_tabular(req.records, req.filename, MemorySink(), req.fieldnames)
    except SerializationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return Response(content=saved.data, media_type=saved.media_type, headers=_attachment(saved.filename))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8010")),
        reload=True,
    )
