"""
Single entry point for document exports.

DocumentExporter binds one render host and one file sink; every method call is
independent and fully parameterized by its arguments.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from models import DocumentDate, ExportFormat, ExportRequest, Orientation, PdfOptions
from models_branding import BrandProfile

from .csv_export import export_tabular
from .document import compose_document
from .pdf_channel import RenderedPdf, PdfChannel
from .presets import DocumentType, get_preset
from .print_channel import PRINT_FALLBACK_SECONDS, PrintChannel
from .surfaces import FileSink, RenderHost, SavedFile

logger = logging.getLogger(__name__)


def build_request(
    document_type: DocumentType | str,
    document_id: str | int,
    *,
    output: ExportFormat | str = ExportFormat.PRINT,
    patient_name: str | None = None,
    document_date: DocumentDate | None = None,
    orientation: Orientation | str = Orientation.PORTRAIT,
    show_footer: bool = True,
    title: str | None = None,
) -> ExportRequest:
    """ExportRequest from a preset: filename and document id become '<PREFIX>-<id>'."""
    preset = get_preset(document_type)
    reference = f"{preset.id_prefix}-{document_id}"
    return ExportRequest(
        filename=reference,
        format=ExportFormat(output),
        page_size=preset.page_size,
        orientation=orientation,
        title=title or preset.title,
        document_id=reference,
        document_date=document_date,
        subject=patient_name or None,
        show_footer=show_footer,
    )


class DocumentExporter:
    def __init__(self, host: RenderHost, sink: FileSink, *, fallback_seconds: float = PRINT_FALLBACK_SECONDS) -> None:
        self.print_channel = PrintChannel(host, fallback_seconds=fallback_seconds)
        self.pdf_channel = PdfChannel(host, sink)
        self._sink = sink

    # Generic entry points

    async def print(self, element_id: str | None = None) -> None:
        await self.print_channel.print(element_id)

    async def export_to_pdf(self, element_id: str, options: PdfOptions | Mapping[str, Any]) -> RenderedPdf:
        if not isinstance(options, PdfOptions):
            options = PdfOptions.model_validate(options)
        return await self.pdf_channel.export_to_pdf(element_id, options)

    def export_tabular(
        self,
        records: Iterable[Mapping[str, Any]],
        filename_stem: str,
        fieldnames: Sequence[str] | None = None,
    ) -> SavedFile:
        return export_tabular(records, filename_stem, self._sink, fieldnames)

    async def export(self, request: ExportRequest, content: str, brand: BrandProfile | None) -> RenderedPdf | None:
        """Dispatch a composed document to the channel named by request.format."""
        if request.format == ExportFormat.PDF:
            return await self.pdf_channel.export_document(content, request, brand)
        if request.format == ExportFormat.PRINT:
            await self.print_channel.print_document(compose_document(content, request, brand))
            return None
        raise ValueError(f"Documents cannot be exported as {request.format.value}; use export_tabular")

    # Typed document presets

    async def export_document(
        self,
        document_type: DocumentType | str,
        brand: BrandProfile | None,
        patient_name: str,
        document_id: str | int,
        content: str,
        *,
        output: ExportFormat | str = ExportFormat.PRINT,
        document_date: DocumentDate | None = None,
        orientation: Orientation | str = Orientation.PORTRAIT,
        show_footer: bool = True,
        title: str | None = None,
    ) -> RenderedPdf | None:
        request = build_request(
            document_type,
            document_id,
            output=output,
            patient_name=patient_name,
            document_date=document_date,
            orientation=orientation,
            show_footer=show_footer,
            title=title,
        )
        logger.info("export document type=%s output=%s filename=%s", DocumentType(document_type).value, request.format.value, request.filename)
        return await self.export(request, content, brand)

    async def prescription(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.PRESCRIPTION, brand, patient_name, document_id, content, **kwargs)

    async def lab_order(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.LAB_ORDER, brand, patient_name, document_id, content, **kwargs)

    async def lab_result(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.LAB_RESULT, brand, patient_name, document_id, content, **kwargs)

    async def consultation(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.CONSULTATION, brand, patient_name, document_id, content, **kwargs)

    async def discharge(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.DISCHARGE, brand, patient_name, document_id, content, **kwargs)

    async def certificate(
        self, brand, patient_name, document_id, content, certificate_type: str | None = None, **kwargs
    ) -> RenderedPdf | None:
        if certificate_type:
            kwargs.setdefault("title", f"{get_preset(DocumentType.CERTIFICATE).title} - {certificate_type}")
        return await self.export_document(DocumentType.CERTIFICATE, brand, patient_name, document_id, content, **kwargs)

    async def invoice(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.INVOICE, brand, patient_name, document_id, content, **kwargs)

    async def receipt(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.RECEIPT, brand, patient_name, document_id, content, **kwargs)

    async def referral(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.REFERRAL, brand, patient_name, document_id, content, **kwargs)

    async def appointment(self, brand, patient_name, document_id, content, **kwargs) -> RenderedPdf | None:
        return await self.export_document(DocumentType.APPOINTMENT, brand, patient_name, document_id, content, **kwargs)


def preview_document(
    document_type: DocumentType | str,
    brand: BrandProfile | None,
    patient_name: str,
    document_id: str | int,
    content: str,
    **kwargs,
) -> str:
    """Composed HTML for a preset document, without printing or rasterizing."""
    request = build_request(document_type, document_id, patient_name=patient_name, **kwargs)
    return compose_document(content, request, brand)
