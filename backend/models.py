from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models_branding import BrandProfile


class PageSize(str, Enum):
    A4 = "A4"
    A5 = "A5"
    A6 = "A6"
    LETTER = "Letter"


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class ExportFormat(str, Enum):
    PDF = "pdf"
    PRINT = "print"
    CSV = "csv"


DocumentDate = Union[date, datetime, str]


def _coerce_page_size(v: Any) -> Any:
    """Accept 'a4', 'LETTER', 'letter' etc. alongside the canonical names."""
    if v is None:
        return PageSize.A4
    if isinstance(v, PageSize):
        return v
    text = str(v).strip().lower()
    for size in PageSize:
        if size.value.lower() == text:
            return size
    return v


def _require_stem(v: str) -> str:
    text = (v or "").strip()
    if not text:
        raise ValueError("filename stem must be non-empty")
    return text


class ExportRequest(BaseModel):
    """
    Parameters for one document export.

    - filename: output stem, extension is added by the channel
    - document_date: only rendered when supplied; the pipeline never reads the clock
    - subject: patient display name shown in the title bar
    """
    model_config = ConfigDict(frozen=True)

    filename: str
    format: ExportFormat = ExportFormat.PDF
    page_size: PageSize = PageSize.A4
    orientation: Orientation = Orientation.PORTRAIT
    title: str
    document_id: Optional[str] = None
    document_date: Optional[DocumentDate] = None
    subject: Optional[str] = None
    show_footer: bool = True

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        return _require_stem(v)

    @field_validator("page_size", mode="before")
    @classmethod
    def normalize_page_size(cls, v: Any) -> Any:
        return _coerce_page_size(v)

    @field_validator("orientation", mode="before")
    @classmethod
    def default_orientation(cls, v: Any) -> Any:
        if v is None or v == "":
            return Orientation.PORTRAIT
        return v


class PdfOptions(BaseModel):
    """Options for rasterizing an element that already exists on the host page."""
    filename: str
    format: PageSize = PageSize.A4
    orientation: Orientation = Orientation.PORTRAIT

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        return _require_stem(v)

    @field_validator("format", mode="before")
    @classmethod
    def normalize_format(cls, v: Any) -> Any:
        return _coerce_page_size(v)


class TabularExportRequest(BaseModel):
    """Request body for POST /exports/csv. Empty record lists are allowed."""
    records: List[Dict[str, Any]] = Field(default_factory=list)
    filename: str
    fieldnames: Optional[List[str]] = None

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        return _require_stem(v)


class DocumentExportBody(BaseModel):
    """Request body for POST /exports/{document_type}/pdf and /preview."""
    brand_id: str = "default"
    brand: Optional[BrandProfile] = None
    patient_name: str = ""
    document_id: str = Field(min_length=1)
    content: str = ""
    document_date: Optional[DocumentDate] = None
    orientation: Orientation = Orientation.PORTRAIT
    show_footer: bool = True
    certificate_type: Optional[str] = None

    @field_validator("document_id", mode="before")
    @classmethod
    def stringify_document_id(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v
