"""Branded document export pipeline."""

from reporting.errors import (
    ElementNotFoundError,
    ExportError,
    PopupBlockedError,
    RasterizationError,
    SerializationError,
)
from reporting.facade import DocumentExporter, build_request, preview_document
from reporting.presets import PRESETS, DocumentType, PresetEntry, get_preset
from reporting.surfaces import DirectorySink, MemorySink, SavedFile

__all__ = [
    "DocumentExporter",
    "build_request",
    "preview_document",
    "DocumentType",
    "PresetEntry",
    "PRESETS",
    "get_preset",
    "DirectorySink",
    "MemorySink",
    "SavedFile",
    "ExportError",
    "ElementNotFoundError",
    "PopupBlockedError",
    "RasterizationError",
    "SerializationError",
]
