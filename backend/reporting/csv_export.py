"""RFC 4180 CSV extracts of uniform record lists."""
from __future__ import annotations

import csv
import io
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from .errors import SerializationError
from .surfaces import FileSink, SavedFile

logger = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"


def _cell(value: Any) -> Any:
    return "" if value is None else value


def serialize_records(records: Iterable[Mapping[str, Any]], fieldnames: Sequence[str] | None = None) -> str:
    """
    Encode records as CSV text with CRLF line endings.
    Header comes from `fieldnames` or the first record's keys. Every record must
    carry exactly the header's keys.
    """
    rows = list(records)
    if not rows and not fieldnames:
        return ""
    if rows and not isinstance(rows[0], Mapping):
        raise SerializationError(f"Record 0 is not a mapping: {type(rows[0]).__name__}")
    header = list(fieldnames) if fieldnames else list(rows[0].keys())
    expected = set(header)

    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    try:
        writer.writerow(header)
        for index, record in enumerate(rows):
            if not isinstance(record, Mapping):
                raise SerializationError(f"Record {index} is not a mapping: {type(record).__name__}")
            if set(record.keys()) != expected:
                raise SerializationError(
                    f"Record {index} has keys {sorted(record.keys())}, expected {sorted(expected)}"
                )
            writer.writerow([_cell(record[key]) for key in header])
    except csv.Error as e:
        raise SerializationError(f"Failed to export CSV file: {e}") from e
    return out.getvalue()


def export_tabular(
    records: Iterable[Mapping[str, Any]],
    filename_stem: str,
    sink: FileSink,
    fieldnames: Sequence[str] | None = None,
) -> SavedFile:
    stem = (filename_stem or "").strip()
    if not stem:
        raise ValueError("filename stem must be non-empty")
    text = serialize_records(records, fieldnames)
    saved = SavedFile(filename=f"{stem}.csv", media_type=CSV_MEDIA_TYPE, data=text.encode("utf-8"))
    sink.save(saved)
    logger.info("csv export filename=%s bytes=%d", saved.filename, len(saved.data))
    return saved
