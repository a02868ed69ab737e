import csv
import io

import pytest

from reporting.csv_export import CSV_MEDIA_TYPE, export_tabular, serialize_records
from reporting.errors import SerializationError
from reporting.surfaces import DirectorySink, MemorySink


def _parse(text: str) -> list[dict]:
    return list(csv.DictReader(io.StringIO(text, newline="")))


def test_header_from_first_record_and_crlf_rows():
    text = serialize_records([
        {"patient": "Ada Obi", "test": "FBC"},
        {"patient": "Tunde Bello", "test": "Lipids"},
    ])
    assert text == "patient,test\r\nAda Obi,FBC\r\nTunde Bello,Lipids\r\n"


def test_special_characters_survive_a_csv_reader():
    records = [
        {"name": "Obi, Ada", "note": 'said "fine"', "address": "line 1\nline 2"},
        {"name": "Plain", "note": "", "address": "x"},
    ]
    text = serialize_records(records)
    assert '"Obi, Ada"' in text
    assert '"said ""fine"""' in text
    assert _parse(text) == records


def test_none_values_render_empty_and_numbers_as_text():
    text = serialize_records([{"a": None, "b": 3, "c": 1.5}])
    assert text.splitlines()[1] == ",3,1.5"


def test_empty_records_give_empty_text():
    assert serialize_records([]) == ""


def test_empty_records_with_fieldnames_give_header_only():
    assert serialize_records([], ["patient", "status"]) == "patient,status\r\n"


def test_explicit_fieldnames_set_column_order():
    text = serialize_records([{"b": 2, "a": 1}], ["a", "b"])
    assert text == "a,b\r\n1,2\r\n"


def test_non_uniform_records_raise():
    with pytest.raises(SerializationError, match="Record 1"):
        serialize_records([{"a": 1, "b": 2}, {"a": 1}])
    with pytest.raises(SerializationError):
        serialize_records([{"a": 1}, {"a": 1, "extra": 2}])


def test_non_mapping_record_raises():
    with pytest.raises(SerializationError, match="not a mapping"):
        serialize_records([["a", "b"]])


def test_export_tabular_saves_named_file():
    sink = MemorySink()
    saved = export_tabular([{"id": 1}], "lab-worklist", sink)
    assert saved.filename == "lab-worklist.csv"
    assert saved.media_type == CSV_MEDIA_TYPE
    assert saved.data == b"id\r\n1\r\n"
    assert sink.files == [saved]


def test_export_tabular_rejects_empty_stem():
    with pytest.raises(ValueError):
        export_tabular([{"id": 1}], "  ", MemorySink())


def test_directory_sink_writes_file(tmp_path):
    export_tabular([{"id": 1}], "daily", DirectorySink(tmp_path / "out"))
    assert (tmp_path / "out" / "daily.csv").read_bytes() == b"id\r\n1\r\n"
