from __future__ import annotations

import pytest

from csv_processor.core import CurrentFile
from csv_processor.core.functions import DocumentMetadata, MetadataFormatter
from csv_processor.core.processor import CSVHandler
from csv_processor.core.processor.csv_helper import (
    CSVSourceInfo,
    Encoding,
    UnsupportedEncodingError,
    parse_csv,
)
from csv_processor.core.processor.csv_helper import csv_encoding
from csv_processor.core.processor.csv_helper.csv_file_converter import CSVFileConverter
from csv_processor.core.processor.csv_helper.csv_metadata import (
    CSVMetadataExtractor,
    format_file_size,
)
from csv_processor.core.processor.csv_helper.csv_preprocessor import CSVPreprocessor


def _current_file(data: bytes, name: str = "data.csv"):
    return {"file_name": name, "file_data": data, "file_size": len(data)}


def test_converter_sniffs_or_uses_explicit_encoding():
    converter = CSVFileConverter()

    text, encoding = converter.convert("ä".encode("utf-8"))
    assert (text, encoding) == ("ä", Encoding.UTF_8)
    assert converter.get_format_name() == "CSV (UTF-8)"

    text, encoding = converter.convert(b"\xe4", encoding="iso-8859-1")
    assert (text, encoding) == ("ä", Encoding.ISO_8859_1)

    with pytest.raises(UnsupportedEncodingError):
        converter.convert(b"a", encoding="utf-7")


def test_preprocessor_records_bom_without_removing_it():
    preprocessed = CSVPreprocessor().preprocess(("\ufeffa,b\n1,2\n", Encoding.UTF_8))

    assert preprocessed.clean_content == "\ufeffa,b\n1,2\n"
    assert parse_csv(preprocessed.clean_content).headers == ["a", "b"]
    assert preprocessed.metadata == {
        "detected_encoding": "UTF-8",
        "bom_present": True,
        "line_count": 2,
    }


def test_handler_records_chardet_disagreement(monkeypatch, caplog):
    caplog.set_level("WARNING")
    monkeypatch.setattr(csv_encoding.chardet, "detect", lambda data: {"encoding": "windows-1251", "confidence": 0.8})

    decoded = CSVHandler().decode(_current_file(b"\xc8\xec\xff\n"))

    assert decoded.encoding is Encoding.WINDOWS_1252
    assert decoded.metadata["suggested_encoding"] == "windows-1251"
    assert "chardet suggests windows-1251" in caplog.text


def test_handler_skips_chardet_for_explicit_encoding(monkeypatch):
    def fail(data):
        raise AssertionError("chardet should not run")

    monkeypatch.setattr(csv_encoding.chardet, "detect", fail)

    decoded = CSVHandler().decode(_current_file(b"a,b\n"), Encoding.UTF_8)

    assert decoded.encoding is Encoding.UTF_8
    assert "suggested_encoding" not in decoded.metadata


def test_handler_process_uses_config():
    handler = CSVHandler({"trim_fields": False})

    imported = handler.process(_current_file(b"a; b\n1; 2\n"))

    assert imported.delimiter == ";"
    assert imported.options.trim_fields is False
    assert imported.result.headers == ["a", " b"]


def test_metadata_lists_columns_and_suggestion():
    headers = ",".join(f"c{i}" for i in range(12))
    source = CSVSourceInfo(
        encoding="windows-1252",
        delimiter="\t",
        has_header=True,
        result=parse_csv(headers + "\n"),
        file_size=2048,
        file_name="wide.tsv",
        suggested_encoding="windows-1251",
    )

    metadata = CSVMetadataExtractor().extract(source)

    assert metadata.file_size == "2.0 KB"
    assert metadata.delimiter == "Tab (\\t)"
    assert metadata.custom["columns"].endswith("c9 (+2 more)")
    assert metadata.custom["suggested_encoding"] == "windows-1251"
    assert "Suggested Encoding: windows-1251" in CSVMetadataExtractor().format(metadata)


def test_metadata_round_trips_through_dict():
    metadata = DocumentMetadata(file_name="a.csv", row_count=3, custom={"error_count": 0})

    assert DocumentMetadata.from_dict(metadata.to_dict()) == metadata
    assert not DocumentMetadata()
    assert MetadataFormatter().format(DocumentMetadata()) == ""


def test_format_file_size():
    assert format_file_size(512) == "512 B"
    assert format_file_size(3 * 1024 * 1024) == "3.0 MB"


def test_convert_file_reads_only_file_data():
    handler = CSVHandler()

    text, encoding = handler.convert_file({"file_data": "Zoë".encode("utf-8")})

    assert (text, encoding) == ("Zoë", Encoding.UTF_8)
    assert "file_stream" not in CurrentFile.__annotations__
