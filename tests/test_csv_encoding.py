from __future__ import annotations

import io

import pytest

from csv_processor.core.processor.csv_helper import (
    CSVDecodeError,
    Encoding,
    UnsupportedEncodingError,
    decode_with_encoding,
    detect_bom,
    detect_encoding,
    read_with_encoding,
    resolve_encoding,
    suggest_encoding,
)
from csv_processor.core.processor.csv_helper import csv_encoding


def test_utf32le_bom_wins_over_utf16le_prefix():
    data = b"\xff\xfe\x00\x00" + "a,b".encode("utf-32-le")

    assert detect_bom(data) is Encoding.UTF_32LE
    assert detect_encoding(data) is Encoding.UTF_32LE


@pytest.mark.parametrize(
    "prefix, expected",
    [
        (b"\xef\xbb\xbf", Encoding.UTF_8),
        (b"\xff\xfe", Encoding.UTF_16LE),
        (b"\xfe\xff", Encoding.UTF_16BE),
        (b"\x00\x00\xfe\xff", Encoding.UTF_32BE),
    ],
)
def test_bom_detection(prefix, expected):
    assert detect_encoding(prefix + b"x") is expected


def test_invalid_continuation_falls_back_to_windows_1252():
    assert detect_encoding(b"name\n\xc3\x41bc\n") is Encoding.WINDOWS_1252


def test_truncated_sequence_at_end_is_not_utf8():
    assert detect_encoding(b"caf\xc3") is Encoding.WINDOWS_1252


def test_valid_multibyte_text_is_utf8():
    data = "name,city\nJosé,Zürich\n".encode("utf-8")

    assert detect_encoding(data) is Encoding.UTF_8


@pytest.mark.parametrize(
    "data, expected",
    [
        ("price \u20ac5".encode("utf-8"), Encoding.UTF_8),
        ("smile \U0001f600".encode("utf-8"), Encoding.UTF_8),
        (b"a\xe2\x82", Encoding.WINDOWS_1252),
        (b"a\xf0\x9f\x98", Encoding.WINDOWS_1252),
        (b"a\xe2\x41\xac", Encoding.WINDOWS_1252),
        (b"a\x80b", Encoding.WINDOWS_1252),
        (b"a\xbfb", Encoding.WINDOWS_1252),
        (b"a\xf8b", Encoding.WINDOWS_1252),
        (b"a\xffb", Encoding.WINDOWS_1252),
    ],
)
def test_multibyte_sequences_and_stray_bytes(data, expected):
    assert detect_encoding(data) is expected


def test_ascii_and_empty_input_use_windows_1252():
    assert detect_encoding(b"a,b\n1,2\n") is Encoding.WINDOWS_1252
    assert detect_encoding(b"") is Encoding.WINDOWS_1252


def test_resolve_encoding_accepts_labels_and_names():
    assert resolve_encoding("utf-8") is Encoding.UTF_8
    assert resolve_encoding("Windows-1252") is Encoding.WINDOWS_1252
    assert resolve_encoding("mac_roman") is Encoding.MAC_ROMAN
    assert resolve_encoding(Encoding.ISO_8859_5) is Encoding.ISO_8859_5


def test_unknown_encoding_raises():
    with pytest.raises(UnsupportedEncodingError):
        resolve_encoding("klingon-8")

    with pytest.raises(LookupError):
        decode_with_encoding(b"abc", "klingon-8")


def test_decode_replaces_malformed_bytes_by_default():
    text = decode_with_encoding(b"a\xffb", Encoding.UTF_8)

    assert text == "a\ufffdb"


def test_strict_decode_raises_csv_decode_error():
    with pytest.raises(CSVDecodeError) as excinfo:
        decode_with_encoding(b"a\xffb", "UTF-8", errors="strict")

    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_windows_1251_decodes_cyrillic():
    data = "Имя".encode("cp1251")

    assert decode_with_encoding(data, "windows-1251") == "Имя"


def test_read_with_encoding_from_path_and_stream(tmp_path):
    path = tmp_path / "latin.csv"
    path.write_bytes("nom\nséance\n".encode("latin-1"))

    assert read_with_encoding(path, "ISO-8859-1") == "nom\nséance\n"
    assert read_with_encoding(str(path), Encoding.ISO_8859_1) == "nom\nséance\n"
    assert read_with_encoding(io.BytesIO(b"a,b"), "UTF-8") == "a,b"


def test_read_with_encoding_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_with_encoding(tmp_path / "missing.csv")


def test_suggest_encoding_maps_chardet_names(monkeypatch):
    monkeypatch.setattr(
        csv_encoding.chardet,
        "detect",
        lambda data: {"encoding": "windows-1251", "confidence": 0.9},
    )

    assert suggest_encoding(b"\xc8\xec\xff") is Encoding.WINDOWS_1251


def test_suggest_encoding_ignores_unknown_answers(monkeypatch):
    monkeypatch.setattr(
        csv_encoding.chardet,
        "detect",
        lambda data: {"encoding": None, "confidence": 0.0},
    )
    assert suggest_encoding(b"") is None

    monkeypatch.setattr(
        csv_encoding.chardet,
        "detect",
        lambda data: {"encoding": "EUC-JP", "confidence": 0.99},
    )
    assert suggest_encoding(b"\xa4\xa2") is None
