# csv_helper/csv_encoding.py
"""
CSV Encoding Detection and Decoding

Detects the text encoding of an uploaded CSV buffer and decodes it.
Detection uses the BOM first, then a structural UTF-8 scan; chardet is only
consulted for an advisory second opinion.
"""
import logging
import os
from typing import BinaryIO, Optional, Union

import chardet

from csv_processor.core.processor.csv_helper.csv_constants import (
    BOM_TABLE,
    CHARDET_SAMPLE_SIZE,
    DEFAULT_ENCODING,
    CSVDecodeError,
    Encoding,
    UnsupportedEncodingError,
)

logger = logging.getLogger("csv-processor")

# chardet result names -> supported encodings
_CHARDET_NAMES = {
    "utf-8": Encoding.UTF_8,
    "utf-8-sig": Encoding.UTF_8,
    "ascii": Encoding.WINDOWS_1252,
    "iso-8859-1": Encoding.ISO_8859_1,
    "windows-1252": Encoding.WINDOWS_1252,
    "iso-8859-15": Encoding.ISO_8859_15,
    "macroman": Encoding.MAC_ROMAN,
    "mac-roman": Encoding.MAC_ROMAN,
    "windows-1251": Encoding.WINDOWS_1251,
    "iso-8859-2": Encoding.ISO_8859_2,
    "iso-8859-5": Encoding.ISO_8859_5,
    "utf-16le": Encoding.UTF_16LE,
    "utf-16be": Encoding.UTF_16BE,
    "utf-32le": Encoding.UTF_32LE,
    "utf-32be": Encoding.UTF_32BE,
}


def detect_bom(data: bytes) -> Optional[Encoding]:
    """
    Detect a BOM (Byte Order Mark).

    Args:
        data: Raw file bytes

    Returns:
        Encoding named by the BOM, or None
    """
    head = bytes(data[:4])
    for bom, encoding in BOM_TABLE:
        if head.startswith(bom):
            return encoding
    return None


def _is_utf8_structure(data: bytes) -> bool:
    """Check that every byte above 0x7F belongs to a well-formed UTF-8 sequence."""
    length = len(data)
    i = 0
    while i < length:
        byte = data[i]
        if byte <= 0x7F:
            i += 1
            continue

        if 0xC0 <= byte <= 0xDF:
            needed = 1
        elif 0xE0 <= byte <= 0xEF:
            needed = 2
        elif 0xF0 <= byte <= 0xF7:
            needed = 3
        else:
            return False

        if i + needed >= length:
            return False
        for offset in range(1, needed + 1):
            if (data[i + offset] & 0xC0) != 0x80:
                return False
        i += needed + 1
    return True


def detect_encoding(data: bytes) -> Encoding:
    """
    Guess the encoding of a raw CSV buffer.

    Detection order:
    1. BOM
    2. UTF-8 structural scan (only when high-ASCII bytes are present)
    3. windows-1252 fallback (also used for pure ASCII and empty input)

    Args:
        data: Raw file bytes

    Returns:
        Detected Encoding
    """
    data = bytes(data)

    bom_encoding = detect_bom(data)
    if bom_encoding:
        logger.debug(f"BOM detected: {bom_encoding}")
        return bom_encoding

    has_high_ascii = any(byte > 0x7F for byte in data)
    if has_high_ascii and _is_utf8_structure(data):
        return Encoding.UTF_8

    return DEFAULT_ENCODING


def resolve_encoding(encoding: Union[Encoding, str]) -> Encoding:
    """
    Resolve an encoding identifier to a supported Encoding.

    Matches member values and names case-insensitively ("utf-8", "UTF_8",
    "Windows-1252"). Unknown identifiers are rejected rather than mapped to a
    different encoding.

    Raises:
        UnsupportedEncodingError: If the identifier is not supported
    """
    if isinstance(encoding, Encoding):
        return encoding

    key = str(encoding or "").strip().lower()
    for member in Encoding:
        if key in (member.value.lower(), member.name.lower()):
            return member

    raise UnsupportedEncodingError(f"Unsupported encoding: {encoding!r}")


def decode_with_encoding(
    data: bytes,
    encoding: Union[Encoding, str],
    errors: str = "replace"
) -> str:
    """
    Decode a buffer with the given encoding.

    A leading BOM is kept as U+FEFF; the parser removes it.

    Args:
        data: Raw file bytes
        encoding: Encoding member or label
        errors: "replace" substitutes malformed sequences, "strict" raises

    Returns:
        Decoded text

    Raises:
        UnsupportedEncodingError: If the encoding is not supported
        CSVDecodeError: If strict decoding fails
    """
    resolved = resolve_encoding(encoding)
    try:
        return bytes(data).decode(resolved.codec, errors=errors)
    except UnicodeDecodeError as e:
        raise CSVDecodeError(f"Could not decode content as {resolved.value}: {e}") from e


def read_with_encoding(
    source: Union[bytes, bytearray, str, "os.PathLike[str]", BinaryIO],
    encoding: Union[Encoding, str] = Encoding.UTF_8,
    errors: str = "replace"
) -> str:
    """
    Read a file, path, or buffer and decode it with the given encoding.

    Args:
        source: Raw bytes, a file path, or a binary file-like object
        encoding: Encoding member or label
        errors: Decoding error handler

    Returns:
        Decoded text
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    elif isinstance(source, (str, os.PathLike)):
        with open(source, mode='rb') as f:
            data = f.read()
    else:
        data = source.read()

    return decode_with_encoding(data, encoding, errors=errors)


def suggest_encoding(data: bytes) -> Optional[Encoding]:
    """
    Ask chardet for a second opinion on the encoding.

    Only the first CHARDET_SAMPLE_SIZE bytes are analysed. The result is
    advisory and limited to encodings the importer supports.

    Returns:
        Suggested Encoding or None if chardet has no usable answer
    """
    detected = chardet.detect(bytes(data[:CHARDET_SAMPLE_SIZE]))
    name = (detected.get('encoding') or '').lower()
    if not name:
        return None

    confidence = detected.get('confidence', 0)
    suggestion = _CHARDET_NAMES.get(name)
    logger.debug(f"chardet detected: {name} (confidence: {confidence}) -> {suggestion}")
    return suggestion
