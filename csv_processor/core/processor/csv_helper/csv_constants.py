# csv_helper/csv_constants.py
"""
CSV Import Constants and Type Definitions

Defines the constants, enumerations, data classes and exceptions shared by the
CSV import pipeline (encoding sniffing, delimiter detection, parsing and
column mapping).
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# === Encoding constants ===

class Encoding(str, Enum):
    """
    Text encodings known to the importer.

    Values are the labels a browser ``TextDecoder`` understands; the matching
    Python codec is available through :attr:`codec`. The UTF-16/UTF-32 members
    are only ever produced by BOM detection and are not offered for selection.
    """
    UTF_8 = "UTF-8"
    ISO_8859_1 = "ISO-8859-1"
    WINDOWS_1252 = "windows-1252"
    ISO_8859_15 = "ISO-8859-15"
    MAC_ROMAN = "macintosh"
    WINDOWS_1251 = "windows-1251"
    ISO_8859_2 = "ISO-8859-2"
    ISO_8859_5 = "ISO-8859-5"
    UTF_16LE = "UTF-16LE"
    UTF_16BE = "UTF-16BE"
    UTF_32LE = "UTF-32LE"
    UTF_32BE = "UTF-32BE"

    @property
    def codec(self) -> str:
        """Python codec name used to decode this encoding."""
        return ENCODING_CODECS[self]

    @property
    def label(self) -> str:
        """Human-readable label (falls back to the raw value)."""
        return ENCODING_LABELS.get(self, self.value)

    def __str__(self) -> str:
        return self.value


ENCODING_CODECS = {
    Encoding.UTF_8: "utf-8",
    Encoding.ISO_8859_1: "latin-1",
    Encoding.WINDOWS_1252: "cp1252",
    Encoding.ISO_8859_15: "iso8859-15",
    Encoding.MAC_ROMAN: "mac-roman",
    Encoding.WINDOWS_1251: "cp1251",
    Encoding.ISO_8859_2: "iso8859-2",
    Encoding.ISO_8859_5: "iso8859-5",
    Encoding.UTF_16LE: "utf-16-le",
    Encoding.UTF_16BE: "utf-16-be",
    Encoding.UTF_32LE: "utf-32-le",
    Encoding.UTF_32BE: "utf-32-be",
}

ENCODING_LABELS = {
    Encoding.UTF_8: "UTF-8 (Standard)",
    Encoding.ISO_8859_1: "ISO-8859-1 (Latin-1)",
    Encoding.WINDOWS_1252: "Windows-1252 (Western European)",
    Encoding.ISO_8859_15: "ISO-8859-15 (Latin-9)",
    Encoding.MAC_ROMAN: "Mac Roman",
    Encoding.WINDOWS_1251: "Windows-1251 (Cyrillic)",
    Encoding.ISO_8859_2: "ISO-8859-2 (Central European)",
    Encoding.ISO_8859_5: "ISO-8859-5 (Cyrillic)",
}

# Encodings offered for manual selection (order preserved for selectors)
SUPPORTED_ENCODINGS: List[Dict[str, str]] = [
    {"value": enc.value, "label": label} for enc, label in ENCODING_LABELS.items()
]

# Byte order marks, longest prefix first where prefixes overlap
BOM_TABLE = [
    (b'\xef\xbb\xbf', Encoding.UTF_8),
    (b'\xff\xfe\x00\x00', Encoding.UTF_32LE),
    (b'\xff\xfe', Encoding.UTF_16LE),
    (b'\x00\x00\xfe\xff', Encoding.UTF_32BE),
    (b'\xfe\xff', Encoding.UTF_16BE),
]

# Encoding used when the content is not clearly UTF-8
DEFAULT_ENCODING = Encoding.WINDOWS_1252

# Number of bytes handed to chardet for the advisory guess
CHARDET_SAMPLE_SIZE = 10000


# === Delimiter constants ===

# Checked in this order; earlier candidates win ties
DELIMITER_CANDIDATES = [',', ';', '\t', '|']

DEFAULT_DELIMITER = ','

DELIMITER_NAMES = {
    ',': 'Comma (,)',
    ';': 'Semicolon (;)',
    '\t': 'Tab (\\t)',
    '|': 'Pipe (|)',
}

# Lines inspected by the delimiter detector
DELIMITER_SAMPLE_LINES = 5

# Characters the tokenizer treats as structure, never valid as delimiters
RESERVED_DELIMITER_CHARS = ('"', '\r', '\n')


# === Parser constants ===

EMPTY_CONTENT_ERROR = "Empty CSV content"
FIELD_COUNT_ERROR = "Line {line} has {count} fields, expected {expected}"
SYNTHETIC_HEADER = "Column {index}"
REQUIRED_FIELD_ERROR = "Required field '{label}' is not mapped"


# === Exceptions ===

class UnsupportedEncodingError(LookupError):
    """Raised when an encoding identifier is not in the supported set."""


class CSVDecodeError(ValueError):
    """Raised when strict decoding of the byte buffer fails."""


# === Data classes ===

@dataclass
class ParseOptions:
    """Options for a single parse call."""
    has_headers: bool = True
    delimiter: str = DEFAULT_DELIMITER
    trim_fields: bool = True
    skip_empty_lines: bool = True


@dataclass
class ParseResult:
    """
    Result of parsing CSV text.

    Attributes:
        data: One dict per data line, keyed by header
        headers: Column names (extracted or synthesized)
        errors: Human-readable descriptions of structural anomalies
    """
    data: List[Dict[str, str]] = field(default_factory=list)
    headers: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.data)

    @property
    def col_count(self) -> int:
        return len(self.headers)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [dict(row) for row in self.data],
            "headers": list(self.headers),
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class FieldDefinition:
    """Target field a CSV column can be mapped to."""
    name: str
    required: bool = False
    label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or self.name

