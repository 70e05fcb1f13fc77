# csv_helper/__init__.py
"""
CSV Helper Module

Functional building blocks used by csv_handler.py and the import processor.

Module Layout:
- csv_constants: constants, enums, data classes, exceptions
- csv_encoding: BOM/UTF-8 encoding sniffing and decoding
- csv_parser: delimiter detection and quote-aware parsing
- csv_mapping: field-to-column auto-matching
- csv_metadata: import metadata extraction
- csv_file_converter / csv_preprocessor: pipeline stages
"""

# Constants
from csv_processor.core.processor.csv_helper.csv_constants import (
    Encoding,
    SUPPORTED_ENCODINGS,
    DEFAULT_ENCODING,
    DELIMITER_CANDIDATES,
    DELIMITER_NAMES,
    DEFAULT_DELIMITER,
    ParseOptions,
    ParseResult,
    FieldDefinition,
    UnsupportedEncodingError,
    CSVDecodeError,
)

# Encoding
from csv_processor.core.processor.csv_helper.csv_encoding import (
    detect_bom,
    detect_encoding,
    resolve_encoding,
    decode_with_encoding,
    read_with_encoding,
    suggest_encoding,
)

# Parser
from csv_processor.core.processor.csv_helper.csv_parser import (
    detect_delimiter,
    tokenize_csv,
    parse_csv,
    format_csv_data,
)

# Mapping
from csv_processor.core.processor.csv_helper.csv_mapping import (
    normalize_fields,
    auto_match,
    map_field,
    missing_required_fields,
    apply_mapping,
)

# Metadata
from csv_processor.core.processor.csv_helper.csv_metadata import (
    CSVMetadataExtractor,
    CSVSourceInfo,
)

__all__ = [
    # Constants
    "Encoding",
    "SUPPORTED_ENCODINGS",
    "DEFAULT_ENCODING",
    "DELIMITER_CANDIDATES",
    "DELIMITER_NAMES",
    "DEFAULT_DELIMITER",
    "ParseOptions",
    "ParseResult",
    "FieldDefinition",
    "UnsupportedEncodingError",
    "CSVDecodeError",
    # Encoding
    "detect_bom",
    "detect_encoding",
    "resolve_encoding",
    "decode_with_encoding",
    "read_with_encoding",
    "suggest_encoding",
    # Parser
    "detect_delimiter",
    "tokenize_csv",
    "parse_csv",
    "format_csv_data",
    # Mapping
    "normalize_fields",
    "auto_match",
    "map_field",
    "missing_required_fields",
    "apply_mapping",
    # Metadata
    "CSVMetadataExtractor",
    "CSVSourceInfo",
]
