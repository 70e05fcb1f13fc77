# csv_processor/__init__.py
"""
csv_processor Library

A CSV import library: encoding sniffing, delimiter detection, quote-aware
parsing and automatic field-to-column matching.

Package Structure:
- core: Import processing core module
    - CSVImportProcessor: Import session class
    - processor: CSV handler and csv_helper building blocks
    - functions: Pipeline stage interfaces (converter, preprocessor, metadata)

Usage:
    from csv_processor import CSVImportProcessor

    processor = CSVImportProcessor(fields={"email": {"required": True}})
    result = processor.load_file("contacts.csv")
    rows = processor.processed_data()
"""

__version__ = "0.1.0"

# Expose core classes at top level
from csv_processor.core import CSVImportProcessor, CSVProcessorConfig

# Frequently used building blocks
from csv_processor.core.processor.csv_helper import (
    Encoding,
    FieldDefinition,
    ParseOptions,
    ParseResult,
    UnsupportedEncodingError,
    CSVDecodeError,
    detect_encoding,
    detect_delimiter,
    parse_csv,
    auto_match,
)

# Explicit subpackages
from csv_processor import core

__all__ = [
    "__version__",
    # Core classes
    "CSVImportProcessor",
    "CSVProcessorConfig",
    # Building blocks
    "Encoding",
    "FieldDefinition",
    "ParseOptions",
    "ParseResult",
    "UnsupportedEncodingError",
    "CSVDecodeError",
    "detect_encoding",
    "detect_delimiter",
    "parse_csv",
    "auto_match",
    # Subpackages
    "core",
]
