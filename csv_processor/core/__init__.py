# csv_processor/core/__init__.py
"""
Core - CSV Import Core Module

Module Structure:
- csv_import_processor: Main CSVImportProcessor session class
- processor/: CSV handler
    - csv_handler: decode -> preprocess -> detect delimiter -> parse
    - csv_helper/: encoding, parser, mapping and metadata building blocks
- functions/: Pipeline stage interfaces
    - file_converter: BaseFileConverter
    - preprocessor: BasePreprocessor, PreprocessedData
    - metadata_extractor: BaseMetadataExtractor, DocumentMetadata

Usage:
    from csv_processor import CSVImportProcessor
    from csv_processor.core.processor import CSVHandler
    from csv_processor.core.functions import DocumentMetadata
"""

# === Main Class ===
from csv_processor.core.csv_import_processor import (
    CSVImportProcessor,
    CSVProcessorConfig,
    CurrentFile,
)

# === Explicit Subpackage Imports ===
from csv_processor.core import processor
from csv_processor.core import functions

__all__ = [
    # Main Class
    "CSVImportProcessor",
    "CSVProcessorConfig",
    "CurrentFile",
    # Subpackages
    "processor",
    "functions",
]
