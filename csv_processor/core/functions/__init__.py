# csv_processor/core/functions/__init__.py
"""
Functions - Pipeline Stage Interfaces

Module Components:
- file_converter: BaseFileConverter (binary -> workable data)
- preprocessor: BasePreprocessor, PreprocessedData (cleanup before parsing)
- metadata_extractor: DocumentMetadata and its extractor/formatter

Usage Example:
    from csv_processor.core.functions import DocumentMetadata, MetadataFormatter
"""

from csv_processor.core.functions.file_converter import BaseFileConverter

from csv_processor.core.functions.preprocessor import (
    BasePreprocessor,
    PreprocessedData,
)

from csv_processor.core.functions.metadata_extractor import (
    MetadataField,
    DocumentMetadata,
    MetadataFormatter,
    BaseMetadataExtractor,
)

__all__ = [
    # File converter
    "BaseFileConverter",
    # Preprocessor
    "BasePreprocessor",
    "PreprocessedData",
    # Metadata
    "MetadataField",
    "DocumentMetadata",
    "MetadataFormatter",
    "BaseMetadataExtractor",
]
