# csv_processor/core/processor/__init__.py
"""
Processor - CSV Handler Module

Handler List:
- base_handler: BaseHandler abstract class
- csv_handler: CSV/TSV import handler

Helper Modules (subdirectories):
- csv_helper/: encoding, parsing, mapping and metadata helpers

Usage Example:
    from csv_processor.core.processor import CSVHandler
    from csv_processor.core.processor.csv_helper import detect_encoding
"""

from csv_processor.core.processor.base_handler import BaseHandler

from csv_processor.core.processor.csv_handler import (
    CSVHandler,
    CSVImport,
    DecodedCSV,
)

from csv_processor.core.processor import csv_helper

__all__ = [
    "BaseHandler",
    "CSVHandler",
    "CSVImport",
    "DecodedCSV",
    "csv_helper",
]
