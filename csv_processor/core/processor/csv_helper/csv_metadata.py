# csv_processor/core/processor/csv_helper/csv_metadata.py
"""
CSV Import Metadata

Provides CSVMetadataExtractor for summarising an imported CSV file.
Implements the BaseMetadataExtractor interface.

A CSV import has no document properties, so the metadata describes the file
structure instead:
- File name, size and modification time (files read from disk)
- Encoding (and chardet's suggestion when it differs), delimiter
- Row/column count, header flag, column list, parse error count
"""
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from csv_processor.core.functions.metadata_extractor import (
    BaseMetadataExtractor,
    DocumentMetadata,
)
from csv_processor.core.processor.csv_helper.csv_constants import DELIMITER_NAMES, ParseResult

logger = logging.getLogger("csv-processor")

# Columns listed before the remainder is summarised
MAX_LISTED_COLUMNS = 10

SIZE_UNITS = ("KB", "MB", "GB")


def format_file_size(size_bytes: int) -> str:
    """Human-readable size, e.g. 1536 -> "1.5 KB"."""
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = float(size_bytes)
    for unit in SIZE_UNITS:
        size /= 1024
        if size < 1024 or unit == SIZE_UNITS[-1]:
            break
    return f"{size:.1f} {unit}"


def get_delimiter_name(delimiter: str) -> str:
    """Human-readable delimiter name (e.g., "Comma (,)")."""
    return DELIMITER_NAMES.get(delimiter, repr(delimiter))


@dataclass
class CSVSourceInfo:
    """
    Everything CSVMetadataExtractor.extract() needs to describe one import.
    """
    encoding: str
    delimiter: str
    has_header: bool
    result: ParseResult
    file_size: int = 0
    file_name: Optional[str] = None
    file_path: Optional[str] = None
    suggested_encoding: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)


class CSVMetadataExtractor(BaseMetadataExtractor):
    """
    Describes a parsed CSV import.

    Usage:
        source = CSVSourceInfo(
            encoding="UTF-8",
            delimiter=",",
            has_header=True,
            result=parse_result,
            file_size=len(data),
            file_name="people.csv",
        )
        text = CSVMetadataExtractor().extract_and_format(source)
    """

    CSV_FIELD_LABELS = {
        'columns': 'Columns',
        'error_count': 'Parse Errors',
        'suggested_encoding': 'Suggested Encoding',
    }

    def __init__(self, formatter=None):
        super().__init__(formatter)
        for name, label in self.CSV_FIELD_LABELS.items():
            self.formatter.field_labels.setdefault(name, label)

    def extract(self, source: CSVSourceInfo) -> DocumentMetadata:
        """
        Build metadata for an imported CSV file.

        Args:
            source: CSVSourceInfo (encoding, delimiter, parse result, file info)

        Returns:
            DocumentMetadata instance
        """
        custom: Dict[str, Any] = {}
        modified_time = None

        if source.file_path and os.path.exists(source.file_path):
            modified_time = datetime.fromtimestamp(os.stat(source.file_path).st_mtime)

        headers: List[str] = [h for h in source.result.headers if h]
        if source.has_header and headers:
            columns = ', '.join(headers[:MAX_LISTED_COLUMNS])
            if len(headers) > MAX_LISTED_COLUMNS:
                columns += f' (+{len(headers) - MAX_LISTED_COLUMNS} more)'
            custom['columns'] = columns

        custom['error_count'] = len(source.result.errors)

        if source.suggested_encoding and source.suggested_encoding != source.encoding:
            custom['suggested_encoding'] = source.suggested_encoding

        custom.update(source.extra)

        self.logger.debug(f"Extracted CSV metadata: {list(custom.keys())}")

        return DocumentMetadata(
            file_name=source.file_name,
            file_size=format_file_size(source.file_size),
            modified_time=modified_time,
            encoding=source.encoding,
            delimiter=get_delimiter_name(source.delimiter),
            has_header=source.has_header,
            row_count=source.result.row_count,
            col_count=source.result.col_count,
            custom=custom,
        )


__all__ = [
    'CSVMetadataExtractor',
    'CSVSourceInfo',
    'format_file_size',
    'get_delimiter_name',
]
