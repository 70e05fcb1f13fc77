# csv_processor/core/csv_import_processor.py
"""CSVImportProcessor - CSV Import Session Class

Main entry point of the csv_processor library. Holds the state of one import
session (raw bytes, selected encoding, header flag, delimiter, parse result
and field mapping) and re-runs the relevant pipeline stages when one of them
changes.

Usage Example:
    from csv_processor import CSVImportProcessor

    processor = CSVImportProcessor(
        fields={
            "email": {"required": True, "label": "E-mail"},
            "name": "Full name",
        }
    )
    result = processor.load_file("contacts.csv")
    print(result.headers, result.errors)

    # Re-decode with another encoding, toggle headers, fix a mapping
    processor.set_encoding("windows-1251")
    processor.set_has_headers(False)
    processor.map_field("name", "Column 2")

    rows = processor.processed_data()
"""

import logging
import os
from dataclasses import dataclass, fields as dataclass_fields
from pathlib import Path
from typing import Any, Dict, List, Optional, TypedDict, Union

from csv_processor.core.functions.metadata_extractor import DocumentMetadata
from csv_processor.core.processor.csv_handler import CSVHandler, CSVImport, DecodedCSV
from csv_processor.core.processor.csv_helper import (
    Encoding,
    FieldDefinition,
    ParseResult,
    apply_mapping,
    auto_match,
    map_field,
    missing_required_fields,
    normalize_fields,
    resolve_encoding,
)
from csv_processor.core.processor.csv_helper.csv_constants import (
    REQUIRED_FIELD_ERROR,
    RESERVED_DELIMITER_CHARS,
)
from csv_processor.core.processor.csv_helper.csv_mapping import FieldsInput
from csv_processor.core.processor.csv_helper.csv_metadata import CSVSourceInfo

logger = logging.getLogger("csv-processor")


class CurrentFile(TypedDict, total=False):
    """
    TypedDict containing file information.

    Attributes:
        file_path: Absolute path of the original file (files read from disk)
        file_name: File name (including extension)
        file_data: Binary data of the file
        file_size: File size in bytes
    """
    file_path: str
    file_name: str
    file_data: bytes
    file_size: int


@dataclass
class CSVProcessorConfig:
    """
    CSVImportProcessor Configuration.

    Attributes:
        has_headers: Use the first line as header row
        ignore_case: Case-insensitive exact matching of fields to columns
        containment_match: Fall back to substring matching when no exact match exists
        trim_fields: Strip whitespace around each field
        skip_empty_lines: Drop lines whose fields are all empty
        decode_errors: "replace" substitutes malformed bytes, "strict" raises
    """
    has_headers: bool = True
    ignore_case: bool = True
    containment_match: bool = False
    trim_fields: bool = True
    skip_empty_lines: bool = True
    decode_errors: str = "replace"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CSVProcessorConfig":
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in dataclass_fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in dataclass_fields(self)}


class CSVImportProcessor:
    """
    csv_processor Main Import Session Class

    Owns the per-file state and drives the handler pipeline:
    bytes -> encoding -> text -> delimiter -> rows -> field mapping.

    Attributes:
        config: Resolved CSVProcessorConfig
        fields: Target field definitions
        encoding / delimiter / has_headers: Current pipeline settings
        result: Current ParseResult
        mapping: Copy of the current field -> column mapping

    Example:
        >>> processor = CSVImportProcessor(fields={"name": "Name"})
        >>> result = processor.load(b"Name,Age\\nAda,36\\n")
        >>> processor.mapping
        {'name': 'Name'}
    """

    def __init__(
        self,
        fields: Optional[FieldsInput] = None,
        config: Optional[Dict[str, Any]] = None,
        *,
        has_headers: Optional[bool] = None,
        ignore_case: Optional[bool] = None,
        containment_match: Optional[bool] = None,
        trim_fields: Optional[bool] = None,
        skip_empty_lines: Optional[bool] = None,
        decode_errors: Optional[str] = None,
    ):
        """
        Initialize CSVImportProcessor.

        Args:
            fields: Target field definitions (see normalize_fields)
            config: Configuration dictionary with CSVProcessorConfig keys
            has_headers: Override config["has_headers"]
            ignore_case: Override config["ignore_case"]
            containment_match: Override config["containment_match"]
            trim_fields: Override config["trim_fields"]
            skip_empty_lines: Override config["skip_empty_lines"]
            decode_errors: Override config["decode_errors"]
        """
        overrides = {
            "has_headers": has_headers,
            "ignore_case": ignore_case,
            "containment_match": containment_match,
            "trim_fields": trim_fields,
            "skip_empty_lines": skip_empty_lines,
            "decode_errors": decode_errors,
        }
        merged = dict(config or {})
        merged.update({k: v for k, v in overrides.items() if v is not None})
        self._config = CSVProcessorConfig.from_dict(merged)

        self._fields: Dict[str, FieldDefinition] = normalize_fields(fields)
        self._handler = CSVHandler(self._config.to_dict())
        self._logger = logging.getLogger("csv-processor.CSVImportProcessor")

        self._has_headers = self._config.has_headers
        self._current_file: Optional[CurrentFile] = None
        self._delimiter_override: Optional[str] = None
        self._decoded: Optional[DecodedCSV] = None
        self._import: Optional[CSVImport] = None
        self._mapping: Dict[str, str] = {}

    # =========================================================================
    # Public Properties
    # =========================================================================

    @property
    def config(self) -> CSVProcessorConfig:
        """Current configuration."""
        return self._config

    @property
    def fields(self) -> Dict[str, FieldDefinition]:
        """Target field definitions."""
        return dict(self._fields)

    @property
    def is_loaded(self) -> bool:
        """Whether a file has been loaded."""
        return self._import is not None

    @property
    def encoding(self) -> Optional[Encoding]:
        """Encoding used to decode the current file."""
        return self._decoded.encoding if self._decoded else None

    @property
    def delimiter(self) -> Optional[str]:
        """Delimiter used to parse the current file."""
        return self._import.delimiter if self._import else None

    @property
    def has_headers(self) -> bool:
        """Whether the first line is used as header row."""
        return self._has_headers

    @property
    def result(self) -> Optional[ParseResult]:
        """Current parse result."""
        return self._import.result if self._import else None

    @property
    def headers(self) -> List[str]:
        return list(self._import.result.headers) if self._import else []

    @property
    def rows(self) -> List[Dict[str, str]]:
        return list(self._import.result.data) if self._import else []

    @property
    def errors(self) -> List[str]:
        return list(self._import.result.errors) if self._import else []

    @property
    def mapping(self) -> Dict[str, str]:
        """Copy of the current field -> column mapping."""
        return dict(self._mapping)

    # =========================================================================
    # Public Methods - Loading
    # =========================================================================

    def load(self, file_data: bytes, file_name: Optional[str] = None) -> ParseResult:
        """
        Load a new file from raw bytes.

        Resets the mapping and all overrides, then sniffs the encoding,
        decodes, detects the delimiter, parses and auto-matches fields.

        Args:
            file_data: Raw file bytes
            file_name: Original file name (used for metadata and ".tsv" handling)

        Returns:
            ParseResult
        """
        file_data = bytes(file_data)
        current_file: CurrentFile = {
            "file_name": file_name or "",
            "file_data": file_data,
            "file_size": len(file_data),
        }
        return self._load_current_file(current_file)

    def load_file(self, file_path: Union[str, Path]) -> ParseResult:
        """
        Load a new file from disk.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        file_path_str = os.path.abspath(str(file_path))
        if not os.path.exists(file_path_str):
            raise FileNotFoundError(f"File not found: {file_path_str}")

        with open(file_path_str, 'rb') as f:
            file_data = f.read()

        current_file: CurrentFile = {
            "file_path": file_path_str,
            "file_name": os.path.basename(file_path_str),
            "file_data": file_data,
            "file_size": len(file_data),
        }
        return self._load_current_file(current_file)

    def reset(self) -> None:
        """Forget the current file, result and mapping."""
        self._current_file = None
        self._delimiter_override = None
        self._decoded = None
        self._import = None
        self._mapping = {}
        self._has_headers = self._config.has_headers

    # =========================================================================
    # Public Methods - Re-entry
    # =========================================================================

    def set_encoding(self, encoding: Union[Encoding, str]) -> ParseResult:
        """
        Re-decode the current file with an explicit encoding and re-parse.

        Raises:
            UnsupportedEncodingError: If the encoding is not supported
            RuntimeError: If no file is loaded
        """
        self._require_loaded()
        resolved = resolve_encoding(encoding)
        self._decoded = self._handler.decode(self._current_file, resolved)
        self._logger.info(f"Encoding changed to {resolved}")
        return self._reparse()

    def set_has_headers(self, has_headers: bool) -> ParseResult:
        """Toggle the header row and re-parse."""
        self._require_loaded()
        self._has_headers = bool(has_headers)
        return self._reparse()

    def set_delimiter(self, delimiter: Optional[str]) -> ParseResult:
        """
        Set the delimiter and re-parse.

        None returns to the load-time choice (tab for ".tsv" files, otherwise
        auto-detection).

        Raises:
            ValueError: If the delimiter is not a single character, or is a
                quote or line break character
        """
        self._require_loaded()
        if delimiter is not None and len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character: {delimiter!r}")
        if delimiter in RESERVED_DELIMITER_CHARS:
            raise ValueError(f"Delimiter cannot be a quote or line break: {delimiter!r}")
        self._delimiter_override = delimiter
        return self._reparse()

    # =========================================================================
    # Public Methods - Mapping
    # =========================================================================

    def map_field(self, field_name: str, column: Optional[str]) -> Dict[str, str]:
        """
        Map a field to a column explicitly ("" or None clears it).

        Raises:
            ValueError: If the field is unknown or the column is not a current header
        """
        if field_name not in self._fields:
            raise ValueError(f"Unknown field: {field_name}")
        if column and column not in self.headers:
            raise ValueError(f"Unknown column: {column}")

        self._mapping = map_field(self._mapping, field_name, column)
        return self.mapping

    def auto_match(self) -> Dict[str, str]:
        """Run auto-matching again for fields without a column."""
        self._mapping = auto_match(
            self.headers,
            self._fields,
            self._mapping,
            ignore_case=self._config.ignore_case,
            containment=self._config.containment_match,
        )
        return self.mapping

    def missing_required_fields(self) -> List[FieldDefinition]:
        """Required fields that have no column."""
        return missing_required_fields(self._fields, self._mapping)

    def validation_errors(self) -> List[str]:
        """One message per required field without a column."""
        return [
            REQUIRED_FIELD_ERROR.format(label=definition.display_label)
            for definition in self.missing_required_fields()
        ]

    def processed_data(self) -> List[Dict[str, str]]:
        """Rows keyed by field name, taken from the mapped columns."""
        return apply_mapping(self.rows, self._fields, self._mapping)

    # =========================================================================
    # Public Methods - Metadata
    # =========================================================================

    def extract_metadata(self) -> DocumentMetadata:
        """Describe the current import."""
        self._require_loaded()
        source = CSVSourceInfo(
            encoding=self._decoded.encoding.value,
            delimiter=self._import.delimiter,
            has_header=self._has_headers,
            result=self._import.result,
            file_size=self._current_file.get("file_size", 0),
            file_name=self._current_file.get("file_name") or None,
            file_path=self._current_file.get("file_path"),
            suggested_encoding=self._decoded.metadata.get("suggested_encoding"),
        )
        return self._handler.extract_metadata(source)

    def format_metadata(self) -> str:
        """Describe the current import as a text block."""
        return self._handler.format_metadata(self.extract_metadata())

    # =========================================================================
    # Private Methods
    # =========================================================================

    def _require_loaded(self) -> None:
        if self._current_file is None or self._decoded is None:
            raise RuntimeError("No CSV file loaded; call load() or load_file() first")

    def _load_current_file(self, current_file: CurrentFile) -> ParseResult:
        self.reset()
        self._import = self._handler.process(current_file, has_headers=self._has_headers)
        self._current_file = current_file
        self._decoded = self._import.decoded
        self.auto_match()
        self._log_result()
        return self._import.result

    def _reparse(self) -> ParseResult:
        self._import = self._handler.parse(
            self._decoded,
            has_headers=self._has_headers,
            delimiter=self._delimiter_override or self._handler.default_delimiter(self._current_file),
        )
        headers = set(self._import.result.headers)
        self._mapping = {
            name: column if column in headers else ""
            for name, column in self._mapping.items()
        }
        self.auto_match()
        self._log_result()
        return self._import.result

    def _log_result(self) -> None:
        result = self._import.result
        if result.errors:
            self._logger.warning(f"CSV import has {len(result.errors)} error(s)")
        self._logger.info(
            f"CSV ready: {result.row_count} rows, {result.col_count} columns, "
            f"mapped {sum(1 for c in self._mapping.values() if c)}/{len(self._fields)} fields"
        )

    def __repr__(self) -> str:
        return (
            f"CSVImportProcessor(loaded={self.is_loaded}, encoding={self.encoding}, "
            f"delimiter={self.delimiter!r}, fields={len(self._fields)})"
        )
