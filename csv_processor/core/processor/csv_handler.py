# csv_processor/core/processor/csv_handler.py
"""
CSV Handler - CSV/TSV File Importer

Class-based handler for CSV/TSV files inheriting from BaseHandler.
Runs the decode -> preprocess -> delimiter detection -> parse pipeline for
one file.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union, TYPE_CHECKING

from csv_processor.core.processor.base_handler import BaseHandler
from csv_processor.core.processor.csv_helper import (
    Encoding,
    ParseOptions,
    ParseResult,
    detect_delimiter,
    parse_csv,
    suggest_encoding,
)
from csv_processor.core.processor.csv_helper.csv_file_converter import CSVFileConverter
from csv_processor.core.processor.csv_helper.csv_metadata import CSVMetadataExtractor
from csv_processor.core.processor.csv_helper.csv_preprocessor import CSVPreprocessor

if TYPE_CHECKING:
    from csv_processor.core.csv_import_processor import CurrentFile

logger = logging.getLogger("csv-processor")


@dataclass
class DecodedCSV:
    """Decoded CSV content together with the encoding that produced it."""
    content: str
    encoding: Encoding
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CSVImport:
    """Outcome of importing one CSV file."""
    decoded: DecodedCSV
    delimiter: str
    options: ParseOptions
    result: ParseResult


class CSVHandler(BaseHandler):
    """CSV/TSV File Import Handler Class"""

    def _create_file_converter(self) -> CSVFileConverter:
        """Create CSV-specific file converter."""
        return CSVFileConverter(errors=self._config.get("decode_errors", "replace"))

    def _create_preprocessor(self) -> CSVPreprocessor:
        """Create CSV-specific preprocessor."""
        return CSVPreprocessor()

    def _create_metadata_extractor(self) -> CSVMetadataExtractor:
        """Create CSV-specific metadata extractor."""
        return CSVMetadataExtractor()

    def decode(
        self,
        current_file: "CurrentFile",
        encoding: Optional[Union[Encoding, str]] = None
    ) -> DecodedCSV:
        """
        Decode the file bytes and clean the resulting text.

        Args:
            current_file: CurrentFile dict containing file info and binary data
            encoding: Encoding to use (None for auto-detect)

        Returns:
            DecodedCSV

        Raises:
            UnsupportedEncodingError: If the encoding is not supported
            CSVDecodeError: If strict decoding fails
        """
        content, used_encoding = self.convert_file(current_file, encoding=encoding)
        preprocessed = self.preprocess((content, used_encoding))

        if encoding is None:
            suggestion = suggest_encoding(current_file.get("file_data", b""))
            if suggestion is not None and suggestion != used_encoding:
                self.logger.warning(
                    f"Sniffed {used_encoding} but chardet suggests {suggestion}; "
                    "select the encoding manually if the text looks garbled"
                )
            if suggestion is not None:
                preprocessed.metadata["suggested_encoding"] = suggestion.value

        return DecodedCSV(
            content=preprocessed.clean_content,  # TRUE SOURCE
            encoding=used_encoding,
            metadata=preprocessed.metadata,
        )

    def parse(
        self,
        decoded: DecodedCSV,
        has_headers: bool = True,
        delimiter: Optional[str] = None
    ) -> CSVImport:
        """
        Parse decoded content, detecting the delimiter when none is given.

        Args:
            decoded: Output of decode()
            has_headers: Use the first line as header
            delimiter: Delimiter override (None for auto-detect)

        Returns:
            CSVImport
        """
        if not delimiter:
            delimiter = detect_delimiter(decoded.content)

        options = ParseOptions(
            has_headers=has_headers,
            delimiter=delimiter,
            trim_fields=self._config.get("trim_fields", True),
            skip_empty_lines=self._config.get("skip_empty_lines", True),
        )
        result = parse_csv(decoded.content, options)
        return CSVImport(
            decoded=decoded,
            delimiter=delimiter,
            options=options,
            result=result,
        )

    def default_delimiter(self, current_file: "CurrentFile") -> Optional[str]:
        """Delimiter implied by the file name (tab for ".tsv"), or None."""
        ext = os.path.splitext(current_file.get("file_name") or "")[1].lower()
        return '\t' if ext == '.tsv' else None

    def process(
        self,
        current_file: "CurrentFile",
        encoding: Optional[Union[Encoding, str]] = None,
        has_headers: bool = True,
        delimiter: Optional[str] = None
    ) -> CSVImport:
        """
        Import a CSV/TSV file.

        Args:
            current_file: CurrentFile dict containing file info and binary data
            encoding: Encoding (None for auto-detect)
            has_headers: Use the first line as header
            delimiter: Delimiter (None for auto-detect; ".tsv" files default to tab)

        Returns:
            CSVImport with decoded content, delimiter, options and parse result
        """
        file_name = current_file.get("file_name") or "<buffer>"
        self.logger.info(f"CSV import: {file_name}")

        if delimiter is None:
            delimiter = self.default_delimiter(current_file)

        decoded = self.decode(current_file, encoding)
        imported = self.parse(decoded, has_headers=has_headers, delimiter=delimiter)

        self.logger.info(
            f"CSV: encoding={decoded.encoding}, delimiter={imported.delimiter!r}, "
            f"rows={imported.result.row_count}, errors={len(imported.result.errors)}"
        )
        return imported
