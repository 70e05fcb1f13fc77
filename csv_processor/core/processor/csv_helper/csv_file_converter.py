# csv_processor/core/processor/csv_helper/csv_file_converter.py
"""
CSVFileConverter - CSV file format converter

Converts binary CSV data to a text string, sniffing the encoding when none
is given.
"""
import logging
from typing import Optional, Tuple, Union

from csv_processor.core.functions.file_converter import BaseFileConverter
from csv_processor.core.processor.csv_helper.csv_constants import Encoding
from csv_processor.core.processor.csv_helper.csv_encoding import (
    decode_with_encoding,
    detect_encoding,
    resolve_encoding,
)

logger = logging.getLogger("csv_processor.csv.converter")


class CSVFileConverter(BaseFileConverter):
    """
    CSV file converter.

    Converts binary CSV data to decoded text. An explicit encoding is used
    as-is (unsupported identifiers raise); otherwise the encoding sniffer
    picks one.
    """

    def __init__(self, errors: str = "replace"):
        """
        Initialize CSVFileConverter.

        Args:
            errors: Decoding error handler ("replace" or "strict")
        """
        self._errors = errors
        self._detected_encoding: Optional[Encoding] = None

    def convert(
        self,
        file_data: bytes,
        encoding: Optional[Union[Encoding, str]] = None,
        **kwargs
    ) -> Tuple[str, Encoding]:
        """
        Convert binary CSV data to text string.

        Args:
            file_data: Raw binary CSV data
            encoding: Encoding to use (None for auto-detect)
            **kwargs: Additional options

        Returns:
            Tuple of (decoded text, encoding used)

        Raises:
            UnsupportedEncodingError: If the encoding is not supported
            CSVDecodeError: If strict decoding fails
        """
        if encoding:
            resolved = resolve_encoding(encoding)
        else:
            resolved = detect_encoding(file_data)
            logger.debug(f"Sniffed encoding: {resolved}")

        text = decode_with_encoding(file_data, resolved, errors=self._errors)
        self._detected_encoding = resolved
        return text, resolved

    def get_format_name(self) -> str:
        """Return format name."""
        enc = self._detected_encoding.value if self._detected_encoding else 'unknown'
        return f"CSV ({enc})"

    @property
    def detected_encoding(self) -> Optional[Encoding]:
        """Encoding used during the last conversion."""
        return self._detected_encoding


__all__ = ['CSVFileConverter']
