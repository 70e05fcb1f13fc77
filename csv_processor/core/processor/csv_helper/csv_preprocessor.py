# csv_processor/core/processor/csv_helper/csv_preprocessor.py
"""
CSVPreprocessor - cleanup of decoded CSV text.

Pipeline position:
    1. CSVFileConverter.convert() -> (content: str, encoding: Encoding)
    2. CSVPreprocessor.preprocess() -> PreprocessedData (THIS STEP)
    3. Delimiter detection and parsing
    4. CSVMetadataExtractor.extract() -> DocumentMetadata

Records a BOM that survived decoding and counts physical lines.
"""
import logging
from typing import Any, Dict, Tuple

from csv_processor.core.functions.preprocessor import (
    BasePreprocessor,
    PreprocessedData,
)

logger = logging.getLogger("csv_processor.csv.preprocessor")

BOM_CHAR = '\ufeff'


class CSVPreprocessor(BasePreprocessor):
    """CSV text cleanup."""

    @staticmethod
    def _unpack(converted_data: Any) -> Tuple[str, str, bool]:
        if isinstance(converted_data, tuple) and len(converted_data) >= 2:
            return converted_data[0], str(converted_data[1]), True
        if isinstance(converted_data, str):
            return converted_data, "UTF-8", False
        return "", "UTF-8", False

    def preprocess(self, converted_data: Any, **kwargs) -> PreprocessedData:
        """
        Args:
            converted_data: ``(content, encoding)`` from CSVFileConverter, or plain text

        Returns:
            PreprocessedData; a leading BOM is recorded, not removed
        """
        content, encoding, has_encoding = self._unpack(converted_data)
        metadata: Dict[str, Any] = {}
        if has_encoding:
            metadata['detected_encoding'] = encoding

        # The leading U+FEFF stays in place; tokenize_csv drops exactly one
        if content[:1] == BOM_CHAR:
            metadata['bom_present'] = True

        metadata['line_count'] = len(content.splitlines())
        logger.debug("CSV preprocessor: metadata=%s", metadata)

        return PreprocessedData(
            raw_content=content,
            clean_content=content,  # TRUE SOURCE
            encoding=encoding,
            metadata=metadata,
        )

    def get_format_name(self) -> str:
        return "CSV Preprocessor"

    def validate(self, data: Any) -> bool:
        """Accepts text or a ``(text, encoding)`` tuple."""
        text = data[0] if isinstance(data, tuple) and data else data
        return isinstance(text, str)


__all__ = ['CSVPreprocessor']
