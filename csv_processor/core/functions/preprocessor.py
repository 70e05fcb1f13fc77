# csv_processor/core/functions/preprocessor.py
"""
BasePreprocessor - Text cleanup stage

Runs between decoding and parsing:
    1. FileConverter.convert() -> (text, encoding)
    2. Preprocessor.preprocess() -> PreprocessedData (THIS STEP)
    3. Delimiter detection and parsing
    4. MetadataExtractor.extract() -> DocumentMetadata
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class PreprocessedData:
    """
    Output of the cleanup stage.

    Attributes:
        raw_content: Text exactly as decoded
        clean_content: Text handed to the parser - THIS IS THE TRUE SOURCE
        encoding: Encoding label the text was decoded with
        metadata: Facts noticed while cleaning (BOM present, line count, ...)
    """
    raw_content: Any = None
    clean_content: Any = None  # TRUE SOURCE
    encoding: str = "UTF-8"
    metadata: Dict[str, Any] = field(default_factory=dict)


class BasePreprocessor(ABC):
    """
    Cleanup stage interface.

    Subclasses provide preprocess() and get_format_name().
    """

    @abstractmethod
    def preprocess(self, converted_data: Any, **kwargs) -> PreprocessedData:
        """
        Clean the converter output.

        Args:
            converted_data: Return value of the converter's convert()
            **kwargs: Stage-specific options

        Returns:
            PreprocessedData
        """
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        pass

    def validate(self, data: Any) -> bool:
        """Whether preprocess() accepts ``data``. Accepts everything by default."""
        return True


__all__ = [
    'BasePreprocessor',
    'PreprocessedData',
]
