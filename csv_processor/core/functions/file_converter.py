# csv_processor/core/functions/file_converter.py
"""
BaseFileConverter - Byte decoding stage

First step of the import pipeline:
    Raw bytes -> FileConverter -> (text, encoding) -> Preprocessor -> Parser

Usage:
    class UTF8Converter(BaseFileConverter):
        def convert(self, file_data: bytes, **kwargs):
            return file_data.decode("utf-8"), Encoding.UTF_8

        def get_format_name(self) -> str:
            return "CSV (UTF-8)"
"""
from abc import ABC, abstractmethod
from typing import Any


class BaseFileConverter(ABC):
    """Decoding stage interface."""

    @abstractmethod
    def convert(self, file_data: bytes, **kwargs) -> Any:
        """
        Turn raw bytes into something the preprocessor understands.

        Args:
            file_data: Uploaded file contents
            **kwargs: Converter options (e.g. encoding)
        """
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        """Name shown in logs, e.g. "CSV (UTF-8)"."""
        pass

    def validate(self, file_data: bytes) -> bool:
        return True


__all__ = ["BaseFileConverter"]
