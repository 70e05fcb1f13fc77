# csv_processor/core/processor/base_handler.py
"""
BaseHandler - Import handler skeleton

A handler owns one instance of each pipeline stage and offers thin wrappers
around them. Stages are created on first use through factory methods that
concrete handlers implement:

- _create_file_converter(): bytes -> text
- _create_preprocessor(): text cleanup
- _create_metadata_extractor(): import description

Pipeline:
    1. convert_file()     - decode the uploaded bytes
    2. preprocess()       - clean the decoded text
    3. handler-specific parsing
    4. extract_metadata() - describe the result
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TYPE_CHECKING

from csv_processor.core.functions.file_converter import BaseFileConverter
from csv_processor.core.functions.metadata_extractor import (
    BaseMetadataExtractor,
    DocumentMetadata,
)
from csv_processor.core.functions.preprocessor import (
    BasePreprocessor,
    PreprocessedData,
)

if TYPE_CHECKING:
    from csv_processor.core.csv_import_processor import CurrentFile

logger = logging.getLogger("csv-processor")


class BaseHandler(ABC):
    """
    Import handler skeleton.

    Attributes:
        config: Settings dict handed down by CSVImportProcessor
        file_converter / preprocessor / metadata_extractor: Lazily built stages
        logger: Logger named after the concrete handler class
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._config: Dict[str, Any] = dict(config or {})
        self._stages: Dict[str, Any] = {}
        self._logger = logging.getLogger(f"csv-processor.{self.__class__.__name__}")

    @abstractmethod
    def _create_file_converter(self) -> BaseFileConverter:
        pass

    @abstractmethod
    def _create_preprocessor(self) -> BasePreprocessor:
        pass

    @abstractmethod
    def _create_metadata_extractor(self) -> BaseMetadataExtractor:
        pass

    def _stage(self, name: str, factory) -> Any:
        if name not in self._stages:
            self._stages[name] = factory()
        return self._stages[name]

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def file_converter(self) -> BaseFileConverter:
        return self._stage("file_converter", self._create_file_converter)

    @property
    def preprocessor(self) -> BasePreprocessor:
        return self._stage("preprocessor", self._create_preprocessor)

    @property
    def metadata_extractor(self) -> BaseMetadataExtractor:
        return self._stage("metadata_extractor", self._create_metadata_extractor)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def convert_file(self, current_file: "CurrentFile", **kwargs) -> Any:
        """
        Decode the bytes of ``current_file`` with the handler's converter.

        Args:
            current_file: CurrentFile dict (only ``file_data`` is read)
            **kwargs: Passed to the converter (e.g. encoding)
        """
        return self.file_converter.convert(current_file.get("file_data", b""), **kwargs)

    def preprocess(self, converted_data: Any, **kwargs) -> PreprocessedData:
        """Run the cleanup stage on converter output."""
        return self.preprocessor.preprocess(converted_data, **kwargs)

    def extract_metadata(self, source: Any) -> DocumentMetadata:
        return self.metadata_extractor.extract(source)

    def format_metadata(self, metadata: DocumentMetadata) -> str:
        return self.metadata_extractor.format(metadata)


__all__ = [
    "BaseHandler",
]
