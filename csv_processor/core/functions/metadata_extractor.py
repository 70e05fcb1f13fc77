# csv_processor/core/functions/metadata_extractor.py
"""
Import Metadata

Describes an imported file (name, size, encoding, delimiter, shape) in a
uniform container and renders it as a tagged text block.

Contents:
- MetadataField: names of the standard fields, in display order
- DocumentMetadata: container for one import
- MetadataFormatter: <CSV-Metadata> text renderer
- BaseMetadataExtractor: interface for building DocumentMetadata from a source

Usage Example:
    class TSVMetadataExtractor(BaseMetadataExtractor):
        def extract(self, source) -> DocumentMetadata:
            return DocumentMetadata(file_name=source.name, delimiter="Tab")

    print(TSVMetadataExtractor().extract_and_format(source))
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger("csv_processor.metadata")


class MetadataField(str, Enum):
    """Standard metadata field names, in display order."""
    FILE_NAME = "file_name"
    FILE_SIZE = "file_size"
    MODIFIED_TIME = "modified_time"
    ENCODING = "encoding"
    DELIMITER = "delimiter"
    HAS_HEADER = "has_header"
    ROW_COUNT = "row_count"
    COL_COUNT = "col_count"


STANDARD_FIELDS = tuple(member.value for member in MetadataField)


@dataclass
class DocumentMetadata:
    """
    Metadata of one imported file.

    Unset standard fields stay None and are left out of to_dict() and of the
    formatted block. Format-specific values go into ``custom``.
    """
    file_name: Optional[str] = None
    file_size: Optional[str] = None
    modified_time: Optional[datetime] = None
    encoding: Optional[str] = None
    delimiter: Optional[str] = None
    has_header: Optional[bool] = None
    row_count: Optional[int] = None
    col_count: Optional[int] = None
    custom: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Standard fields that are set, followed by the custom entries."""
        data = {
            name: getattr(self, name)
            for name in STANDARD_FIELDS
            if getattr(self, name) is not None
        }
        data.update(self.custom)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocumentMetadata":
        """Inverse of to_dict(); unknown keys end up in ``custom``."""
        standard = {k: v for k, v in data.items() if k in STANDARD_FIELDS}
        extra = {k: v for k, v in data.items() if k not in STANDARD_FIELDS}
        return cls(custom=extra, **standard)

    def is_empty(self) -> bool:
        return len(self.to_dict()) == 0

    def __bool__(self) -> bool:
        return not self.is_empty()


class MetadataFormatter:
    """
    Renders DocumentMetadata as an indented, tagged block.

    Example:
        >>> print(MetadataFormatter().format(metadata))
        <CSV-Metadata>
          File Name: people.csv
          Encoding: UTF-8
          Header Row: Yes
        </CSV-Metadata>
    """

    LABELS = {
        "file_name": "File Name",
        "file_size": "File Size",
        "modified_time": "Last Modified",
        "encoding": "Encoding",
        "delimiter": "Delimiter",
        "has_header": "Header Row",
        "row_count": "Row Count",
        "col_count": "Column Count",
    }

    def __init__(
        self,
        metadata_tag_prefix: str = "<CSV-Metadata>",
        metadata_tag_suffix: str = "</CSV-Metadata>",
        date_format: str = "%Y-%m-%d %H:%M:%S",
        indent: str = "  ",
    ):
        self.metadata_tag_prefix = metadata_tag_prefix
        self.metadata_tag_suffix = metadata_tag_suffix
        self.date_format = date_format
        self.indent = indent
        self.field_labels = dict(self.LABELS)

    def format(self, metadata: DocumentMetadata) -> str:
        """Tagged block for ``metadata``, or "" when nothing is set."""
        if not metadata:
            return ""

        body = [
            f"{self.indent}{self.get_label(name)}: {self._render_value(value)}"
            for name, value in metadata.to_dict().items()
            if value is not None
        ]
        return "\n".join([self.metadata_tag_prefix, *body, self.metadata_tag_suffix])

    def _render_value(self, value: Any) -> str:
        if isinstance(value, bool):
            return "Yes" if value else "No"
        if isinstance(value, datetime):
            return value.strftime(self.date_format)
        return str(value)

    def get_label(self, field_name: str) -> str:
        """Display label; unknown names are title-cased ("error_count" -> "Error Count")."""
        if field_name in self.field_labels:
            return self.field_labels[field_name]
        return field_name.replace("_", " ").title()


class BaseMetadataExtractor(ABC):
    """
    Builds DocumentMetadata from a format-specific source object.

    Subclasses implement extract(); formatting is shared.
    """

    def __init__(self, formatter: Optional[MetadataFormatter] = None):
        self._formatter = formatter if formatter is not None else MetadataFormatter()
        self._logger = logging.getLogger(f"csv-processor.{type(self).__name__}")

    @property
    def formatter(self) -> MetadataFormatter:
        return self._formatter

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @abstractmethod
    def extract(self, source: Any) -> DocumentMetadata:
        """Describe ``source``."""
        pass

    def format(self, metadata: DocumentMetadata) -> str:
        return self._formatter.format(metadata)

    def extract_and_format(self, source: Any) -> str:
        return self.format(self.extract(source))

    def extract_to_dict(self, source: Any) -> Dict[str, Any]:
        return self.extract(source).to_dict()


__all__ = [
    "MetadataField",
    "DocumentMetadata",
    "MetadataFormatter",
    "BaseMetadataExtractor",
]
