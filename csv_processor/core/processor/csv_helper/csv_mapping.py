# csv_helper/csv_mapping.py
"""
CSV Column Mapping

Maps target fields to CSV columns.

Matching order for a field that has no column yet:
1. Exact match of the field name or label against each header
2. (optional) Containment: header contains the field text or vice versa

The first header in column order wins. Existing choices are never
overwritten, so running the matcher repeatedly is stable.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from csv_processor.core.processor.csv_helper.csv_constants import FieldDefinition

logger = logging.getLogger("csv-processor")

FieldsInput = Union[
    Mapping[str, Union[FieldDefinition, Dict[str, Any], str, None]],
    Sequence[FieldDefinition],
]


def normalize_fields(fields: Optional[FieldsInput]) -> Dict[str, FieldDefinition]:
    """
    Normalize field definitions to a name -> FieldDefinition dict.

    Accepted shapes:
        {"email": FieldDefinition("email", required=True)}
        {"email": {"required": True, "label": "E-mail"}}
        {"email": "E-mail"}
        [FieldDefinition("email"), ...]

    Args:
        fields: Field definitions in any accepted shape

    Returns:
        Ordered dict keyed by field name
    """
    if not fields:
        return {}

    normalized: Dict[str, FieldDefinition] = {}

    if not isinstance(fields, Mapping):
        for definition in fields:
            normalized[definition.name] = definition
        return normalized

    for name, spec in fields.items():
        if isinstance(spec, FieldDefinition):
            normalized[name] = spec if spec.name == name else FieldDefinition(name, spec.required, spec.label)
        elif isinstance(spec, Mapping):
            normalized[name] = FieldDefinition(
                name=name,
                required=bool(spec.get("required", False)),
                label=spec.get("label") or None,
            )
        elif isinstance(spec, str):
            normalized[name] = FieldDefinition(name=name, label=spec or None)
        else:
            normalized[name] = FieldDefinition(name=name)

    return normalized


def _fold(value: str, ignore_case: bool) -> str:
    return value.lower() if ignore_case else value


def _find_exact(headers: Sequence[str], candidates: List[str], ignore_case: bool) -> Optional[str]:
    targets = {_fold(c, ignore_case) for c in candidates}
    for header in headers:
        if _fold(header, ignore_case) in targets:
            return header
    return None


def _find_containing(headers: Sequence[str], candidates: List[str]) -> Optional[str]:
    targets = [c.lower() for c in candidates if c]
    for header in headers:
        h = header.lower()
        if not h:
            continue
        for text in targets:
            if text in h or h in text:
                return header
    return None


def auto_match(
    headers: Sequence[str],
    fields: Optional[FieldsInput],
    existing_mapping: Optional[Mapping[str, Optional[str]]] = None,
    ignore_case: bool = True,
    containment: bool = False
) -> Dict[str, str]:
    """
    Propose a column for every field that does not have one yet.

    Args:
        headers: Parsed CSV headers, in column order
        fields: Target field definitions
        existing_mapping: Current choices; non-empty entries are kept
        ignore_case: Compare names case-insensitively in the exact pass
        containment: Run the substring pass when no exact match exists

    Returns:
        New mapping of field name -> header ("" when unmatched)
    """
    definitions = normalize_fields(fields)
    existing = dict(existing_mapping or {})
    mapping: Dict[str, str] = {}

    for name, definition in definitions.items():
        current = existing.get(name)
        if current:
            mapping[name] = current
            continue

        candidates = [name]
        if definition.label and definition.label != name:
            candidates.append(definition.label)

        match = _find_exact(headers, candidates, ignore_case)
        if match is None and containment:
            match = _find_containing(headers, candidates)
            if match is not None:
                logger.debug(f"Field '{name}' matched column '{match}' by containment")

        mapping[name] = match or ""

    # Keep choices for names that are not (or no longer) defined fields
    for name, column in existing.items():
        if name not in mapping:
            mapping[name] = column or ""

    return mapping


def map_field(
    mapping: Mapping[str, Optional[str]],
    field_name: str,
    column: Optional[str]
) -> Dict[str, str]:
    """Return a copy of ``mapping`` with one explicit choice ("" or None clears it)."""
    updated = {name: value or "" for name, value in mapping.items()}
    updated[field_name] = column or ""
    return updated


def missing_required_fields(
    fields: Optional[FieldsInput],
    mapping: Mapping[str, Optional[str]]
) -> List[FieldDefinition]:
    """Required fields that have no column."""
    return [
        definition
        for name, definition in normalize_fields(fields).items()
        if definition.required and not mapping.get(name)
    ]


def apply_mapping(
    rows: Iterable[Mapping[str, str]],
    fields: Optional[FieldsInput],
    mapping: Mapping[str, Optional[str]]
) -> List[Dict[str, str]]:
    """
    Build processed rows keyed by field name.

    Each value is ``row[mapping[field]]``, or "" when the field is unmapped or
    the row has no such column.
    """
    names = list(normalize_fields(fields))
    processed = []
    for row in rows:
        item = {}
        for name in names:
            column = mapping.get(name)
            item[name] = row.get(column, "") if column else ""
        processed.append(item)
    return processed
