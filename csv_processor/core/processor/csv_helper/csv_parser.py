# csv_helper/csv_parser.py
"""
CSV Parsing and Analysis

Provides delimiter detection, a quote-aware tokenizer, and conversion of the
tokenized lines into header-keyed rows.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from csv_processor.core.processor.csv_helper.csv_constants import (
    DEFAULT_DELIMITER,
    DELIMITER_CANDIDATES,
    DELIMITER_SAMPLE_LINES,
    EMPTY_CONTENT_ERROR,
    FIELD_COUNT_ERROR,
    SYNTHETIC_HEADER,
    ParseOptions,
    ParseResult,
)

logger = logging.getLogger("csv-processor")

_LINE_SPLIT_RE = re.compile(r'\r?\n')


def detect_delimiter(content: str) -> str:
    """
    Detect the CSV delimiter.

    Counts every candidate in the first few lines, quoted occurrences
    included. The highest count wins; ties go to the earlier candidate
    (comma, semicolon, tab, pipe) and a sample with no candidates yields
    a comma.

    Args:
        content: CSV text (only the first lines are inspected)

    Returns:
        Detected delimiter character
    """
    sample = '\n'.join(_LINE_SPLIT_RE.split(content)[:DELIMITER_SAMPLE_LINES])

    best_delimiter = DEFAULT_DELIMITER
    best_count = 0
    for delim in DELIMITER_CANDIDATES:
        count = sample.count(delim)
        if count > best_count:
            best_count = count
            best_delimiter = delim

    return best_delimiter


def tokenize_csv(
    content: str,
    delimiter: str = DEFAULT_DELIMITER,
    trim_fields: bool = True,
    skip_empty_lines: bool = True
) -> List[List[str]]:
    """
    Split CSV text into lines of fields.

    Single pass state machine:
    - '"' outside quotes enters quote mode, inside quotes it leaves quote
      mode unless doubled ('""' is a literal quote)
    - delimiter outside quotes closes a field
    - '\\n' or '\\r\\n' outside quotes closes a line
    - everything else, including delimiters and newlines inside quotes,
      is field content

    Args:
        content: Decoded CSV text
        delimiter: Field delimiter (empty string means comma)
        trim_fields: Strip whitespace around each field
        skip_empty_lines: Drop lines whose fields are all empty

    Returns:
        List of lines, each a list of field strings
    """
    delimiter = delimiter or DEFAULT_DELIMITER

    if content.startswith('\ufeff'):
        content = content[1:]

    lines: List[List[str]] = []
    current_line: List[str] = []
    field_chars: List[str] = []
    in_quotes = False

    def close_field() -> None:
        value = ''.join(field_chars)
        current_line.append(value.strip() if trim_fields else value)
        field_chars.clear()

    def commit_line() -> None:
        if not skip_empty_lines or any(len(f) > 0 for f in current_line):
            lines.append(list(current_line))
        current_line.clear()

    length = len(content)
    i = 0
    while i < length:
        char = content[i]
        next_char = content[i + 1] if i + 1 < length else ''

        if char == '"':
            if in_quotes and next_char == '"':
                field_chars.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            close_field()
        elif (char == '\n' or (char == '\r' and next_char == '\n')) and not in_quotes:
            if char == '\r':
                i += 1
            close_field()
            commit_line()
        else:
            field_chars.append(char)
        i += 1

    if field_chars or current_line:
        close_field()
        commit_line()

    return lines


def parse_csv(content: str, options: Optional[ParseOptions] = None) -> ParseResult:
    """
    Parse CSV text into header-keyed rows.

    Never raises for malformed input: lines whose field count differs from
    the header are padded with empty strings or truncated, and a message is
    added to ``errors``.

    Args:
        content: Decoded CSV text
        options: Parse options (defaults: headers on, comma, trim, skip empty)

    Returns:
        ParseResult with data, headers and errors
    """
    options = options or ParseOptions()

    lines = tokenize_csv(
        content,
        delimiter=options.delimiter,
        trim_fields=options.trim_fields,
        skip_empty_lines=options.skip_empty_lines,
    )

    if not lines:
        return ParseResult(data=[], headers=[], errors=[EMPTY_CONTENT_ERROR])

    if options.has_headers:
        headers = lines.pop(0)
    else:
        headers = [SYNTHETIC_HEADER.format(index=i + 1) for i in range(len(lines[0]))]

    expected = len(headers)
    errors: List[str] = []
    data: List[Dict[str, str]] = []

    for line_no, line in enumerate(lines, start=1):
        if len(line) != expected:
            errors.append(FIELD_COUNT_ERROR.format(line=line_no, count=len(line), expected=expected))
            if len(line) < expected:
                line = line + [''] * (expected - len(line))
            else:
                line = line[:expected]

        data.append({header: line[index] for index, header in enumerate(headers)})

    if errors:
        logger.warning(f"CSV parsed with {len(errors)} structural error(s)")
    logger.debug(f"CSV parsed: {len(data)} rows, {expected} columns")

    return ParseResult(data=data, headers=list(headers), errors=errors)


def format_csv_data(data: List[Dict[str, Any]], fmt: str = "json") -> Any:
    """
    Convert parsed rows to another representation.

    Args:
        data: Rows from parse_csv
        fmt: "json" for a JSON string, "array" for the rows themselves

    Returns:
        JSON string or the unchanged row list (unknown formats included)
    """
    if fmt.lower() == "json":
        return json.dumps(data, ensure_ascii=False)
    return data
