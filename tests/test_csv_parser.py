from __future__ import annotations

import json

from csv_processor.core.processor.csv_helper import (
    ParseOptions,
    detect_delimiter,
    format_csv_data,
    parse_csv,
    tokenize_csv,
)


def test_quoted_fields_keep_delimiters_and_newlines():
    result = parse_csv('name,note\n"Doe, John","Line1\nLine2"')

    assert result.headers == ["name", "note"]
    assert result.data == [{"name": "Doe, John", "note": "Line1\nLine2"}]
    assert result.errors == []


def test_doubled_quotes_are_literal():
    result = parse_csv('quote\n"She said ""hi"""\n')

    assert result.data == [{"quote": 'She said "hi"'}]


def test_short_row_is_padded_and_reported():
    result = parse_csv("a,b,c\n1,2")

    assert result.data == [{"a": "1", "b": "2", "c": ""}]
    assert result.errors == ["Line 1 has 2 fields, expected 3"]


def test_long_row_is_truncated_and_reported(caplog):
    caplog.set_level("WARNING")

    result = parse_csv("a,b\n1,2\n3,4,5\n")

    assert result.data == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]
    assert result.errors == ["Line 2 has 3 fields, expected 2"]
    assert "structural error" in caplog.text


def test_empty_input():
    result = parse_csv("")

    assert result.data == []
    assert result.headers == []
    assert result.errors == ["Empty CSV content"]
    assert result.to_dict() == {"data": [], "headers": [], "errors": ["Empty CSV content"]}


def test_blank_only_input_is_empty():
    assert parse_csv("\n\n , \n").errors == ["Empty CSV content"]


def test_synthesized_headers_without_header_row():
    result = parse_csv("1,2,3\n4,5,6", ParseOptions(has_headers=False))

    assert result.headers == ["Column 1", "Column 2", "Column 3"]
    assert result.row_count == 2
    assert result.data[1] == {"Column 1": "4", "Column 2": "5", "Column 3": "6"}


def test_crlf_ends_lines_and_lone_cr_is_content():
    result = parse_csv("a,b\r\n1,x\ry\r\n")

    assert result.data == [{"a": "1", "b": "x\ry"}]


def test_fields_are_trimmed_unless_disabled():
    content = "a , b\n 1 ,2 \n"

    assert parse_csv(content).data == [{"a": "1", "b": "2"}]

    untrimmed = parse_csv(content, ParseOptions(trim_fields=False))
    assert untrimmed.headers == ["a ", " b"]
    assert untrimmed.data == [{"a ": " 1 ", " b": "2 "}]


def test_empty_lines_kept_when_skipping_disabled():
    lines = tokenize_csv("a,b\n\n1,2\n", skip_empty_lines=False)

    assert lines == [["a", "b"], [""], ["1", "2"]]
    assert tokenize_csv("a,b\n\n,\n1,2\n") == [["a", "b"], ["1", "2"]]


def test_leading_bom_character_is_dropped():
    result = parse_csv("\ufeffid,name\n1,Ada\n")

    assert result.headers == ["id", "name"]


def test_duplicate_headers_keep_last_value():
    result = parse_csv("x,x\n1,2\n")

    assert result.data == [{"x": "2"}]
    assert result.col_count == 2


def test_custom_delimiter():
    result = parse_csv("a;b\n1;2,5\n", ParseOptions(delimiter=";"))

    assert result.data == [{"a": "1", "b": "2,5"}]


def test_detect_delimiter_prefers_highest_count():
    assert detect_delimiter("a;b;c\n1;2;3\n") == ";"
    assert detect_delimiter("a\tb\n1\t2\n") == "\t"
    assert detect_delimiter("a|b|c\n") == "|"


def test_detect_delimiter_tie_goes_to_comma():
    assert detect_delimiter("a,b;c\n1;2,3\n") == ","


def test_detect_delimiter_defaults_to_comma():
    assert detect_delimiter("single column\nvalue\n") == ","
    assert detect_delimiter("") == ","


def test_detect_delimiter_only_reads_first_lines():
    content = "a,b\n1,2\n3,4\n5,6\n7,8\n" + "x;y;z;w;v;u;t\n" * 5

    assert detect_delimiter(content) == ","


def test_format_csv_data():
    rows = [{"name": "Zoë", "age": "7"}]

    assert json.loads(format_csv_data(rows)) == rows
    assert "Zoë" in format_csv_data(rows, "JSON")
    assert format_csv_data(rows, "array") is rows
