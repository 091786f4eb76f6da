"""Unit tests for core/parse.py"""

import pytest

from pdfcomposer.core.parse import (
    UnhashableKey,
    extract_front_matter,
    parse_yaml,
    read_source,
    split_lines,
    yaml_mapping_to_dict,
)
from pdfcomposer.exceptions import InvalidFrontMatterError, SourceNotFoundError


# --- read_source ---

def test_read_source_returns_text(sample_md):
    doc = read_source(sample_md)
    assert doc.path == sample_md
    assert doc.text.startswith("---\ntitle: Test Doc\n")


def test_read_source_missing_file(tmp_path):
    """A path that does not exist raises SourceNotFoundError."""
    with pytest.raises(SourceNotFoundError, match="not found"):
        read_source(tmp_path / "nope.md")


def test_read_source_directory_is_not_a_file(tmp_path):
    with pytest.raises(SourceNotFoundError):
        read_source(tmp_path)


def test_read_source_invalid_utf8(tmp_path):
    path = tmp_path / "binary.md"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(SourceNotFoundError, match="could not be read"):
        read_source(path)


# --- split_lines ---

@pytest.mark.parametrize("text,expected", [
    ("a\nb\n", ["a", "b"]),
    ("a\nb", ["a", "b"]),
    ("a\r\nb\r\n", ["a", "b"]),
    ("a\n\nb\n", ["a", "", "b"]),
    ("", []),
])
def test_split_lines(text, expected):
    assert split_lines(text) == expected


# --- extract_front_matter ---

def test_extract_front_matter_basic():
    """Lines between the delimiters become YAML; lines after the second become Markdown."""
    extracted = extract_front_matter(["---", "title: Hi", "---", "# {{title}}"])
    assert extracted.yaml_text == "title: Hi\n"
    assert extracted.markdown_text == "# {{title}}\n"
    assert extracted.delimiter_count == 2
    assert extracted.is_valid


def test_extract_front_matter_preserves_later_delimiters():
    """A `---` rule inside the body is Markdown content, not a delimiter."""
    lines = ["---", "a: b", "---", "one", "---", "two"]
    extracted = extract_front_matter(lines)
    assert extracted.markdown_text == "one\n---\ntwo\n"
    assert extracted.delimiter_count == 2


def test_extract_front_matter_body_fidelity():
    """Body lines keep their order and blank lines, each followed by a newline."""
    body = ["", "# Heading", "", "  indented", "last"]
    extracted = extract_front_matter(["---", "k: v", "---", *body])
    assert extracted.markdown_text == "".join(line + "\n" for line in body)


def test_extract_front_matter_single_delimiter_is_invalid():
    extracted = extract_front_matter(["---", "title: Hi", "# Body"])
    assert extracted.delimiter_count == 1
    assert not extracted.is_valid
    assert extracted.markdown_text == ""


def test_extract_front_matter_no_delimiters():
    extracted = extract_front_matter(["# Just Markdown", "text"])
    assert extracted.delimiter_count == 0
    assert not extracted.is_valid


def test_extract_front_matter_empty_block():
    extracted = extract_front_matter(["---", "---", "body"])
    assert extracted.is_valid
    assert extracted.yaml_text == ""
    assert extracted.markdown_text == "body\n"


# --- parse_yaml ---

def test_parse_yaml_mapping():
    assert parse_yaml("title: Hi\ncount: 3\n") == {"title": "Hi", "count": 3}


def test_parse_yaml_empty_is_none():
    assert parse_yaml("") is None
    assert parse_yaml("   \n") is None


def test_parse_yaml_keeps_dates_as_strings():
    """Unquoted dates are not converted to datetime objects."""
    assert parse_yaml("date: 2024-05-01\n") == {"date": "2024-05-01"}


def test_parse_yaml_invalid_raises():
    with pytest.raises(InvalidFrontMatterError, match="Invalid YAML"):
        parse_yaml("key: [unclosed\n")


# --- yaml_mapping_to_dict ---

def test_yaml_mapping_to_dict_sorts_keys():
    result = yaml_mapping_to_dict({"b": "2", "a": "1", "c": [1, 2]})
    assert list(result) == ["a", "b", "c"]
    assert result["c"] == [1, 2]


def test_yaml_mapping_to_dict_rejects_non_string_keys():
    """Any non-string key makes the whole conversion fail."""
    assert yaml_mapping_to_dict({"title": "ok", 1: "one"}) is None
    assert yaml_mapping_to_dict(parse_yaml("title: ok\n2024: year\n")) is None


def test_parse_yaml_wraps_unhashable_keys():
    parsed = parse_yaml("? [a, b]\n: 1\ntitle: x\n")
    keys = [k for k in parsed if k != "title"]
    assert len(keys) == 1
    assert isinstance(keys[0], UnhashableKey)
    assert keys[0].value == ["a", "b"]
    assert yaml_mapping_to_dict(parsed) is None


@pytest.mark.parametrize("value", [["a", "b"], "scalar", 42, None])
def test_yaml_mapping_to_dict_non_mapping(value):
    assert yaml_mapping_to_dict(value) is None


def test_yaml_mapping_to_dict_empty_mapping():
    assert yaml_mapping_to_dict({}) == {}
