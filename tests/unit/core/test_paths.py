"""Unit tests for core/utils/paths.py"""

from pathlib import Path

import pytest

from pdfcomposer.core.utils.paths import derive_file_name, normalize_source_path


@pytest.mark.parametrize("source,expected", [
    ("report.md", "report"),
    ("docs/report.md", "report"),
    ("docs\\sub\\report.md", "report"),
    ("notes.txt", "notes.txt"),
    ("archive.md.md", "archive.md"),
    ("docs/README", "README"),
    (Path("a/b/c.md"), "c"),
])
def test_derive_file_name(source, expected):
    assert derive_file_name(source) == expected


@pytest.mark.parametrize("source", ["docs/", "docs\\", ""])
def test_derive_file_name_without_final_segment(source):
    assert derive_file_name(source) is None


def test_derive_file_name_only_strips_trailing_suffix():
    assert derive_file_name("my.md.notes") == "my.md.notes"


def test_normalize_source_path_backslashes():
    assert normalize_source_path("docs\\a.md") == Path("docs") / "a.md"


def test_normalize_source_path_forward_slashes():
    assert normalize_source_path("docs/a.md") == Path("docs") / "a.md"
