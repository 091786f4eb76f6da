"""Unit tests for core/output.py"""

import pytest

from pdfcomposer.core import output
from pdfcomposer.core.output import is_file_locked, output_path, write_pdf
from pdfcomposer.exceptions import OutputLockedError


def _deny_open(*args, **kwargs):
    raise PermissionError("in use")


def test_output_path(tmp_path):
    assert output_path(tmp_path, "report") == tmp_path / "report.pdf"


def test_is_file_locked_missing_file(tmp_path):
    assert is_file_locked(tmp_path / "absent.pdf") is False


def test_is_file_locked_writable_file(tmp_path):
    path = tmp_path / "free.pdf"
    path.write_bytes(b"x")
    assert is_file_locked(path) is False


def test_is_file_locked_permission_denied(tmp_path, monkeypatch):
    path = tmp_path / "held.pdf"
    path.write_bytes(b"x")
    monkeypatch.setattr(output, "open", _deny_open, raising=False)
    assert is_file_locked(path) is True


def test_write_pdf_creates_directories(tmp_path):
    path = tmp_path / "a" / "b" / "doc.pdf"
    assert write_pdf(path, b"%PDF-1.7") == path
    assert path.read_bytes() == b"%PDF-1.7"


def test_write_pdf_overwrites_existing(tmp_path):
    path = tmp_path / "doc.pdf"
    path.write_bytes(b"old")
    write_pdf(path, b"new")
    assert path.read_bytes() == b"new"


def test_write_pdf_locked_destination(tmp_path, monkeypatch):
    """A locked destination raises and leaves the existing file untouched."""
    path = tmp_path / "doc.pdf"
    path.write_bytes(b"old")
    monkeypatch.setattr(output, "is_file_locked", lambda p: True)
    with pytest.raises(OutputLockedError):
        write_pdf(path, b"new")
    assert path.read_bytes() == b"old"
