"""Root test configuration: fake renderer and session-level cleanup of runtime artifacts"""

import os
import shutil
from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfWriter


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_DIRS = ["pdf_composer_pdfs"]


def make_pdf(creator="Chromium", producer="Skia/PDF m120", title="rendered") -> bytes:
    """One blank page with an info dictionary shaped like a browser's print output."""
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    info = {"/Title": title}
    if creator is not None:
        info["/Creator"] = creator
    if producer is not None:
        info["/Producer"] = producer
    writer.add_metadata(info)
    buf = BytesIO()
    writer.write(buf)
    return buf.getvalue()


class FakeRenderer:
    """Records requests and returns canned PDF bytes instead of launching a browser."""

    def __init__(self, pdf: bytes = None, error: Exception = None):
        self.pdf = pdf if pdf is not None else make_pdf()
        self.error = error
        self.requests = []

    async def render(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.pdf


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PDFCOMPOSER_* variables from the host shell out of every test."""
    for name in list(os.environ):
        if name.startswith("PDFCOMPOSER_"):
            monkeypatch.delenv(name)


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove default output directories created during the test session."""
    yield
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)
