"""Shared fixtures for core unit tests"""

import pytest

from pdfcomposer.config import Settings, build_config


SAMPLE_FM_MD = """\
---
title: Test Doc
author: Jane
description: A short test document
count: 3
---
# {{title}}

Written by {{author}}; {{missing}} stays.

---

Footer paragraph.
"""


@pytest.fixture
def sample_md(tmp_path):
    """A valid front-matter document on disk."""
    path = tmp_path / "sample.md"
    path.write_text(SAMPLE_FM_MD, encoding="utf-8")
    return path


@pytest.fixture
def make_config(tmp_path):
    """Build a ComposerConfig writing into tmp_path/out; keyword args go to Settings."""
    def _make(sources, **settings):
        settings.setdefault("output_dir", str(tmp_path / "out"))
        return build_config(Settings(**settings), sources)
    return _make
