"""Source path helpers: output file name derivation and separator normalisation"""

import os
from pathlib import Path
from typing import Optional


MARKDOWN_SUFFIX = ".md"


def derive_file_name(source: str | Path) -> Optional[str]:
    """Return the final path segment with a trailing '.md' removed; None if the path ends in a separator.

    Backslashes count as separators on every platform, matching normalize_source_path.
    """
    text = str(source)
    if text.endswith(MARKDOWN_SUFFIX):
        text = text[:-len(MARKDOWN_SUFFIX)]
    seps = {"/", "\\", os.sep}
    index = max(text.rfind(s) for s in seps)
    if index == -1:
        return text or None
    if index == len(text) - 1:
        return None
    return text[index + 1:]


def normalize_source_path(source: str | Path) -> Path:
    """Rewrite Windows-style separators so 'docs\\a.md' resolves on POSIX hosts too."""
    text = str(source)
    if os.sep == "/":
        text = text.replace("\\", "/")
    else:
        text = text.replace("/", os.sep)
    return Path(text)
