"""Output directory handling, destination lock probe, and PDF file writes"""

import logging
from pathlib import Path

from pdfcomposer.exceptions import OutputLockedError


logger = logging.getLogger(__name__)


def output_path(output_dir: Path, file_name: str) -> Path:
    return output_dir / f"{file_name}.pdf"


def is_file_locked(path: Path) -> bool:
    """True if an existing file cannot be opened for writing because another process holds it."""
    try:
        with open(path, "r+b"):
            return False
    except FileNotFoundError:
        return False
    except PermissionError:
        return True


def write_pdf(path: Path, data: bytes) -> Path:
    """Write PDF bytes to path, creating parent directories; locked destinations are skipped, never retried."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if is_file_locked(path):
        raise OutputLockedError(f"{path} is open by another process")
    path.write_bytes(data)
    logger.debug("Wrote %s", path)
    return path
