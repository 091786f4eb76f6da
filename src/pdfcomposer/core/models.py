"""Intermediate data models for the per-document generation pipeline"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from pdfcomposer.core.page import FontsStandard, PageMargins, PDFVersion
from pdfcomposer.exceptions import ErrorKind


@dataclass(frozen=True)
class SourceDocument:
    """A source file and its raw text, read once per generation pass."""
    path: Path
    text: str


@dataclass(frozen=True)
class ExtractedFrontMatter:
    """Result of splitting raw lines on the `---` delimiter convention."""
    yaml_text:       str
    markdown_text:   str
    delimiter_count: int     # 0..2; front matter is valid only at 2

    @property
    def is_valid(self) -> bool:
        return self.delimiter_count == 2


@dataclass(frozen=True)
class RenderRequest:
    """Everything the renderer and PDF mutator need for one document; built fresh per document."""
    html:        str
    width:       float            # inches, orientation already applied
    height:      float
    margins:     PageMargins
    font:        FontsStandard
    pdf_version: PDFVersion
    doc_info:    dict[str, str] = field(default_factory=dict)


class DocumentStatus(str, Enum):
    done    = "done"
    skipped = "skipped"
    failed  = "failed"


@dataclass
class DocumentResult:
    """Terminal state of one document's run, reported back to the batch caller."""
    source:      Path
    status:      DocumentStatus
    output_path: Optional[Path] = None
    error:       Optional[ErrorKind] = None
    message:     str = ""
    doc_info:    dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == DocumentStatus.done
