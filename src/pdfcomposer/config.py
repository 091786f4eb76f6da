"""Application configuration: settings schema, config.yaml loader, and the frozen per-run snapshot"""

import os
from pathlib import Path
from typing import Any, Iterable

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pdfcomposer.core.metadata import register_rule
from pdfcomposer.core.page import (
    FontsStandard,
    PageMargins,
    PaperOrientation,
    PaperSize,
    PDFVersion,
    page_dimensions,
    parse_margins,
)
from pdfcomposer.core.utils.paths import derive_file_name, normalize_source_path


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "PDFCOMPOSER_"
DEFAULT_OUTPUT_DIR = "pdf_composer_pdfs"


def parse_entry_rules(value: Any) -> dict[str, str]:
    """Build an ordered field -> YAML key registry from a mapping, FIELD=KEY pairs, or a comma-separated string."""
    if value is None:
        return {}
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    if isinstance(value, dict):
        pairs = list(value.items())
    else:
        pairs = []
        for item in value:
            field_name, sep, yaml_key = str(item).partition("=")
            if not sep or not field_name.strip() or not yaml_key.strip():
                raise ValueError(f"Invalid document entry '{item}', expected FIELD=KEY")
            pairs.append((field_name.strip(), yaml_key.strip()))

    rules: dict[str, str] = {}
    for field_name, yaml_key in pairs:
        register_rule(rules, str(field_name), str(yaml_key))
    return rules


class Settings(BaseModel):
    output_dir:       str              = Field(default=DEFAULT_OUTPUT_DIR, description="Directory for generated PDFs")
    pdf_version:      PDFVersion       = Field(default=PDFVersion.v1_7, description="PDF header version: 1.7 or 2.0")
    paper_size:       PaperSize        = Field(default=PaperSize.A4, description="Paper size name")
    orientation:      PaperOrientation = Field(default=PaperOrientation.portrait, description="portrait or landscape")
    margins:          str              = Field(default="10", description="1-4 margin values in mm, CSS shorthand order")
    font:             FontsStandard    = Field(default=FontsStandard.Helvetica, description="Standard PDF font")
    doc_info_entries: dict[str, str]   = Field(default_factory=dict, description="PDF info field -> front-matter key")
    parser_config:    str              = Field(default="gfm-like", description="MarkdownIt parser preset name")
    workers:          int              = Field(default=4, ge=1, description="Documents rendered concurrently")
    log_level:        str              = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("doc_info_entries", mode="before")
    @classmethod
    def _entries(cls, value: Any) -> dict[str, str]:
        return parse_entry_rules(value)

    @field_validator("margins", mode="before")
    @classmethod
    def _margins_text(cls, value: Any) -> Any:
        # `margins: 20` in config.yaml loads as an int
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then PDFCOMPOSER_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


class ComposerConfig(BaseModel):
    """Read-only snapshot shared by every concurrent document run."""
    model_config = ConfigDict(frozen=True)

    sources:          tuple[Path, ...]
    output_dir:       Path
    pdf_version:      PDFVersion
    paper_size:       PaperSize
    orientation:      PaperOrientation
    margins:          PageMargins
    font:             FontsStandard
    doc_info_entries: dict[str, str]
    parser_config:    str
    workers:          int

    @property
    def page_size(self) -> tuple[float, float]:
        """(width, height) in inches with orientation applied."""
        return page_dimensions(self.paper_size, self.orientation)


def build_config(settings: Settings, sources: Iterable[str | Path]) -> ComposerConfig:
    """Freeze settings plus source paths; sources without a derivable file name are rejected."""
    paths = []
    for raw in sources:
        if derive_file_name(raw) is None:
            raise ValueError(f"Cannot derive an output file name from source '{raw}'")
        paths.append(normalize_source_path(raw))

    return ComposerConfig(
        sources=tuple(paths),
        output_dir=Path(settings.output_dir),
        pdf_version=settings.pdf_version,
        paper_size=settings.paper_size,
        orientation=settings.orientation,
        margins=parse_margins(settings.margins),
        font=settings.font,
        doc_info_entries=dict(settings.doc_info_entries),
        parser_config=settings.parser_config,
        workers=settings.workers,
    )
