"""Pipeline step functions: per-document generation and the concurrent batch run"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from pdfcomposer.config import ComposerConfig
from pdfcomposer.core.merge import merge_placeholders, string_entries
from pdfcomposer.core.metadata import (
    GENERATOR_KEY,
    apply_doc_info,
    resolve_doc_info_entries,
    resolve_title,
)
from pdfcomposer.core.models import DocumentResult, DocumentStatus, RenderRequest
from pdfcomposer.core.output import output_path, write_pdf
from pdfcomposer.core.parse import (
    extract_front_matter,
    parse_yaml,
    read_source,
    split_lines,
    yaml_mapping_to_dict,
)
from pdfcomposer.core.render import ChromiumRenderer, Renderer, build_html_page, markdown_to_html
from pdfcomposer.core.utils.paths import derive_file_name
from pdfcomposer.exceptions import (
    ComposerError,
    EmptySourceListError,
    ErrorKind,
    InvalidFrontMatterError,
    MalformedYamlKeysError,
)


logger = logging.getLogger(__name__)

# Kinds reported as skipped rather than failed.
SKIP_KINDS = {ErrorKind.not_found, ErrorKind.invalid_front_matter, ErrorKind.output_locked}


async def process_document(source: Path, config: ComposerConfig, renderer: Renderer) -> DocumentResult:
    """Run one document from source text to written PDF. Raises ComposerError subclasses on failure."""
    file_name = derive_file_name(source)
    doc = read_source(source)
    logger.info("File %s exists. Reading...", source)

    extracted = extract_front_matter(split_lines(doc.text))
    if not extracted.is_valid:
        raise InvalidFrontMatterError(f"File {source} has no front matter block (found {extracted.delimiter_count} of 2 '---' lines)")
    parsed = parse_yaml(extracted.yaml_text)
    if parsed is None:
        raise InvalidFrontMatterError(f"File {source} has an empty front matter block")
    if not isinstance(parsed, dict):
        raise InvalidFrontMatterError(f"File {source} front matter is a {type(parsed).__name__}, expected a mapping")

    front_matter = yaml_mapping_to_dict(parsed)
    if front_matter is None:
        raise MalformedYamlKeysError(f"File {source} front matter contains non-string keys")
    logger.info("%s. Processing...", source)

    merged = merge_placeholders(front_matter, extracted.markdown_text)
    strings = string_entries(front_matter)

    width, height = config.page_size
    title = strings.get("title", file_name)
    page_html = build_html_page(markdown_to_html(merged, config.parser_config), title, config.font, width, height)
    doc_info = resolve_title(resolve_doc_info_entries(config.doc_info_entries, strings), file_name)

    request = RenderRequest(
        html=page_html,
        width=width,
        height=height,
        margins=config.margins,
        font=config.font,
        pdf_version=config.pdf_version,
        doc_info=doc_info,
    )
    pdf = await renderer.render(request)
    pdf = apply_doc_info(pdf, request.doc_info, request.pdf_version, strings.get(GENERATOR_KEY))

    written = write_pdf(output_path(config.output_dir, file_name), pdf)
    logger.info("%s -> %s", source, written)
    return DocumentResult(source=source, status=DocumentStatus.done, output_path=written, doc_info=doc_info)


async def run_document(source: Path, config: ComposerConfig, renderer: Renderer) -> DocumentResult:
    """process_document with every failure converted into a DocumentResult."""
    try:
        return await process_document(source, config, renderer)
    except ComposerError as e:
        status = DocumentStatus.skipped if e.kind in SKIP_KINDS else DocumentStatus.failed
        log = logger.warning if status == DocumentStatus.skipped else logger.error
        log("%s %s: %s", status.value.capitalize(), source, e)
        return DocumentResult(source=source, status=status, error=e.kind, message=str(e))
    except Exception as e:
        logger.exception("Unexpected error generating %s", source)
        return DocumentResult(source=source, status=DocumentStatus.failed, message=f"{type(e).__name__}: {e}")


async def generate_pdfs(config: ComposerConfig, renderer: Optional[Renderer] = None) -> list[DocumentResult]:
    """Process every configured source with at most `config.workers` documents in flight.

    Results follow the order of config.sources; completion order is unspecified.
    """
    if not config.sources:
        raise EmptySourceListError("No source files set")
    renderer = renderer or ChromiumRenderer()
    logger.info("Files to process: %d", len(config.sources))

    sem = asyncio.Semaphore(config.workers)

    async def _worker(source: Path) -> DocumentResult:
        async with sem:
            return await run_document(source, config, renderer)

    return list(await asyncio.gather(*[_worker(s) for s in config.sources]))


def run_generate(config: ComposerConfig, renderer: Optional[Renderer] = None) -> list[DocumentResult]:
    """Synchronous entry point for generate_pdfs."""
    return asyncio.run(generate_pdfs(config, renderer))
