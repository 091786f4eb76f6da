"""PDF document-information entries: field-name rules, value resolution, and the pypdf dictionary pass"""

import logging
from enum import Enum
from io import BytesIO
from typing import Iterator, Mapping, Optional

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError
from pypdf.generic import (
    DictionaryObject,
    IndirectObject,
    NameObject,
    PdfObject,
    StreamObject,
    TextStringObject,
)

from pdfcomposer.core.page import PDFVersion
from pdfcomposer.exceptions import RenderError


logger = logging.getLogger(__name__)

PACKAGE_NAME = "PDF Composer"
GENERATOR_KEY = "generator"

RESERVED_FIELDS = {name.lower(): name for name in ("Title", "Author", "Subject", "Keywords")}


def normalize_field_name(name: str) -> str:
    """Canonicalise Title/Author/Subject/Keywords regardless of case; other names pass through."""
    return RESERVED_FIELDS.get(name.lower(), name)


def register_rule(rules: dict[str, str], field_name: str, yaml_key: str) -> dict[str, str]:
    """Add a field -> YAML key rule; a later rule for the same normalised field replaces the earlier one."""
    rules[normalize_field_name(field_name)] = yaml_key
    return rules


def resolve_doc_info_entries(rules: Mapping[str, str], strings: Mapping[str, str]) -> dict[str, str]:
    """Return field -> value for every rule whose YAML key has a string value; other rules are dropped."""
    entries: dict[str, str] = {}
    for field_name, yaml_key in rules.items():
        if yaml_key in strings:
            entries[normalize_field_name(field_name)] = strings[yaml_key]
    return entries


def resolve_title(entries: Mapping[str, str], file_name: str) -> dict[str, str]:
    """Ensure a Title entry exists, falling back to the document's derived file name."""
    resolved = dict(entries)
    resolved.setdefault("Title", file_name)
    return resolved


class PdfObjectKind(str, Enum):
    dictionary = "dictionary"
    stream     = "stream"
    other      = "other"


def classify_object(obj: PdfObject) -> PdfObjectKind:
    # StreamObject subclasses DictionaryObject, so test it first.
    if isinstance(obj, StreamObject):
        return PdfObjectKind.stream
    if isinstance(obj, DictionaryObject):
        return PdfObjectKind.dictionary
    return PdfObjectKind.other


def iter_indirect_objects(reader: PdfReader) -> Iterator[PdfObject]:
    """Yield every indirect object in the cross-reference table, including those in object streams."""
    for generation, entries in reader.xref.items():
        free = reader.xref_free_entry.get(generation, {})
        for idnum in entries:
            if free.get(idnum):
                continue
            obj = reader.get_object(IndirectObject(idnum, generation, reader))
            if obj is not None:
                yield obj
    for idnum in reader.xref_objStm:
        obj = reader.get_object(IndirectObject(idnum, 0, reader))
        if obj is not None:
            yield obj


def update_info_dictionary(
    dictionary: DictionaryObject,
    entries: Mapping[str, str],
    creator: str,
    ) -> bool:
    """Rewrite Creator/Producer and set entries on a dictionary that already carries /Creator.

    Returns False (and leaves the dictionary untouched) when there is no /Creator key.
    """
    if "/Creator" not in dictionary:
        return False
    dictionary[NameObject("/Creator")] = TextStringObject(creator)
    if "/Producer" in dictionary:
        dictionary[NameObject("/Producer")] = TextStringObject(PACKAGE_NAME)
    for field_name, value in entries.items():
        dictionary[NameObject(f"/{field_name}")] = TextStringObject(value)
    return True


def apply_doc_info(
    pdf_bytes: bytes,
    entries: Mapping[str, str],
    pdf_version: PDFVersion,
    generator: Optional[str] = None,
    ) -> bytes:
    """Load rendered PDF bytes, update info dictionaries, set the header version, and serialise."""
    creator = generator or PACKAGE_NAME
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        updated = 0
        for obj in iter_indirect_objects(reader):
            if classify_object(obj) != PdfObjectKind.dictionary:
                continue
            if update_info_dictionary(obj, entries, creator):
                updated += 1

        writer = PdfWriter(clone_from=reader)
        writer.pdf_header = f"%PDF-{pdf_version.value}".encode()
        out = BytesIO()
        writer.write(out)
    except (PyPdfError, ValueError) as e:
        raise RenderError(f"Failed to update PDF document information: {e}") from e

    logger.debug("Updated %d information dictionar%s", updated, "y" if updated == 1 else "ies")
    return out.getvalue()
