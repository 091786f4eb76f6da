"""Error taxonomy for document generation; every failure is scoped to one document except EmptySourceListError"""

from enum import Enum


class ErrorKind(str, Enum):
    not_found            = "not_found"
    invalid_front_matter = "invalid_front_matter"
    malformed_yaml_keys  = "malformed_yaml_keys"
    render_failure       = "render_failure"
    output_locked        = "output_locked"
    empty_source_list    = "empty_source_list"


class ComposerError(Exception):
    """Base class; `kind` identifies the failure for per-document reporting."""
    kind: ErrorKind


class SourceNotFoundError(ComposerError):
    kind = ErrorKind.not_found


class InvalidFrontMatterError(ComposerError):
    """Fewer than two `---` delimiters, or a YAML block that is empty, unparsable or not a mapping."""
    kind = ErrorKind.invalid_front_matter


class MalformedYamlKeysError(ComposerError):
    kind = ErrorKind.malformed_yaml_keys


class RenderError(ComposerError):
    """The browser renderer or the PDF library failed for this document."""
    kind = ErrorKind.render_failure


class OutputLockedError(ComposerError):
    """Destination PDF is held open by another process; the write is not retried."""
    kind = ErrorKind.output_locked


class EmptySourceListError(ComposerError):
    kind = ErrorKind.empty_source_list
