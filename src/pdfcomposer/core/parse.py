"""Source reading, front-matter extraction, and YAML-to-dict conversion"""

from collections.abc import Hashable
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from pdfcomposer.core.models import ExtractedFrontMatter, SourceDocument
from pdfcomposer.exceptions import InvalidFrontMatterError, SourceNotFoundError


DELIMITER = "---"


class UnhashableKey:
    """A YAML sequence or mapping used as a mapping key."""

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"UnhashableKey({self.value!r})"


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as plain strings (`date: 2024-05-01` stays text).

    Sequence or mapping keys are wrapped in UnhashableKey instead of aborting the load,
    so they are reported as non-string keys.
    """

    def construct_mapping(self, node, deep=False):
        if not isinstance(node, yaml.MappingNode):
            return super().construct_mapping(node, deep=deep)
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                key = UnhashableKey(key)
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def read_source(path: Path) -> SourceDocument:
    """Load a source file as UTF-8 text; raise SourceNotFoundError if it is not a readable file."""
    if not path.is_file():
        raise SourceNotFoundError(f"File {path} not found")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceNotFoundError(f"File {path} could not be read: {e}") from e
    return SourceDocument(path=path, text=text)


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping a trailing '\\r' per line and the empty tail after a final newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def extract_front_matter(lines: Iterable[str]) -> ExtractedFrontMatter:
    """Split lines into (yaml_text, markdown_text) around the first two `---` lines.

    The second delimiter is the transition marker and is not emitted; any
    `---` after it is ordinary Markdown content.
    """
    yaml_parts: list[str] = []
    markdown_parts: list[str] = []
    count = 0
    in_body = False

    for line in lines:
        if in_body:
            markdown_parts.append(line + "\n")
            continue
        if line.strip() == DELIMITER:
            count += 1
            if count == 2:
                in_body = True
            continue
        yaml_parts.append(line + "\n")

    return ExtractedFrontMatter(
        yaml_text="".join(yaml_parts),
        markdown_text="".join(markdown_parts),
        delimiter_count=count,
    )


def parse_yaml(text: str) -> Any:
    """Parse a front-matter block; None for empty or whitespace-only input."""
    try:
        return yaml.load(text, Loader=FrontMatterLoader)
    except yaml.YAMLError as e:
        raise InvalidFrontMatterError(f"Invalid YAML front matter: {e}") from e


def yaml_mapping_to_dict(value: Any) -> Optional[dict[str, Any]]:
    """Convert a parsed YAML mapping to a key-sorted dict; None unless every key is a str."""
    if not isinstance(value, dict):
        return None
    converted: dict[str, Any] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            return None
        converted.setdefault(key, item)
    return dict(sorted(converted.items()))
