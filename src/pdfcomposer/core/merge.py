"""Single-pass {{key}} placeholder substitution from front-matter string values"""

import re
from typing import Any, Mapping


PLACEHOLDER_RE = re.compile(r"\{\{([^}]*)\}\}")


def string_entries(front_matter: Mapping[str, Any]) -> dict[str, str]:
    """Return only the entries whose value is a plain string."""
    return {k: v for k, v in front_matter.items() if isinstance(v, str)}


def merge_placeholders(front_matter: Mapping[str, Any], body: str) -> str:
    """Replace each {{key}} with its string value; unknown or non-string keys are left as written.

    Replacement text is not rescanned, so values containing `{{...}}` are inserted literally.
    """
    strings = string_entries(front_matter)
    if not strings:
        return body

    def _replace(m: re.Match) -> str:
        return strings.get(m.group(1), m.group(0))

    return PLACEHOLDER_RE.sub(_replace, body)
