"""Manifest metadata — read ``name`` and ``description`` from a SKILL.md header.

The header is the block between a leading ``---`` line and the next ``---``
line. Only the two keys are read; everything else in the file is free-form
instructions for the agent and is ignored here.
"""

from __future__ import annotations

import re
from pathlib import Path

from skillsync.skills.models import SkillMetadata

_HEADER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---", re.DOTALL)
_NAME_RE = re.compile(r"^name:[ \t]*(.+)$", re.MULTILINE)
_DESCRIPTION_RE = re.compile(r"^description:[ \t]*(.+)$", re.MULTILINE)


def parse_skill_metadata(manifest_path: str | Path) -> SkillMetadata:
    """Read a manifest file and return its header metadata.

    Raises OSError if the file cannot be read. A missing or malformed
    header is not an error and yields empty fields.
    """
    text = Path(manifest_path).read_text(encoding="utf-8")
    return parse_skill_metadata_text(text)


def parse_skill_metadata_text(text: str) -> SkillMetadata:
    """Extract metadata from manifest text."""
    header = _HEADER_RE.match(text)
    if not header:
        return SkillMetadata()

    block = header.group(1)
    return SkillMetadata(
        name=_first_value(_NAME_RE, block),
        description=_first_value(_DESCRIPTION_RE, block),
    )


def _first_value(pattern: re.Pattern, block: str) -> str:
    match = pattern.search(block)
    if not match:
        return ""
    return _unquote(match.group(1).strip())


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
