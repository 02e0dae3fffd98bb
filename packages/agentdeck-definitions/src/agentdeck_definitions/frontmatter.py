"""Frontmatter parser: extracts the ``---`` delimited YAML header of a document."""
from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import yaml
from agentdeck_core.errors import EmptyDocumentError, MalformedHeaderError

_DELIMITER = "---"
_BOM = "\ufeff"

# A top-level ``key: value`` line whose value is a plain (unquoted) scalar.
_PLAIN_SCALAR_LINE = re.compile(
    r"^(?P<key>[A-Za-z0-9_][\w.-]*):[ \t]+(?P<value>[^\s\[{'\"|>&*!].*?)[ \t]*$"
)

DEFAULT_LIST_FIELDS: frozenset[str] = frozenset({"tools"})


@dataclass(frozen=True, slots=True)
class ParsedFrontmatter:
    """The header mapping and where the body starts in the input text."""

    header: dict[str, Any] = field(default_factory=dict)
    remainder_offset: int = 0
    body: str = ""


def parse_frontmatter(
    text: str,
    list_fields: Iterable[str] = DEFAULT_LIST_FIELDS,
) -> ParsedFrontmatter:
    """Parse the frontmatter block at the top of *text*.

    The header must open with a line containing only ``---`` (blank
    lines and a BOM may precede it) and close with another such line.
    The enclosed text is loaded with PyYAML's ``BaseLoader`` and must be
    a flat mapping whose values are scalars or one-level lists. Every
    scalar stays a string, and a single-line plain value is taken
    verbatim up to the end of the line, so ``description: When: x`` and
    ``description: #1 pick`` keep their full text.

    Fields named in *list_fields* are normalized to a list of trimmed,
    non-empty strings; a plain string value is split on commas.

    Returns:
        A ParsedFrontmatter whose ``remainder_offset`` indexes the first
        character after the closing delimiter line.

    Raises:
        EmptyDocumentError: If *text* is empty or whitespace-only.
        MalformedHeaderError: If a delimiter is missing, the YAML is
            invalid, or the header is not a flat mapping.
    """
    if not text.strip():
        msg = "Document is empty"
        raise EmptyDocumentError(msg)

    header_text, remainder_offset = _split_header(text)
    header = _load_header(header_text)

    for name in list_fields:
        if name in header:
            header[name] = normalize_list(header[name])

    return ParsedFrontmatter(
        header=header,
        remainder_offset=remainder_offset,
        body=text[remainder_offset:],
    )


def normalize_list(value: Any) -> Any:
    """Normalize a list-valued field to trimmed, non-empty entries.

    Non-string list items are passed through untouched so the schema
    validator can report them.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, list):
        items = value
    else:
        return value

    normalized: list[Any] = []
    for item in items:
        if isinstance(item, str):
            item = item.strip()
            if not item:
                continue
        normalized.append(item)
    return normalized


def _split_header(text: str) -> tuple[str, int]:
    """Locate the delimited header and return (header_text, body_offset)."""
    pos = len(_BOM) if text.startswith(_BOM) else 0
    lines = text[pos:].splitlines(keepends=True)

    index = 0
    while index < len(lines) and not lines[index].strip():
        pos += len(lines[index])
        index += 1

    if index == len(lines) or lines[index].rstrip() != _DELIMITER:
        msg = f"Missing opening '{_DELIMITER}' delimiter"
        raise MalformedHeaderError(msg)
    pos += len(lines[index])
    index += 1

    header_lines: list[str] = []
    for line in lines[index:]:
        pos += len(line)
        if line.rstrip() == _DELIMITER:
            return "".join(header_lines), pos
        header_lines.append(line)

    msg = f"Missing closing '{_DELIMITER}' delimiter"
    raise MalformedHeaderError(msg)


def _quote_plain_scalars(header_text: str) -> str:
    """Single-quote the plain value of each one-line ``key: value`` entry.

    Values followed by an indented continuation line are left alone so
    multi-line scalars and nested blocks still reach the YAML parser.
    """
    lines = header_text.splitlines()
    quoted: list[str] = []
    for index, line in enumerate(lines):
        match = _PLAIN_SCALAR_LINE.match(line)
        following = lines[index + 1] if index + 1 < len(lines) else ""
        if match is None or following[:1] in (" ", "\t"):
            quoted.append(line)
            continue
        value = match.group("value").replace("'", "''")
        quoted.append(f"{match.group('key')}: '{value}'")
    return "\n".join(quoted) + "\n"


def _load_header(header_text: str) -> dict[str, Any]:
    """Load the header with all scalars as strings and check it is flat."""
    try:
        result = yaml.load(  # noqa: S506 - BaseLoader builds only str/list/dict
            _quote_plain_scalars(header_text), Loader=yaml.BaseLoader
        )
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in header: {exc}"
        raise MalformedHeaderError(msg) from exc

    if result is None:
        return {}
    if not isinstance(result, dict):
        msg = f"Header must be a mapping, got {type(result).__name__}"
        raise MalformedHeaderError(msg)

    for key, value in result.items():
        if isinstance(value, dict):
            msg = f"Header field '{key}' is a nested mapping"
            raise MalformedHeaderError(msg)
        if isinstance(value, list) and any(
            isinstance(item, (list, dict)) for item in value
        ):
            msg = f"Header field '{key}' nests deeper than one list level"
            raise MalformedHeaderError(msg)

    return result
