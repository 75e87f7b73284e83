"""Metadata codec — parses and rewrites a document's review-date metadata.

Two representations are recognised:
- Front-matter block: a ``---`` line, ``key: value`` lines, a ``---`` line.
  This is the format written for documents that have no metadata yet.
- Legacy marker: a first line ``reviewed at yyyy-mm-dd``. Read and updated
  in place, never created unless the marker format is configured.

Pure functions. No I/O; the service owns reading and writing files.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional, Union

from docaudit.models.document import MetadataFormat, MetadataKind, ParsedMetadata

DELIMITER = "---"
REVIEWED_KEY = "reviewed_at"
MARKER_PREFIX = "reviewed at"

_MARKER_RE = re.compile(r"^reviewed at (\d{4}-\d{2}-\d{2})\s*$")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_LEADING_BLANK_RE = re.compile(r"\A(?:\r?\n)+")


def format_date(value: Union[date, datetime]) -> str:
    """Format a date as ``yyyy-mm-dd``."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse a ``yyyy-mm-dd`` literal into a calendar date.

    Returns None for anything that is not a real calendar date, including
    out-of-range months and days such as ``2025-13-45``.
    """
    if raw is None:
        return None
    raw = raw.strip()
    if not _DATE_RE.fullmatch(raw):
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse(content: str) -> ParsedMetadata:
    """Parse the leading metadata of a document.

    A block with no ``key: value`` lines is reported as absent, and the
    body is then the full original content.
    """
    lines = content.split("\n")

    if lines and lines[0].rstrip() == DELIMITER:
        for close in range(1, len(lines)):
            if lines[close].rstrip() == DELIMITER:
                block_lines = tuple(line.rstrip("\r") for line in lines[1:close])
                fields = _parse_fields(block_lines)
                if not fields:
                    break
                rest = "\n".join(lines[close + 1:])
                return ParsedMetadata(
                    kind=MetadataKind.BLOCK,
                    fields=fields,
                    body=_strip_leading_blank_lines(rest),
                    block_lines=block_lines,
                )
        return ParsedMetadata(kind=MetadataKind.NONE, body=content)

    match = _MARKER_RE.match(lines[0]) if lines else None
    if match:
        rest = "\n".join(lines[1:])
        return ParsedMetadata(
            kind=MetadataKind.MARKER,
            body=_strip_leading_blank_lines(rest),
            marker_date=match.group(1),
        )

    return ParsedMetadata(kind=MetadataKind.NONE, body=content)


def read_review_date(content: str, key: str = REVIEWED_KEY) -> Optional[date]:
    """Extract the review date from whichever metadata form is present."""
    parsed = parse(content)
    if parsed.kind == MetadataKind.BLOCK:
        return parse_date(parsed.fields.get(key))
    if parsed.kind == MetadataKind.MARKER:
        return parse_date(parsed.marker_date)
    return None


def write(
    content: str,
    new_date: Union[date, datetime],
    target_format: MetadataFormat = MetadataFormat.BLOCK,
    key: str = REVIEWED_KEY,
) -> str:
    """Return ``content`` with its review date set to ``new_date``.

    Existing metadata keeps its form: every other block line is kept
    verbatim and in place, and a block without the review key gets it
    appended as its last line. Documents without metadata get a minimal
    block (or marker line) and one blank line before the unchanged content.

    The rewritten metadata uses the line ending of the document's first
    line, so CRLF documents stay CRLF.
    """
    stamp = format_date(new_date)
    parsed = parse(content)
    nl = _line_ending(content)

    if parsed.kind == MetadataKind.BLOCK:
        header = _replace_field(parsed.block_lines, key, stamp)
        return _render_block(header, nl) + nl + nl + parsed.body

    if parsed.kind == MetadataKind.MARKER:
        return f"{MARKER_PREFIX} {stamp}{nl}{nl}" + parsed.body

    if target_format == MetadataFormat.MARKER:
        return f"{MARKER_PREFIX} {stamp}{nl}{nl}" + content
    return _render_block([f"{key}: {stamp}"], nl) + nl + nl + content


def _line_ending(content: str) -> str:
    end = content.find("\n")
    if end > 0 and content[end - 1] == "\r":
        return "\r\n"
    return "\n"


def _strip_leading_blank_lines(text: str) -> str:
    return _LEADING_BLANK_RE.sub("", text)


def _parse_fields(block_lines: tuple[str, ...]) -> dict[str, str]:
    fields: dict[str, str] = {}
    for line in block_lines:
        colon = line.find(":")
        if colon > 0:
            fields[line[:colon].strip()] = line[colon + 1:].strip()
    return fields


def _replace_field(block_lines: tuple[str, ...], key: str, value: str) -> list[str]:
    out: list[str] = []
    replaced = False
    for line in block_lines:
        colon = line.find(":")
        if colon > 0 and line[:colon].strip() == key:
            out.append(f"{line[:colon + 1]} {value}")
            replaced = True
        else:
            out.append(line)
    if not replaced:
        out.append(f"{key}: {value}")
    return out


def _render_block(header: list[str], nl: str = "\n") -> str:
    return nl.join([DELIMITER, *header, DELIMITER])
