"""
Glossary ingestion: CSV parsing and field sanitisation.

Everything here runs before the matcher sees any data. Failures are raised as
``GlossaryFormatError`` so callers (CLI, API) can surface them; the matching
engine itself never receives a partially parsed glossary.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path

from .matching import GlossaryEntry

logger = logging.getLogger(__name__)

FIELDS = ("source", "target", "note", "category")

_SCRIPT_BLOCK = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_EVENT_HANDLER = re.compile(r"\son\w+\s*=\s*(\"[^\"]*\"|'[^']*'|[^\s>]+)", re.IGNORECASE)
_DATA_URL = re.compile(r"data:[^\s\"'>]*", re.IGNORECASE)
_HTML_TAG = re.compile(r"<[^>]*>")


class GlossaryFormatError(ValueError):
    """Raised when a glossary file cannot be read or holds no usable rows."""


def sanitize_field(value: object) -> str:
    if not isinstance(value, str):
        return ""
    cleaned = _SCRIPT_BLOCK.sub("", value)
    cleaned = _EVENT_HANDLER.sub("", cleaned)
    cleaned = _DATA_URL.sub("", cleaned)
    cleaned = _HTML_TAG.sub("", cleaned)
    return cleaned.strip()


def parse_glossary_csv(content: str) -> list[GlossaryEntry]:
    """
    Parse CSV text into glossary entries.

    The first row is a header and is skipped. Columns are read positionally as
    source, target, note, category; quoted fields may contain commas and
    backslash-escaped quotes. Rows with fewer than two columns are ignored.
    """
    reader = csv.reader(io.StringIO(content), escapechar="\\")
    entries: list[GlossaryEntry] = []
    skipped = 0
    try:
        rows = list(reader)
    except csv.Error as exc:
        raise GlossaryFormatError(f"Malformed glossary CSV: {exc}") from exc

    for row in rows[1:]:
        if not any(cell.strip() for cell in row):
            continue
        if len(row) < 2:
            skipped += 1
            continue
        values = [sanitize_field(cell) for cell in row[: len(FIELDS)]]
        values += [""] * (len(FIELDS) - len(values))
        entries.append(GlossaryEntry(**dict(zip(FIELDS, values))))

    if skipped:
        logger.warning(f"Skipped {skipped} glossary rows with fewer than two columns")
    logger.info(f"Parsed {len(entries)} glossary entries")
    return entries


def load_glossary_csv(path: str | Path) -> list[GlossaryEntry]:
    csv_path = Path(path)
    try:
        content = csv_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise GlossaryFormatError(f"Cannot read glossary file {csv_path}: {exc}") from exc
    entries = parse_glossary_csv(content)
    if not entries:
        raise GlossaryFormatError(f"Glossary file {csv_path} contains no entries")
    return entries
