"""Day One JSON export parser."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from dayone_org.errors import DecodeError, InputUnavailableError

from .models import Journal

logger = logging.getLogger(__name__)

DEFAULT_JOURNAL_PATH = Path("Journal.json")


def _format_location(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def _entry_index(loc: tuple[int | str, ...]) -> int | None:
    if len(loc) >= 2 and loc[0] == "entries" and isinstance(loc[1], int):
        return loc[1]
    return None


def parse_journal(raw: bytes | str) -> Journal:
    """Decode a Day One export document.

    Field types are checked strictly: a quoted number or a boolean where an
    integer is expected is rejected rather than coerced.

    Args:
        raw: The JSON document as bytes or text.

    Returns:
        The decoded Journal, entries in document order.

    Raises:
        DecodeError: If the document is not JSON or does not match the
            export shape. The message names the first offending field.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Export is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise DecodeError(f"Export is not valid UTF-8: {e}") from e

    # json.loads lets lone surrogate escapes through; they cannot be written back out.
    try:
        document = json.dumps(data, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as e:
        raise DecodeError(f"Export contains an unpaired surrogate escape: {e}") from e

    try:
        journal = Journal.model_validate_json(document, strict=True)
    except ValidationError as e:
        errors = e.errors()
        first = errors[0]
        loc = tuple(first.get("loc", ()))
        message = f"{_format_location(loc)}: {first.get('msg', 'invalid value')}"
        if len(errors) > 1:
            message += f" (and {len(errors) - 1} more error(s))"
        raise DecodeError(message, entry_index=_entry_index(loc)) from e

    logger.info(
        "Decoded %d entries (export version %s)",
        len(journal.entries),
        journal.metadata.version,
    )
    return journal


class DayOneParser:
    """Reads a Day One ``Journal.json`` export from disk."""

    def parse_file(self, path: Path = DEFAULT_JOURNAL_PATH) -> Journal:
        """Read and decode an export file.

        Raises:
            InputUnavailableError: If the file cannot be read.
            DecodeError: If its contents are not a valid export.
        """
        try:
            raw = path.read_bytes()
        except FileNotFoundError as e:
            raise InputUnavailableError(f"Export not found: {path}") from e
        except OSError as e:
            raise InputUnavailableError(f"Cannot read {path}: {e}") from e

        logger.debug("Read %d bytes from %s", len(raw), path)
        return parse_journal(raw)
