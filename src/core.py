"""Conversion pipeline: export file → journal → time tree → Org outline."""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import TextIO

from pydantic import BaseModel

from dayone_org.config import AppConfig
from dayone_org.converter import TextConverter
from dayone_org.errors import OutputUnavailableError
from dayone_org.formatters.config import OutlineConfig
from dayone_org.formatters.org import OrgFormatter
from dayone_org.parsers.dayone import DayOneParser
from dayone_org.parsers.models import Journal
from dayone_org.tree import TimeTree, build_tree

logger = logging.getLogger(__name__)


class JournalStats(BaseModel):
    """Counts describing a decoded journal."""

    export_version: str
    entry_count: int = 0
    year_count: int = 0
    day_count: int = 0
    entries_with_text: int = 0
    entries_with_photos: int = 0
    first_year: int | None = None
    last_year: int | None = None


class ConversionResult(BaseModel):
    """Outcome of a successful conversion run."""

    stats: JournalStats
    output_path: Path | None = None


def load_journal(path: Path) -> Journal:
    """Read and decode a Day One export."""
    return DayOneParser().parse_file(path)


def summarize(journal: Journal, tree: TimeTree | None = None) -> JournalStats:
    """Compute counts for a journal without converting any text."""
    if tree is None:
        tree = build_tree(journal)
    years = sorted(tree.years)
    return JournalStats(
        export_version=journal.metadata.version,
        entry_count=tree.entry_count(),
        year_count=len(years),
        day_count=tree.day_count(),
        entries_with_text=sum(1 for e in journal.entries if e.text),
        entries_with_photos=sum(1 for e in journal.entries if e.photos),
        first_year=years[0] if years else None,
        last_year=years[-1] if years else None,
    )


def render_journal(
    journal: Journal,
    converter: TextConverter,
    config: OutlineConfig | None = None,
) -> str:
    """Build the time tree for ``journal`` and render it as Org text.

    The tree is fully built before any entry is rendered.
    """
    tree = build_tree(journal)
    return OrgFormatter(converter, config).render(tree)


def run_conversion(
    config: AppConfig,
    converter: TextConverter | None = None,
    stream: TextIO | None = None,
) -> ConversionResult:
    """Run the full pipeline described by ``config``.

    Output goes to ``config.output_path`` if set, otherwise to ``stream``
    (stdout by default). Nothing is written unless every entry renders.

    Raises:
        DayOneOrgError: On any input, decode, conversion, render or output
            failure.
    """
    journal = load_journal(config.input_path)
    tree = build_tree(journal)
    stats = summarize(journal, tree)

    formatter = OrgFormatter(converter or config.to_converter(), config.to_outline_config())
    document = formatter.render(tree)

    output_path = config.output_path
    if output_path is not None:
        try:
            _atomic_write(output_path, document)
        except OSError as e:
            raise OutputUnavailableError(f"Cannot write {output_path}: {e}") from e
        logger.info("Wrote %d entries to %s", stats.entry_count, output_path)
    else:
        out = stream if stream is not None else sys.stdout
        out.write(document)
        out.flush()

    return ConversionResult(stats=stats, output_path=output_path)


def _atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a temp file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
