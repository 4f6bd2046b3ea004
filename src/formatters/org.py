"""Org-mode outline formatter for Day One journals."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date
from typing import TextIO

from dayone_org.converter import TextConverter
from dayone_org.errors import DayOneOrgError, InvariantViolation
from dayone_org.formatters.config import OutlineConfig
from dayone_org.formatters.templates import (
    DAY_NAMES,
    MONTH_NAMES,
    format_date_number,
    format_heading,
    format_properties_drawer,
)
from dayone_org.parsers.models import DATE_FORMAT, Entry
from dayone_org.tree import TimeTree

logger = logging.getLogger(__name__)


def month_name(month: int) -> str:
    """English name for a month number (1-12)."""
    if not 1 <= month <= 12:
        raise InvariantViolation(f"Month {month} is outside 1-12")
    return MONTH_NAMES[month - 1]


def day_name(year: int, month: int, day: int) -> str:
    """English weekday name for a calendar date."""
    try:
        return DAY_NAMES[date(year, month, day).weekday()]
    except ValueError as e:
        raise InvariantViolation(f"{year}-{month}-{day} is not a calendar date: {e}") from e


class OrgFormatter:
    """Renders a TimeTree as a nested Org outline.

    Layout::

        * 2021
        ** 2021-3 March
        *** 2021-3-5 Friday
        **** Entry title
        :PROPERTIES:
        :Weather: Cloudy
        :END:
        Converted body
    """

    def __init__(
        self, converter: TextConverter, config: OutlineConfig | None = None
    ) -> None:
        self._converter = converter
        self._config = config if config is not None else OutlineConfig()

    def render(self, tree: TimeTree) -> str:
        """Render the whole tree to a single string."""
        return "".join(f"{line}\n" for line in self.iter_lines(tree))

    def write(self, tree: TimeTree, stream: TextIO) -> None:
        """Render the tree line by line onto ``stream``."""
        for line in self.iter_lines(tree):
            stream.write(line)
            stream.write("\n")

    def iter_lines(self, tree: TimeTree) -> Iterator[str]:
        pad = self._config.zero_pad_dates
        for y in sorted(tree.years):
            year = tree.years[y]
            yield format_heading(1, str(y))
            for m in sorted(year.months):
                month = year.months[m]
                month_str = format_date_number(m, pad)
                yield format_heading(2, f"{y}-{month_str} {month_name(m)}")
                for d in sorted(month.days):
                    day_str = format_date_number(d, pad)
                    yield format_heading(
                        3, f"{y}-{month_str}-{day_str} {day_name(y, m, d)}"
                    )
                    for entry in month.days[d].entries:
                        yield from self.format_entry(entry)

    def format_entry(self, entry: Entry) -> list[str]:
        """Heading, properties drawer and body for one entry."""
        try:
            return self._format_entry(entry)
        except DayOneOrgError as e:
            if e.entry_index is None and e.entry_date is None:
                e.entry_date = entry.creation_date.strftime(DATE_FORMAT)
            raise

    def _format_entry(self, entry: Entry) -> list[str]:
        config = self._config
        first_photo = entry.first_photo()
        first_link = first_photo.link(config.images_dir) if first_photo else None

        title = entry.title(first_link)
        lines = [format_heading(4, title if title is not None else config.empty_title)]
        lines.extend(format_properties_drawer(entry.properties()))

        logger.debug("Converting entry %s", entry.creation_date.strftime(DATE_FORMAT))
        body = entry.body(
            self._converter,
            entry.photos,
            options=config.conversion,
            preamble_lines=config.preamble_lines,
            images_dir=config.images_dir,
        )
        lines.append(body if body is not None else "")
        return lines
