"""Year → month → day grouping of journal entries."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from dayone_org.parsers.models import Entry, Journal

logger = logging.getLogger(__name__)


class Day(BaseModel):
    """Entries written on one calendar day, in arrival order."""

    entries: list[Entry] = Field(default_factory=list)


class Month(BaseModel):
    days: dict[int, Day] = Field(default_factory=dict)

    def entry_count(self) -> int:
        return sum(len(day.entries) for day in self.days.values())


class Year(BaseModel):
    months: dict[int, Month] = Field(default_factory=dict)

    def entry_count(self) -> int:
        return sum(month.entry_count() for month in self.months.values())


class TimeTree(BaseModel):
    """Entries bucketed by the UTC calendar date of their creation.

    Bucket dicts have no meaningful order; renderers sort the keys.
    """

    years: dict[int, Year] = Field(default_factory=dict)

    def add_entry(self, entry: Entry) -> None:
        year = self.years.setdefault(entry.year(), Year())
        month = year.months.setdefault(entry.month(), Month())
        day = month.days.setdefault(entry.day(), Day())
        day.entries.append(entry)

    def entry_count(self) -> int:
        """Number of entries reachable through the tree."""
        return sum(year.entry_count() for year in self.years.values())

    def day_count(self) -> int:
        return sum(
            len(month.days) for year in self.years.values() for month in year.months.values()
        )


def build_tree(journal: Journal) -> TimeTree:
    """Group a journal's entries into a TimeTree, preserving journal order."""
    tree = TimeTree()
    for entry in journal.entries:
        tree.add_entry(entry)
    logger.debug(
        "Built tree with %d year(s), %d day(s), %d entries",
        len(tree.years),
        tree.day_count(),
        tree.entry_count(),
    )
    return tree
