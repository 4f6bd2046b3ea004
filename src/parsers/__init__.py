"""Parsers for Day One export data."""

from .dayone import DEFAULT_JOURNAL_PATH, DayOneParser, parse_journal
from .models import (
    MOON_PHASES,
    Entry,
    Journal,
    Location,
    Metadata,
    Music,
    Photo,
    Weather,
)

__all__ = [
    "DEFAULT_JOURNAL_PATH",
    "DayOneParser",
    "Entry",
    "Journal",
    "Location",
    "MOON_PHASES",
    "Metadata",
    "Music",
    "Photo",
    "Weather",
    "parse_journal",
]
