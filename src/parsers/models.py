"""Day One export data models.

These models mirror the subset of the Day One JSON export the outline needs.
Day One writes many more keys per entry; anything not declared here is
ignored. Derived display fields (title, properties, converted body) live on
:class:`Entry` so every consumer computes them the same way.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from dayone_org.converter import ConversionOptions, TextConverter
from dayone_org.errors import UnknownMoonPhaseError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z\Z")

MARKDOWN_HEADING_REGEX = re.compile(r"^#+\s")
MARKDOWN_PHOTO_REGEX = re.compile(r"!\[\]\(dayone-moment://[^)]+\)")
ORG_PHOTO_REGEX = re.compile(r"\[\[dayone-moment://[^\]]+\]\]")

# Lines of boilerplate the converter emits ahead of the body.
PREAMBLE_LINES = 4
DEFAULT_IMAGES_DIR = "./images"

MOON_PHASES: Mapping[str, str] = {
    "new": "\U0001f311",
    "waxing-crescent": "\U0001f312",
    "first-quarter": "\U0001f313",
    "waxing-gibbous": "\U0001f314",
    "full": "\U0001f315",
    "waning-gibbous": "\U0001f316",
    "last-quarter": "\U0001f317",
    "waning-crescent": "\U0001f318",
}


class Metadata(BaseModel):
    """Export metadata. Only the version is kept."""

    version: str


class Location(BaseModel):
    model_config = {"populate_by_name": True}

    longitude: float
    latitude: float
    place_name: str = Field(alias="placeName")


class Weather(BaseModel):
    model_config = {"populate_by_name": True}

    conditions_description: str | None = Field(None, alias="conditionsDescription")
    moon_phase_code: str | None = Field(None, alias="moonPhaseCode")


class Music(BaseModel):
    artist: str
    track: str


class Photo(BaseModel):
    """A photo attached to an entry, identified by its content hash."""

    model_config = {"populate_by_name": True}

    content_hash: str = Field(alias="md5")
    file_extension: str = Field(alias="type")
    order_in_entry: int = Field(alias="orderInEntry")

    def link(self, images_dir: str = DEFAULT_IMAGES_DIR) -> str:
        """Org link to the exported image file."""
        return f"[[{images_dir.rstrip('/')}/{self.content_hash}.{self.file_extension}]]"


def _lines(text: str) -> list[str]:
    """Split on newlines without producing a trailing empty line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _format_coordinate(value: float) -> str:
    """Shortest round-trip digits, never in exponent notation."""
    text = format(Decimal(repr(value)), "f")
    return text[:-2] if text.endswith(".0") else text


class Entry(BaseModel):
    """A single Day One journal entry."""

    model_config = {"populate_by_name": True}

    creation_date: datetime = Field(alias="creationDate")
    text: str | None = None
    location: Location | None = None
    weather: Weather | None = None
    music: Music | None = None
    photos: list[Photo] | None = None

    @field_validator("creation_date", mode="plain")
    @classmethod
    def parse_creation_date(cls, value: Any) -> datetime:
        """Accept only ``YYYY-MM-DDTHH:MM:SSZ`` strings (or datetimes)."""
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        if not isinstance(value, str):
            raise ValueError(f"creationDate must be a string, got {type(value).__name__}")
        if not _DATE_PATTERN.match(value):
            raise ValueError(f"creationDate {value!r} does not match {DATE_FORMAT}")
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)

    def year(self) -> int:
        return self.creation_date.year

    def month(self) -> int:
        return self.creation_date.month

    def day(self) -> int:
        return self.creation_date.day

    def sorted_photos(self) -> list[Photo]:
        """Photos ordered by their position in the entry."""
        return sorted(self.photos or [], key=lambda p: p.order_in_entry)

    def first_photo(self) -> Photo | None:
        photos = self.sorted_photos()
        return photos[0] if photos else None

    def properties(self, moon_phases: Mapping[str, str] = MOON_PHASES) -> dict[str, str]:
        """Build the properties drawer contents for this entry.

        Only sub-records that are present contribute keys. Callers should
        treat the result as a set of pairs rather than relying on its order.

        Raises:
            UnknownMoonPhaseError: If the moon phase code is not in
                ``moon_phases``.
        """
        props: dict[str, str] = {}

        if self.weather is not None:
            moon = self.weather.moon_phase_code
            if moon is not None:
                if moon not in moon_phases:
                    raise UnknownMoonPhaseError(moon)
                props["Moon"] = moon_phases[moon]
            if self.weather.conditions_description is not None:
                props["Weather"] = self.weather.conditions_description

        if self.music is not None:
            props["Music"] = f"{self.music.artist} — {self.music.track}"

        if self.location is not None:
            props["Latitude"] = _format_coordinate(self.location.latitude)
            props["Longitude"] = _format_coordinate(self.location.longitude)
            props["Location"] = self.location.place_name

        return props

    def title(self, first_photo_link: str | None = None) -> str | None:
        """First line of the text with any heading marker removed.

        If ``first_photo_link`` is given, a Markdown photo placeholder on that
        line is replaced by it.
        """
        if not self.text:
            return None
        lines = _lines(self.text)
        if not lines:
            return None
        line = MARKDOWN_HEADING_REGEX.sub("", lines[0], count=1)
        if first_photo_link is not None:
            line = MARKDOWN_PHOTO_REGEX.sub(lambda _: first_photo_link, line, count=1)
        return line

    def body(
        self,
        converter: TextConverter,
        photos: list[Photo] | None = None,
        *,
        options: ConversionOptions | None = None,
        preamble_lines: int = PREAMBLE_LINES,
        images_dir: str = DEFAULT_IMAGES_DIR,
    ) -> str | None:
        """Convert the text to Org markup and link in any photos.

        Photos are paired with Org photo placeholders left to right in
        ``order_in_entry`` order. Surplus placeholders are left as they are
        and surplus photos are unused.
        """
        if self.text is None:
            return None
        if not self.text:
            return ""

        converted = converter.convert(
            self.text, options if options is not None else ConversionOptions()
        )
        body = "\n".join(_lines(converted)[preamble_lines:])

        if photos:
            ordered = sorted(photos, key=lambda p: p.order_in_entry)
            placeholders = len(ORG_PHOTO_REGEX.findall(body))
            if placeholders != len(ordered):
                logger.warning(
                    "Entry %s has %d photo placeholder(s) but %d photo(s)",
                    self.creation_date.strftime(DATE_FORMAT),
                    placeholders,
                    len(ordered),
                )
            for photo in ordered:
                link = photo.link(images_dir)
                body = ORG_PHOTO_REGEX.sub(lambda _: link, body, count=1)

        return body


class Journal(BaseModel):
    """Root of a Day One export: metadata plus entries in file order."""

    metadata: Metadata
    entries: list[Entry]
