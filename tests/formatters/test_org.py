"""Tests for the Org outline formatter."""

import io
from datetime import datetime, timezone

import pytest

from dayone_org.errors import ConversionError, InvariantViolation, UnknownMoonPhaseError
from dayone_org.formatters.config import OutlineConfig
from dayone_org.formatters.org import OrgFormatter, day_name, month_name
from dayone_org.formatters.templates import (
    format_heading,
    format_properties_drawer,
    format_property,
)
from dayone_org.parsers.models import Entry, Journal, Metadata, Photo, Weather
from dayone_org.tree import build_tree


def _at(stamp: str) -> datetime:
    return datetime.strptime(stamp, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)


@pytest.fixture
def journal() -> Journal:
    return Journal(
        metadata=Metadata(version="1.0"),
        entries=[
            Entry(
                creation_date=_at("2021-03-05T10:00:00Z"),
                text="### Morning walk\nIt was nice",
                weather=Weather(conditions_description="Cloudy"),
            ),
            Entry(creation_date=_at("2020-12-31T23:00:00Z")),
            Entry(creation_date=_at("2021-03-05T18:00:00Z"), text="Evening"),
            Entry(creation_date=_at("2021-01-10T09:30:00Z"), text="Snow"),
        ],
    )


class FailingConverter:
    def convert(self, text, options):
        raise ConversionError("pandoc exited 1: boom")


class TestNames:
    def test_month_names(self) -> None:
        assert month_name(1) == "January"
        assert month_name(3) == "March"
        assert month_name(12) == "December"

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_month_out_of_range(self, month: int) -> None:
        with pytest.raises(InvariantViolation) as exc_info:
            month_name(month)
        assert exc_info.value.stage == "render"

    def test_day_name(self) -> None:
        assert day_name(2021, 3, 5) == "Friday"
        assert day_name(2020, 12, 31) == "Thursday"
        assert day_name(2024, 2, 29) == "Thursday"

    def test_day_name_invalid_date(self) -> None:
        with pytest.raises(InvariantViolation):
            day_name(2021, 2, 30)


class TestTemplates:
    def test_heading(self) -> None:
        assert format_heading(1, "2021") == "* 2021"
        assert format_heading(4, "Title") == "**** Title"

    def test_property(self) -> None:
        assert format_property("Weather", "Cloudy") == ":Weather: Cloudy"

    def test_empty_drawer(self) -> None:
        assert format_properties_drawer({}) == [":PROPERTIES:", ":END:"]


class TestRender:
    def test_full_document(self, fake_converter, journal: Journal) -> None:
        output = OrgFormatter(fake_converter).render(build_tree(journal))
        assert output == (
            "* 2020\n"
            "** 2020-12 December\n"
            "*** 2020-12-31 Thursday\n"
            "**** Empty\n"
            ":PROPERTIES:\n"
            ":END:\n"
            "\n"
            "* 2021\n"
            "** 2021-1 January\n"
            "*** 2021-1-10 Sunday\n"
            "**** Snow\n"
            ":PROPERTIES:\n"
            ":END:\n"
            "Snow\n"
            "** 2021-3 March\n"
            "*** 2021-3-5 Friday\n"
            "**** Morning walk\n"
            ":PROPERTIES:\n"
            ":Weather: Cloudy\n"
            ":END:\n"
            "### Morning walk\n"
            "It was nice\n"
            "**** Evening\n"
            ":PROPERTIES:\n"
            ":END:\n"
            "Evening\n"
        )

    def test_converter_called_only_for_text(self, fake_converter, journal: Journal) -> None:
        OrgFormatter(fake_converter).render(build_tree(journal))
        assert len(fake_converter.calls) == 3

    def test_zero_padded_dates(self, fake_converter, journal: Journal) -> None:
        config = OutlineConfig(zero_pad_dates=True)
        output = OrgFormatter(fake_converter, config).render(build_tree(journal))
        assert "** 2021-03 March\n" in output
        assert "*** 2021-03-05 Friday\n" in output
        assert "*** 2021-01-10 Sunday\n" in output

    def test_custom_empty_title(self, fake_converter, journal: Journal) -> None:
        config = OutlineConfig(empty_title="(untitled)")
        output = OrgFormatter(fake_converter, config).render(build_tree(journal))
        assert "**** (untitled)\n" in output

    def test_property_block_is_set_equal(self, fake_converter) -> None:
        from dayone_org.parsers.models import Location, Music

        entry = Entry(
            creation_date=_at("2021-03-05T10:00:00Z"),
            weather=Weather(conditions_description="Cloudy", moon_phase_code="full"),
            music=Music(artist="Boards of Canada", track="Roygbiv"),
            location=Location(latitude=51.5, longitude=-0.12, place_name="London"),
        )
        lines = OrgFormatter(fake_converter).format_entry(entry)
        start = lines.index(":PROPERTIES:")
        end = lines.index(":END:")
        assert set(lines[start + 1 : end]) == {
            ":Moon: \U0001f315",
            ":Weather: Cloudy",
            ":Music: Boards of Canada — Roygbiv",
            ":Latitude: 51.5",
            ":Longitude: -0.12",
            ":Location: London",
        }

    def test_first_photo_link_in_title(self, fake_converter) -> None:
        entry = Entry(
            creation_date=_at("2021-03-05T10:00:00Z"),
            text="![](dayone-moment://X)\n![](dayone-moment://Y)",
            photos=[
                Photo(content_hash="later", file_extension="png", order_in_entry=1),
                Photo(content_hash="abc123", file_extension="jpg", order_in_entry=0),
            ],
        )
        lines = OrgFormatter(fake_converter).format_entry(entry)
        assert lines[0] == "**** [[./images/abc123.jpg]]"
        assert lines[-1] == "[[./images/abc123.jpg]]\n[[./images/later.png]]"

    def test_images_dir_from_config(self, fake_converter) -> None:
        entry = Entry(
            creation_date=_at("2021-03-05T10:00:00Z"),
            text="![](dayone-moment://X)",
            photos=[Photo(content_hash="abc", file_extension="jpg", order_in_entry=0)],
        )
        config = OutlineConfig(images_dir="~/journal/photos")
        lines = OrgFormatter(fake_converter, config).format_entry(entry)
        assert lines[0] == "**** [[~/journal/photos/abc.jpg]]"

    def test_write_matches_render(self, fake_converter, journal: Journal) -> None:
        tree = build_tree(journal)
        formatter = OrgFormatter(fake_converter)
        stream = io.StringIO()
        formatter.write(tree, stream)
        assert stream.getvalue() == formatter.render(tree)

    def test_deterministic(self, fake_converter, journal: Journal) -> None:
        formatter = OrgFormatter(fake_converter)
        assert formatter.render(build_tree(journal)) == formatter.render(build_tree(journal))

    def test_empty_tree(self, fake_converter) -> None:
        journal = Journal(metadata=Metadata(version="1.0"), entries=[])
        assert OrgFormatter(fake_converter).render(build_tree(journal)) == ""


class TestRenderErrors:
    def test_unknown_moon_phase_aborts(self, fake_converter) -> None:
        journal = Journal(
            metadata=Metadata(version="1.0"),
            entries=[
                Entry(
                    creation_date=_at("2021-03-05T10:00:00Z"),
                    weather=Weather(moon_phase_code="eclipse"),
                )
            ],
        )
        with pytest.raises(UnknownMoonPhaseError) as exc_info:
            OrgFormatter(fake_converter).render(build_tree(journal))
        assert exc_info.value.entry_date == "2021-03-05T10:00:00Z"
        assert "2021-03-05T10:00:00Z" in exc_info.value.describe()

    def test_conversion_failure_aborts(self, journal: Journal) -> None:
        with pytest.raises(ConversionError) as exc_info:
            OrgFormatter(FailingConverter()).render(build_tree(journal))
        assert exc_info.value.entry_date is not None
        assert exc_info.value.describe().startswith("[convert] pandoc exited 1")
