"""Org-mode building blocks for the outline output."""

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# Indexed by date.weekday(); fixed so output does not depend on the locale.
DAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

PROPERTIES_START = ":PROPERTIES:"
PROPERTIES_END = ":END:"


def format_heading(level: int, text: str) -> str:
    """Format an Org heading at the given depth."""
    return f"{'*' * level} {text}"


def format_property(name: str, value: str) -> str:
    """Format a single line of a properties drawer."""
    return f":{name}: {value}"


def format_properties_drawer(properties: dict[str, str]) -> list[str]:
    lines = [PROPERTIES_START]
    lines.extend(format_property(name, value) for name, value in properties.items())
    lines.append(PROPERTIES_END)
    return lines


def format_date_number(value: int, zero_pad: bool = False) -> str:
    return f"{value:02d}" if zero_pad else str(value)
