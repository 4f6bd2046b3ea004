"""Formatters for journal output."""

from dayone_org.formatters.config import OutlineConfig
from dayone_org.formatters.org import OrgFormatter, day_name, month_name
from dayone_org.formatters.templates import (
    format_heading,
    format_properties_drawer,
    format_property,
)

__all__ = [
    "OrgFormatter",
    "OutlineConfig",
    "day_name",
    "format_heading",
    "format_properties_drawer",
    "format_property",
    "month_name",
]
