"""Configuration model for outline rendering."""

from pydantic import BaseModel, Field

from dayone_org.converter import ConversionOptions
from dayone_org.parsers.models import DEFAULT_IMAGES_DIR, PREAMBLE_LINES


class OutlineConfig(BaseModel):
    """Settings that shape the rendered Org document."""

    images_dir: str = DEFAULT_IMAGES_DIR
    zero_pad_dates: bool = False
    empty_title: str = "Empty"
    preamble_lines: int = PREAMBLE_LINES
    conversion: ConversionOptions = Field(default_factory=ConversionOptions)
