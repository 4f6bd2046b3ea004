"""Unified configuration loaded from .dayone-org.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from dayone_org.converter import ConversionOptions, PandocConverter
from dayone_org.formatters.config import OutlineConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".dayone-org.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "dayone-org" / "config.toml"


class InputConfig(BaseModel):
    """[input] section."""

    path: str = "Journal.json"


class OutputConfig(BaseModel):
    """[output] section."""

    path: str = ""
    images_dir: str = "./images"
    zero_pad_dates: bool = False
    empty_title: str = "Empty"


class PandocConfig(BaseModel):
    """[pandoc] section."""

    command: str = "pandoc"
    from_format: str = "markdown"
    to_format: str = "org"
    shift_heading_level_by: int = 4
    preamble_lines: int = 4
    extra_args: list[str] = Field(default_factory=list)
    timeout: float = 0


class AppConfig(BaseModel):
    """Top-level configuration for a conversion run."""

    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    pandoc: PandocConfig = Field(default_factory=PandocConfig)

    @property
    def input_path(self) -> Path:
        return Path(self.input.path)

    @property
    def output_path(self) -> Path | None:
        """Output file, or None to write to stdout."""
        return Path(self.output.path) if self.output.path else None

    def to_outline_config(self) -> OutlineConfig:
        """Convert to OutlineConfig for the formatter."""
        return OutlineConfig(
            images_dir=self.output.images_dir,
            zero_pad_dates=self.output.zero_pad_dates,
            empty_title=self.output.empty_title,
            preamble_lines=self.pandoc.preamble_lines,
            conversion=ConversionOptions(
                from_format=self.pandoc.from_format,
                to_format=self.pandoc.to_format,
                shift_heading_level_by=self.pandoc.shift_heading_level_by,
            ),
        )

    def to_converter(self) -> PandocConverter:
        """Build the pandoc converter described by the [pandoc] section."""
        return PandocConverter(
            command=self.pandoc.command,
            extra_args=self.pandoc.extra_args,
            timeout=self.pandoc.timeout or None,
        )


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .dayone-org.toml in CWD
    3. ~/.config/dayone-org/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged AppConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = AppConfig()
    if data:
        try:
            config = AppConfig.model_validate(data)
        except ValidationError as exc:
            logger.warning("Ignoring invalid config: %s", exc)

    return _apply_env_vars(config)


def merge_cli_overrides(config: AppConfig, **cli_kwargs: object) -> AppConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values, e.g. ``input_path``, ``pandoc``.

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "input_path": ("input", "path"),
        "output_path": ("output", "path"),
        "images_dir": ("output", "images_dir"),
        "zero_pad_dates": ("output", "zero_pad_dates"),
        "pandoc": ("pandoc", "command"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value) if isinstance(value, Path) else value

    return AppConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: AppConfig) -> AppConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "DAYONE_ORG_INPUT": ("input", "path"),
        "DAYONE_ORG_OUTPUT": ("output", "path"),
        "DAYONE_ORG_IMAGES_DIR": ("output", "images_dir"),
        "DAYONE_ORG_PANDOC": ("pandoc", "command"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    return AppConfig.model_validate(data)
