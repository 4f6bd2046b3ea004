"""External text conversion (Markdown entry bodies to Org markup).

Entry bodies are handed to ``pandoc`` over stdin. The pipeline only depends on
the :class:`TextConverter` protocol, so tests and callers can substitute any
text-in/text-out implementation.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol

from pydantic import BaseModel

from dayone_org.errors import ConversionError

logger = logging.getLogger(__name__)


class ConversionOptions(BaseModel):
    """Format tags and heading shift passed to the converter."""

    from_format: str = "markdown"
    to_format: str = "org"
    shift_heading_level_by: int = 4


class TextConverter(Protocol):
    """Anything that converts marked-up prose into another markup."""

    def convert(self, text: str, options: ConversionOptions) -> str: ...


class PandocConverter:
    """Converts text by piping it through the pandoc CLI."""

    def __init__(
        self,
        command: str = "pandoc",
        extra_args: list[str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._command = command
        self._extra_args = list(extra_args or [])
        self._timeout = timeout

    def build_command(self, options: ConversionOptions) -> list[str]:
        """Return the argv used for a conversion."""
        cmd: list[str] = [
            self._command,
            "-f",
            options.from_format,
            "-t",
            options.to_format,
        ]
        if options.shift_heading_level_by:
            cmd.append(f"--shift-heading-level-by={options.shift_heading_level_by}")
        cmd.extend(self._extra_args)
        return cmd

    def convert(self, text: str, options: ConversionOptions) -> str:
        """Run pandoc on ``text`` and return its stdout.

        Raises:
            ConversionError: If pandoc cannot be started, exits non-zero,
                times out, or produces output that is not UTF-8.
        """
        cmd = self.build_command(options)
        logger.debug("Running %s on %d characters", " ".join(cmd), len(text))

        try:
            result = subprocess.run(
                cmd,
                input=text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self._timeout,
            )
        except FileNotFoundError as e:
            raise ConversionError(
                f"{self._command} not found -- is pandoc on the PATH?"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ConversionError(
                f"{self._command} timed out after {self._timeout}s"
            ) from e
        except UnicodeDecodeError as e:
            raise ConversionError(f"{self._command} produced unreadable output: {e}") from e
        except OSError as e:
            raise ConversionError(f"Failed to run {self._command}: {e}") from e

        if result.returncode != 0:
            err_text = result.stderr.strip() if result.stderr else ""
            raise ConversionError(
                f"{self._command} exited {result.returncode}: {err_text}"
            )

        return result.stdout
