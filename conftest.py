"""Root conftest: runs before any test module imports."""

import os
import re

import pytest

# GitHub Actions sets FORCE_COLOR=1, which makes Rich inject ANSI escape
# codes into CLI output. Removing it here, at the earliest possible point,
# ensures Rich's Console() initialises in no-color mode regardless of the
# CI environment.
os.environ.pop("FORCE_COLOR", None)
os.environ["NO_COLOR"] = "1"

# Stand-in for the header lines pandoc writes ahead of the body.
FAKE_PREAMBLE = ["#+TITLE: converted", "#+AUTHOR:", "#+DATE:", ""]

_MARKDOWN_PHOTO = re.compile(r"!\[\]\((dayone-moment://[^)]+)\)")


class FakeConverter:
    """Deterministic converter: adds a preamble and turns photo markdown into org links."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def convert(self, text: str, options: object) -> str:
        self.calls.append((text, options))
        body = _MARKDOWN_PHOTO.sub(r"[[\1]]", text)
        return "\n".join(FAKE_PREAMBLE + [body]) + "\n"


@pytest.fixture
def fake_converter() -> FakeConverter:
    return FakeConverter()
