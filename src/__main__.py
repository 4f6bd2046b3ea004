"""Allow ``python -m dayone_org``."""

from dayone_org.cli import app

app()
