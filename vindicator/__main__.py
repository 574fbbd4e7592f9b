"""Allow ``python -m vindicator``."""

from vindicator.cli import app

app()
