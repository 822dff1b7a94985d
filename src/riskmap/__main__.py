"""Allow ``python -m riskmap``."""

from .cli import app

app(prog_name="riskmap")
