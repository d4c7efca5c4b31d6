"""Allow ``python -m cfxlink``."""

from cfxlink.cli import cli

cli()
