"""Allow ``python -m ulidgen``."""

from ulidgen.cli import run

run()
