"""Allows `python -m eansearch ...`."""

from __future__ import annotations

from eansearch.cli.main import run

if __name__ == "__main__":
    run()
