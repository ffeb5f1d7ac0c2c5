"""Development entry point (no install needed).

Runs the CLI with `python -m main ...` from the project root: the code lives
in `src/`, so without an editable install Python would not find `eansearch`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from eansearch.cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
