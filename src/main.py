"""Run script.

Why it exists:
- Lets you run the CLI with `python -m main` from `src/` during development.
- Keeps a simple entry point next to the installed console script.
"""

from __future__ import annotations

import sys

# Rich prints non-ASCII arrows and bullets; cp1252 terminals would choke on them.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
