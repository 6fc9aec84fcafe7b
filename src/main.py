"""Entry point for the Terminal Snake game."""

from __future__ import annotations

import sys

from term_snake.cli import main

if __name__ == "__main__":
    sys.exit(main())
