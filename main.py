"""Main entry point for the transcript corrector."""
from __future__ import annotations

import sys

from dotenv import load_dotenv

from app.startup import run_cli


def main() -> None:
    """Application entry point."""
    # Load .env early so the configuration loader sees it
    load_dotenv()
    sys.exit(run_cli())


__all__ = ["main"]

if __name__ == "__main__":
    main()
