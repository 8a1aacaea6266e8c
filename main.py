#!/usr/bin/env python3
"""
sotgen - Main Entry Point

Runs the dungeon generator CLI from a source checkout without installing.
"""

import sys
from pathlib import Path


def main():
    # Make the src/ layout importable when run from the repository root
    src_dir = Path(__file__).resolve().parent / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

    from sotgen.cli import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
