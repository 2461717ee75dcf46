"""
Quick formatter for a saved candidates JSON file to make it easier to skim.

Usage:
    python pretty_candidates_output.py
    python pretty_candidates_output.py --input path/to/candidates.json --max-rows 4
"""

from __future__ import annotations

import argparse
from pathlib import Path

from gearsel.cli.readable_output import print_readable_output


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Print a readable summary of a `gearsel candidates` JSON file"
    )
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        default=Path("candidates.json"),
        help="Path to a candidates JSON file (default: candidates.json)",
    )
    parser.add_argument(
        "--max-rows",
        type=int,
        default=10,
        help="Max candidates to list",
    )
    args = parser.parse_args()

    print_readable_output(json_path=args.input, max_rows=args.max_rows)


if __name__ == "__main__":
    main()
