"""
Entry point for running gearsel as a module.

Usage:
    python -m gearsel candidates --input example_request.json
    python -m gearsel make-example
    python -m gearsel serve --port 8000
"""

import sys

from gearsel.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())
