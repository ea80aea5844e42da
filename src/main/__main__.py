"""
Main module entry point.

This allows running a dashboard load as: python -m src.main
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
