"""
Entry point for running stylequill as a module.

Usage:
    python -m stylequill check styles.xml
    python -m stylequill export styles.xml --output word/styles.xml
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
