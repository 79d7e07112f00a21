"""
Main entry point for the world scanner.

Usage: python -m worldscan.main [command] [options]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
