"""
Main entry point for running autotile as a module.

Usage:
    python -m autotile [options]
"""

from .cli import main

if __name__ == "__main__":
    import sys

    sys.exit(main())
