"""CLI entry point for gridlayout.

Allows running the tool from a checkout with ``python . <command>``.
"""

import sys

from gridlayout.cli import main

if __name__ == "__main__":
    sys.exit(main())
