"""Entry point for the Tower Defense Game."""

import sys

from .app import main

if __name__ == "__main__":
    sys.exit(main())
