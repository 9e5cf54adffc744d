"""Allow `python -m monohooks`."""

import sys

from monohooks.cli import main

if __name__ == "__main__":
    sys.exit(main())
