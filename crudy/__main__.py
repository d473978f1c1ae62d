"""Allow ``python -m crudy``."""

import sys

from crudy.cli import main

if __name__ == "__main__":
    sys.exit(main())
