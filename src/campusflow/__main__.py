"""Allow ``python -m campusflow``."""
from __future__ import annotations

import sys

from campusflow.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
