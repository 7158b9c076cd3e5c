"""Entry point for ``python -m dumpster``."""

import sys

from dumpster.cli import main

sys.exit(main())
