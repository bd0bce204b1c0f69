"""Entry point for ``python -m sfdiff``."""

import sys

from .cli import main

sys.exit(main())
