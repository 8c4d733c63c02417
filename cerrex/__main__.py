"""Allow ``python -m cerrex``."""

import sys

from .cli import main

sys.exit(main())
