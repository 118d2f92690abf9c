"""Allow ``python -m catalog_search``."""

import sys

from .cli import main

sys.exit(main())
