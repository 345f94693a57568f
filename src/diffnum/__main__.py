"""Allow ``python -m diffnum``."""

import sys

from .main import main

sys.exit(main())
