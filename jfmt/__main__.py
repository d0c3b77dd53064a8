"""Entry point for ``python -m jfmt``."""

import sys

from jfmt.engine.runner import main

sys.exit(main())
