"""Allow ``python -m uigen``."""

import sys

from uigen.cli import main

sys.exit(main())
