"""Allow running as python -m emmcctl."""

import sys

from emmcctl.cli import main

sys.exit(main())
