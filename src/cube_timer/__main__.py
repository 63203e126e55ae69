"""Allow `python -m cube_timer`."""

import sys

from .main import main

sys.exit(main())
