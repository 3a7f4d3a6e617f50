"""Entry point for `python -m icaltree`."""

import sys

from .cli import main

sys.exit(main())
