# SPDX-License-Identifier: MIT
"""Allow running libpng-src as `python -m libpng_src`."""

import sys

from libpng_src.cli import main

sys.exit(main())
