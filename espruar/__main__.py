#!/usr/bin/env python3
"""Allow ``python -m espruar``."""

import sys

from espruar.cli import main

sys.exit(main())
