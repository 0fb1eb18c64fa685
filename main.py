#!/usr/bin/env python3
"""
mlbpick: Pick an MLB game and feed with fzf, then hand it to mlbv.

Run from a checkout without installing: `python main.py --yesterday`.
"""

import sys

from mlbpick.cli import main

if __name__ == "__main__":
    sys.exit(main())
