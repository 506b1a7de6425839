#!/usr/bin/env python3
"""
dg2srt Entry Point Script

This script initializes the CLI handler and converts every transcript
under the given directory.
"""

import sys
from dg2srt.cli import main

if __name__ == "__main__":
    # Basic check for minimal Python version if necessary
    if sys.version_info < (3, 8):
        sys.stderr.write("dg2srt requires Python 3.8 or later.\n")
        sys.exit(1)

    main()
