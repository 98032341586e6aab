#!/usr/bin/env python3
# courier-dispatch/main.py
"""
Run the Courier Dispatch CLI from a source checkout.

Usage:
    python main.py < request.txt
    python main.py --input request.txt --table

See ``courier.cli`` for the options and exit codes. Installed copies expose
the same entry point as the ``courier-dispatch`` command.
"""

import os
import sys

# Ensure courier package is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from courier.cli import main

if __name__ == "__main__":
    sys.exit(main())
