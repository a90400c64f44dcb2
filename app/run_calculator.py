#!/usr/bin/env python3
"""
badcalc Entry Point

Run with:
    python run_calculator.py

Or, once installed:
    badcalc
"""

import sys
import os

# Add app/ to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from badcalc.session import main


if __name__ == "__main__":
    sys.exit(main())
