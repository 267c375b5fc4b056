#!/usr/bin/env python3
"""
Time-Frequency Track Extractor
==============================

Entry point for running the command line tool from a source checkout.
Usage:
    python run.py signal.csv --fs 256
or
./run.py signal.csv --fs 256
"""

from tftracks.main import main

if __name__ == "__main__":
    raise SystemExit(main())
