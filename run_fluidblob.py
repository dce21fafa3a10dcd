#!/usr/bin/env python3
"""
Fluid Blob — quick launcher.

Usage:
    python run_fluidblob.py [options]

Run ``python run_fluidblob.py --help`` for full options.
"""

from fluidblob.app import main

if __name__ == "__main__":
    main()
