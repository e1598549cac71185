#!/usr/bin/env python3
"""
DrawPoker - Startup Script

Usage:
    python run.py play [--seed SEED] [--coins N] [--auto]
    python run.py serve [--host HOST] [--port PORT]
"""

import sys

from drawpoker.cli import main


if __name__ == "__main__":
    sys.exit(main())
