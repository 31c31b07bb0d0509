#!/usr/bin/env python3
"""
Desk Planner - command-line entry point

Examples:
    python main.py run --employees 100 --days 3 --absenteeism 10 --trials 2000
    python main.py run --employees 250 --percentile 80 --percentile 99 --save "HQ"
    python main.py list
"""

import sys

from desk_planner.cli import main


if __name__ == "__main__":
    sys.exit(main())
