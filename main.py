#!/usr/bin/env python3
"""IntervalFit entry point.

Run with:
    python main.py
    python -m intervalfit
"""

from intervalfit.__main__ import main


if __name__ == "__main__":
    main()
