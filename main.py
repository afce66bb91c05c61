#!/usr/bin/env python3
"""
Main script to turn Reddit posts into narrated YouTube Shorts.
Uses the pipeline in src/reddit_shorts; run from project root.
"""

import sys
from pathlib import Path

# Ensure src is on path when running without installing the package
_SRC = Path(__file__).resolve().parent / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from reddit_shorts.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
