"""refmatch Command Line Interface.

Usage:
    python -m refmatch.cli --help
    python -m refmatch.cli match screenshot.png button.png --threshold 0.85

Or via the installed entry point:
    refmatch match screenshot.png button.png --rotation-step 90 --format json
"""

from .main import main

__all__ = ["main"]
