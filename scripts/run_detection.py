#!/usr/bin/env python3
"""Sphere detection from the command line without installing the package.

    python scripts/run_detection.py data/volume.npy --threshold 128 --padsize 50
"""

import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sphere_finder.cli import main


if __name__ == "__main__":
    sys.exit(main())
