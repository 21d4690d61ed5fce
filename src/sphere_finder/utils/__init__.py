"""Utils package for common utilities.

This package provides utility functions for file handling,
logging and timing.
"""

from .common import setup_logging, Timer, ensure_directory
from .file_utils import natural_sort_key, get_image_files

__all__ = [
    "setup_logging",
    "Timer", 
    "ensure_directory",
    "natural_sort_key",
    "get_image_files"
]
