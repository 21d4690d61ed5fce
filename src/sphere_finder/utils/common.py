"""Common utilities for the sphere detection pipeline."""

import logging
import time
from pathlib import Path
from typing import Optional, Union


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Setup consistent logging configuration.
    
    Args:
        level: Logging level
        
    Returns:
        Configured logger
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger("sphere_finder")


def ensure_directory(path: Union[str, Path]) -> Path:
    """Ensure directory exists, create if necessary.
    
    Args:
        path: Directory path
        
    Returns:
        Path object
    """
    path_obj = Path(path)
    path_obj.mkdir(parents=True, exist_ok=True)
    return path_obj


class Timer:
    """Simple context manager for timing operations.

    The measured duration is kept in ``elapsed`` after the block exits.
    """
    
    def __init__(self, description: str, logger: Optional[logging.Logger] = None):
        self.description = description
        self.logger = logger or logging.getLogger(__name__)
        self.start_time = None
        self.elapsed = 0.0
    
    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.info(f"Starting: {self.description}")
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is None:
            self.logger.info(f"Completed: {self.description} ({self.elapsed:.2f}s)")
        else:
            self.logger.error(f"Failed: {self.description} after {self.elapsed:.2f}s")
