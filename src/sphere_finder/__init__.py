"""Sphere Finder Core Package

Locates and sizes dark spherical objects (droplets, beads) in 3D volumes:
- Distance field construction from a thresholded volume
- Greedy largest-first sphere extraction with carving
- False-maxima filtering
- Radius statistics and ground-truth evaluation
"""

__version__ = "1.0.0"
__author__ = "3D Particle Analysis Team"

from .detection import (
    detect_features, run_detection,
    pad_volume, build_distance_field, bin_sphere,
    extract_features, remove_false_maxima
)
from .data_structures import Feature, DetectionResult
from .exceptions import SphereFinderError, ConfigurationError, InsufficientPaddingError

from .config import (
    DEFAULT_CONFIG, PipelineConfig, DetectionConfig, OutputConfig,
    DOCUMENTED_PADSIZE, CODED_PADSIZE, TIE_CLUSTER_FRACTION
)
from .io import load_volume, save_features_csv, load_features_csv
from .statistics import summarize_features, analyze_features
from .evaluation import match_features
from .synthetic import make_sphere_volume
from .utils import setup_logging, Timer, ensure_directory, get_image_files, natural_sort_key

__all__ = [
    # Detection
    "detect_features",
    "run_detection",
    "pad_volume",
    "build_distance_field",
    "bin_sphere",
    "extract_features",
    "remove_false_maxima",
    
    # Data structures
    "Feature",
    "DetectionResult",
    
    # Errors
    "SphereFinderError",
    "ConfigurationError",
    "InsufficientPaddingError",
    
    # Configuration
    "DEFAULT_CONFIG",
    "PipelineConfig",
    "DetectionConfig",
    "OutputConfig",
    "DOCUMENTED_PADSIZE",
    "CODED_PADSIZE",
    "TIE_CLUSTER_FRACTION",
    
    # IO and analysis
    "load_volume",
    "save_features_csv",
    "load_features_csv",
    "summarize_features",
    "analyze_features",
    "match_features",
    "make_sphere_volume",
    
    # Utilities
    "setup_logging",
    "Timer",
    "ensure_directory",
    "get_image_files",
    "natural_sort_key",
]
