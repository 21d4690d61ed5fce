"""Detection Package

Greedy distance-field sphere detection:
- Volume padding
- Distance field construction
- Sphere templates (carving and search windows)
- Largest-first extraction with tie clustering
- False-maxima filtering
"""

from .padding import pad_volume, interior_slices
from .distance import build_distance_field, distance_transform
from .templates import bin_sphere, carving_mask
from .extraction import extract_features, resolve_centroid, carve_sphere
from .filtering import remove_false_maxima, split_false_maxima
from .core import run_detection, detect_features

__all__ = [
    # Pipeline
    "run_detection",
    "detect_features",
    
    # Stages
    "pad_volume",
    "interior_slices",
    "build_distance_field",
    "distance_transform",
    "bin_sphere",
    "carving_mask",
    "extract_features",
    "resolve_centroid",
    "carve_sphere",
    "remove_false_maxima",
    "split_false_maxima",
]
