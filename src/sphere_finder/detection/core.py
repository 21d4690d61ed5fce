"""Sphere detection pipeline.

pad volume -> distance field -> greedy extraction -> false-maxima filter

The extraction and filter passes each build their own distance field from
the padded volume; the first is consumed by carving, the second is only read.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..config import DetectionConfig
from ..data_structures import DetectionResult
from ..utils.common import Timer
from .distance import build_distance_field
from .extraction import extract_features
from .filtering import split_false_maxima
from .padding import pad_volume

logger = logging.getLogger(__name__)


def run_detection(volume: np.ndarray, config: Optional[DetectionConfig] = None) -> DetectionResult:
    """Locate and size dark spheres in a bright 3D volume.

    Args:
        volume: Isotropic 3D intensity volume (not modified)
        config: Detection parameters (defaults if omitted)

    Returns:
        DetectionResult with the raw (extraction order) and filtered features

    Raises:
        ConfigurationError: If the parameters or volume are unusable
        InsufficientPaddingError: If a detected sphere is larger than the padding
    """
    config = config or DetectionConfig()
    config.validate(volume)

    result = DetectionResult(volume_shape=tuple(volume.shape), config=config)

    with Timer("Sphere detection", logger) as timer:
        padded = pad_volume(volume, config.padsize)

        field = build_distance_field(padded, config.threshold, config.distance_metric)
        raw = extract_features(field, config.padsize, config.minr, config.cluster_fraction)
        del field
        result.raw_features = raw

        if config.remove_false_maxima and raw:
            fresh = build_distance_field(padded, config.threshold, config.distance_metric)
            kept, discarded = split_false_maxima(
                raw, fresh, config.padsize, config.minr, show_progress=config.show_progress
            )
            result.features = kept
            result.discarded = discarded
        else:
            result.features = list(raw)

    result.processing_time = timer.elapsed

    if not result.features:
        logger.warning(f"No spheres with radius >= {config.minr} found in volume {volume.shape}")
    else:
        logger.info(
            f"Detected {len(result.features)} spheres "
            f"({len(result.discarded)} false maxima removed)"
        )
    return result


def detect_features(
    volume: np.ndarray,
    minr: float = 5,
    padsize: int = 100,
    threshold: float = 120,
    config: Optional[DetectionConfig] = None
) -> List[Tuple[float, float, float, float]]:
    """Detect spheres and return them as ``(x, y, z, radius)`` tuples.

    Coordinates are indices into ``volume``. When ``config`` is given its
    values take precedence over the keyword arguments.
    """
    if config is None:
        config = DetectionConfig(minr=minr, padsize=padsize, threshold=threshold)
    return run_detection(volume, config).as_tuples()


__all__ = ["run_detection", "detect_features"]
