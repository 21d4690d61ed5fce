"""Second pass removing spurious maxima left behind by carving.

Carving a discretised ball can leave a few elevated voxels next to a
detected sphere, and the greedy pass may report one of them as a small
separate sphere. On a fresh, uncarved distance field such a voxel sits
next to a strictly larger value, which is how it is recognised here.
"""

import logging
from typing import Iterable, List, Tuple

import numpy as np
from tqdm import tqdm

from ..data_structures import Feature
from ..exceptions import InsufficientPaddingError
from .padding import interior_slices, window_slices
from .templates import bin_sphere

logger = logging.getLogger(__name__)


def restrict_to_interior(field: np.ndarray, padsize: int) -> np.ndarray:
    """Copy of ``field`` with every voxel outside the original volume set to zero."""
    inner = interior_slices(field.shape, padsize)
    restricted = np.zeros_like(field)
    restricted[inner] = field[inner]
    return restricted


def filter_window_radius(minr: float) -> int:
    """Radius of the fixed search window used by the filter."""
    return max(1, int(minr))


def window_peak(field: np.ndarray, feature: Feature, padsize: int, radius: int) -> float:
    """Largest value of ``field`` inside a ball of ``radius`` around ``feature``.

    Raises:
        InsufficientPaddingError: If the window leaves the padded volume
    """
    center = np.rint(feature.center).astype(int) + padsize
    window = window_slices(center, radius, field.shape)
    if window is None:
        raise InsufficientPaddingError(
            f"Filter window of radius {radius} at {tuple(center)} exceeds the padded "
            f"volume {field.shape}; increase padsize"
        )
    block = field[window]
    return float(block[bin_sphere(2 * radius + 1)].max())


def split_false_maxima(
    features: Iterable[Feature],
    field: np.ndarray,
    padsize: int,
    minr: float,
    show_progress: bool = False
) -> Tuple[List[Feature], List[Feature]]:
    """Partition features into (kept, discarded).

    A feature is discarded when a strictly larger distance value exists
    within ``minr`` of its rounded centre. Each check only reads the field,
    so the outcome for one feature never depends on the others.

    Args:
        features: Features from the extraction pass
        field: Fresh (uncarved) distance field of the padded volume
        padsize: Padding around the original volume
        minr: Minimum radius, also the window radius
        show_progress: Display a tqdm progress bar

    Returns:
        Tuple of (kept, discarded), each in input order
    """
    features = list(features)
    restricted = restrict_to_interior(field, padsize)
    radius = filter_window_radius(minr)

    kept: List[Feature] = []
    discarded: List[Feature] = []
    for feature in tqdm(features, desc="Filtering maxima", disable=not show_progress):
        peak = window_peak(restricted, feature, padsize, radius)
        if peak > feature.radius:
            logger.debug(
                f"Discarding sphere at ({feature.x:.1f}, {feature.y:.1f}, {feature.z:.1f}) "
                f"r={feature.radius:.2f}: nearby peak {peak:.2f}"
            )
            discarded.append(feature)
        else:
            kept.append(feature)

    logger.info(f"False-maxima filter kept {len(kept)} of {len(features)} spheres")
    return kept, discarded


def remove_false_maxima(
    features: Iterable[Feature],
    field: np.ndarray,
    padsize: int,
    minr: float,
    show_progress: bool = False
) -> List[Feature]:
    """Return only the features that survive :func:`split_false_maxima`."""
    kept, _ = split_false_maxima(features, field, padsize, minr, show_progress)
    return kept


__all__ = [
    "restrict_to_interior",
    "filter_window_radius",
    "window_peak",
    "split_false_maxima",
    "remove_false_maxima",
]
