"""Greedy largest-first extraction of spheres from a distance field.

Each iteration takes the global maximum of the field inside the original
volume, records it as a sphere, and carves that sphere out of the field so
it cannot be selected again. Because carving only ever zeroes values, the
recorded radii are non-increasing, and each radius is correct only because
every larger sphere was carved before it was measured. The loop is
therefore inherently sequential.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..config import TIE_CLUSTER_FRACTION
from ..data_structures import Feature
from ..exceptions import InsufficientPaddingError
from .padding import interior_slices, window_slices
from .templates import carving_mask

logger = logging.getLogger(__name__)


def resolve_centroid(
    region: np.ndarray,
    loc: Sequence[int],
    peak: float,
    cluster_fraction: float = TIE_CLUSTER_FRACTION
) -> np.ndarray:
    """Collapse tied maxima around ``loc`` into a single centroid.

    A sphere cut by the edge of the volume often has a flat top: several
    voxels share the peak value. Every voxel equal to ``peak`` that lies
    within ``peak * cluster_fraction`` of ``loc`` is averaged; tied voxels
    further away belong to other spheres and are left for later iterations.
    This is an approximation of the true centre, not an estimator of it.

    Args:
        region: Distance field restricted to the original volume
        loc: Index of the representative maximum
        peak: Value of the maximum
        cluster_fraction: Neighbourhood radius as a fraction of ``peak``

    Returns:
        Centroid as a float array, in ``region`` index space
    """
    loc = np.asarray(loc)
    tied = np.argwhere(region == peak)
    if len(tied) <= 1:
        return loc.astype(float)

    dists = np.linalg.norm(tied - loc, axis=1)
    cluster = tied[dists <= peak * cluster_fraction]
    logger.debug(f"Peak {peak:.2f} tied at {len(tied)} voxels, {len(cluster)} clustered")
    return cluster.mean(axis=0)


def carve_sphere(
    field: np.ndarray,
    center: Sequence[int],
    radius: int,
    mask: Optional[np.ndarray] = None
) -> None:
    """Zero the ball of ``radius`` around ``center`` in ``field``, in place.

    Raises:
        InsufficientPaddingError: If the ball reaches outside ``field``
    """
    window = window_slices(center, radius, field.shape)
    if window is None:
        raise InsufficientPaddingError(
            f"Carving radius {radius} at {tuple(int(c) for c in center)} exceeds the padded "
            f"volume {field.shape}; increase padsize"
        )
    if mask is None:
        mask = carving_mask(radius)
    field[window] *= mask


def extract_features(
    field: np.ndarray,
    padsize: int,
    minr: float,
    cluster_fraction: float = TIE_CLUSTER_FRACTION
) -> List[Feature]:
    """Extract spheres from ``field`` largest first until the peak drops below ``minr``.

    The field is modified in place: every detected sphere is carved out of it.

    Ties between equal maxima are broken by taking the lexicographically
    smallest (x, y, z) index, i.e. the first occurrence in C order.

    Args:
        field: Distance field of the padded volume (mutated)
        padsize: Padding around the original volume
        minr: Stop once the largest remaining value is below this
        cluster_fraction: See :func:`resolve_centroid`

    Returns:
        Features in extraction order (non-increasing radius), with
        coordinates in the original volume's index space

    Raises:
        InsufficientPaddingError: If the largest sphere does not fit in the padding
    """
    region = field[interior_slices(field.shape, padsize)]
    features: List[Feature] = []
    if region.size == 0:
        return features

    flat = int(np.argmax(region))
    peak = float(region.flat[flat])

    # The first peak bounds every later carve, so check once before mutating.
    if peak >= minr and int(np.floor(peak)) > padsize:
        raise InsufficientPaddingError(
            f"Largest sphere radius {peak:.2f} exceeds padsize {padsize}; increase padsize"
        )

    prev_radius = None
    mask = None
    while peak >= minr:
        loc = np.unravel_index(flat, region.shape)
        centroid = resolve_centroid(region, loc, peak, cluster_fraction)

        feature = Feature(float(centroid[0]), float(centroid[1]), float(centroid[2]), peak)
        features.append(feature)
        logger.debug(
            f"Sphere {len(features)}: center=({feature.x:.1f}, {feature.y:.1f}, {feature.z:.1f}) "
            f"radius={peak:.2f}"
        )

        radius = int(np.floor(peak))
        if radius != prev_radius:
            mask = carving_mask(radius)
        carve_sphere(field, np.rint(centroid).astype(int) + padsize, radius, mask)
        # Guarantees progress when the rounded centroid drifts off the seed voxel
        region[loc] = 0.0
        prev_radius = radius

        flat = int(np.argmax(region))
        peak = float(region.flat[flat])

    logger.info(f"Extracted {len(features)} candidate spheres (minr={minr})")
    return features


__all__ = ["resolve_centroid", "carve_sphere", "extract_features"]
