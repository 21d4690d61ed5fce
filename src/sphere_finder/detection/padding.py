"""Embedding of the input volume in a zero-filled working buffer."""

import logging
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def pad_volume(volume: np.ndarray, padsize: int) -> np.ndarray:
    """Place ``volume`` at offset (padsize, padsize, padsize) in a zero-filled grid.

    Zero is below any useful threshold, so the border reads as sphere interior.
    A sphere cut by the image edge therefore keeps the distance values it
    would have if it were fully visible.

    Args:
        volume: 3D intensity volume (not modified)
        padsize: Number of voxels added on each side of every axis

    Returns:
        New array of shape ``volume.shape + 2 * padsize`` with the volume's dtype
    """
    padded = np.pad(volume, padsize, mode="constant", constant_values=0)
    logger.debug(f"Padded volume {volume.shape} -> {padded.shape}")
    return padded


def interior_slices(shape: Tuple[int, ...], padsize: int) -> Tuple[slice, ...]:
    """Slices selecting the original volume inside a padded grid of ``shape``."""
    return tuple(slice(padsize, n - padsize) for n in shape)


def window_slices(center, radius: int, shape: Tuple[int, ...]) -> Optional[Tuple[slice, ...]]:
    """Slices of the (2*radius+1)^3 cube centred on integer ``center``.

    Returns ``None`` if any part of the cube falls outside ``shape``; callers
    turn that into an insufficient-padding error.
    """
    slices = []
    for c, n in zip(center, shape):
        lo, hi = int(c) - radius, int(c) + radius + 1
        if lo < 0 or hi > n:
            return None
        slices.append(slice(lo, hi))
    return tuple(slices)


__all__ = ["pad_volume", "interior_slices", "window_slices"]
