"""Discrete sphere templates used for carving and windowed searches."""

from functools import lru_cache

import numpy as np


@lru_cache(maxsize=None)
def bin_sphere(ext: int) -> np.ndarray:
    """Boolean ball inscribed in an (ext, ext, ext) grid.

    A voxel is inside when its squared distance from the grid centre,
    (ext - 1) / 2 on each axis, is at most ((ext - 1) / 2)^2, plus 0.5 when
    ext - 1 is odd. The bias keeps even diameters from losing the voxels
    that straddle the half-integer radius.

    The result is cached per ``ext`` and returned read-only.
    """
    ext = int(ext)
    if ext < 1:
        raise ValueError(f"Sphere diameter must be a positive integer, got {ext}")

    center = (ext - 1) / 2.0
    axis = (np.arange(ext) - center) ** 2
    dist2 = axis[:, None, None] + axis[None, :, None] + axis[None, None, :]
    sphere = dist2 <= center ** 2 + 0.5 * ((ext - 1) % 2)
    sphere.setflags(write=False)
    return sphere


def carving_mask(radius: int) -> np.ndarray:
    """Complement of ``bin_sphere(2 * radius + 1)``: True outside the ball.

    Multiplying a field block by this mask zeroes the ball and keeps the rest.
    """
    return ~bin_sphere(2 * int(radius) + 1)


__all__ = ["bin_sphere", "carving_mask"]
