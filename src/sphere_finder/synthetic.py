"""Synthetic volumes of dark spheres on a bright background."""

from typing import Iterable, Tuple

import numpy as np
from skimage.morphology import ball


def make_sphere_volume(
    shape: Tuple[int, int, int],
    spheres: Iterable[Tuple[int, int, int, int]],
    background: int = 255,
    foreground: int = 0,
    dtype=np.uint8
) -> np.ndarray:
    """Stamp balls into a uniform volume.

    Args:
        shape: Volume shape
        spheres: (x, y, z, radius) with integer centre and radius; centres
            may lie outside the volume, the ball is clipped to it
        background: Intensity outside the balls
        foreground: Intensity inside the balls
        dtype: Output dtype

    Returns:
        Volume of ``shape``
    """
    volume = np.full(shape, background, dtype=dtype)
    for x, y, z, r in spheres:
        r = int(r)
        kernel = ball(r).astype(bool)
        dst, src = [], []
        for c, n in zip((x, y, z), shape):
            lo, hi = int(c) - r, int(c) + r + 1
            clo, chi = max(lo, 0), min(hi, n)
            if clo >= chi:
                break
            dst.append(slice(clo, chi))
            src.append(slice(clo - lo, chi - lo))
        else:
            volume[tuple(dst)][kernel[tuple(src)]] = foreground
    return volume


__all__ = ["make_sphere_volume"]
