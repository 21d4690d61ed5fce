"""Statistical summary of detected sphere sizes."""

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .data_structures import Feature

logger = logging.getLogger(__name__)


def summarize_features(
    features: Sequence[Feature],
    volume_shape: Optional[Tuple[int, ...]] = None
) -> Dict[str, float]:
    """Radius distribution and packing statistics.

    Args:
        features: Detected spheres
        volume_shape: Shape of the analysed volume, for the volume fraction

    Returns:
        Dict: Summary statistics
    """
    if len(features) == 0:
        return _get_empty_stats()

    radii = np.array([f.radius for f in features], dtype=float)
    sphere_volume = float(np.sum(4.0 / 3.0 * np.pi * radii ** 3))
    stats = {
        'total_spheres': len(radii),
        'mean_radius': float(np.mean(radii)),
        'median_radius': float(np.median(radii)),
        'std_radius': float(np.std(radii)),
        'min_radius': float(np.min(radii)),
        'max_radius': float(np.max(radii)),
        'q25_radius': float(np.percentile(radii, 25)),
        'q75_radius': float(np.percentile(radii, 75)),
        'total_sphere_volume': sphere_volume,
        'volume_fraction': 0.0,
    }
    if volume_shape:
        stats['volume_fraction'] = sphere_volume / float(np.prod(volume_shape))

    return stats


def analyze_features(
    features: Sequence[Feature],
    out_summary: str,
    out_hist: Optional[str] = None,
    volume_shape: Optional[Tuple[int, ...]] = None,
    bins: int = 30,
    figure_size: Tuple[float, float] = (10, 6),
    dpi: int = 150
) -> Dict[str, float]:
    """Write the radius summary CSV and, optionally, a radius histogram.
    
    Args:
        features: Detected spheres
        out_summary: Output path for summary CSV
        out_hist: Output path for histogram PNG (skipped if None)
        volume_shape: Shape of the analysed volume
        bins: Maximum number of histogram bins
        figure_size: Matplotlib figure size in inches
        dpi: Figure resolution
    
    Returns:
        Dict: Summary statistics
    """
    stats = summarize_features(features, volume_shape)
    _save_summary_csv(stats, out_summary)

    if out_hist is not None:
        if stats['total_spheres'] == 0:
            logger.warning("No spheres to plot")
            _save_empty_histogram(out_hist, figure_size, dpi)
        else:
            radii = np.array([f.radius for f in features], dtype=float)
            _create_histogram(radii, stats, out_hist, bins, figure_size, dpi)

    logger.info("Radius statistics - spheres: %d, mean: %.2f, median: %.2f, max: %.2f",
                stats['total_spheres'], stats['mean_radius'],
                stats['median_radius'], stats['max_radius'])
    return stats


def _get_empty_stats() -> Dict[str, float]:
    """Get empty statistics dictionary."""
    return {
        'total_spheres': 0,
        'mean_radius': 0.0,
        'median_radius': 0.0,
        'std_radius': 0.0,
        'min_radius': 0.0,
        'max_radius': 0.0,
        'q25_radius': 0.0,
        'q75_radius': 0.0,
        'total_sphere_volume': 0.0,
        'volume_fraction': 0.0,
    }


def _save_summary_csv(stats: Dict[str, float], out_summary: str) -> None:
    Path(out_summary).parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame([stats]).to_csv(out_summary, index=False)
    logger.info("Saved summary to %s", out_summary)


def _create_histogram(
    radii: np.ndarray,
    stats: Dict[str, float],
    out_hist: str,
    bins: int,
    figure_size: Tuple[float, float],
    dpi: int
) -> None:
    """Create and save radius distribution histogram."""
    Path(out_hist).parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=figure_size)
    n_bins = max(1, min(bins, len(np.unique(radii)) * 2))
    ax.hist(radii, bins=n_bins, alpha=0.7, edgecolor='black', color='skyblue')

    ax.axvline(stats['mean_radius'], color='red', linestyle='--',
               label=f"Mean: {stats['mean_radius']:.2f}")
    ax.axvline(stats['median_radius'], color='orange', linestyle='--',
               label=f"Median: {stats['median_radius']:.2f}")

    ax.set_xlabel('Radius (voxels)')
    ax.set_ylabel('Number of Spheres')
    ax.set_title(f'Radius Distribution (n={stats["total_spheres"]} spheres)')
    ax.legend()
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(out_hist, dpi=dpi, bbox_inches='tight')
    plt.close(fig)

    logger.info("Saved histogram to %s", out_hist)


def _save_empty_histogram(out_hist: str, figure_size: Tuple[float, float], dpi: int) -> None:
    Path(out_hist).parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=figure_size)
    ax.text(0.5, 0.5, "No spheres detected", ha='center', va='center',
            transform=ax.transAxes, fontsize=16)
    ax.set_title('Radius Distribution - No Data')
    ax.axis('off')
    fig.savefig(out_hist, dpi=dpi, bbox_inches='tight')
    plt.close(fig)


__all__ = ["summarize_features", "analyze_features"]
