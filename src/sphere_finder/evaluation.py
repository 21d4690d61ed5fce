"""Comparison of detected spheres against known ground truth."""

import logging
from typing import Dict, Optional, Sequence

import numpy as np

from .data_structures import Feature

logger = logging.getLogger(__name__)


def match_features(
    detected: Sequence[Feature],
    truth: Sequence[Feature],
    max_distance: Optional[float] = None
) -> Dict[str, float]:
    """Greedily pair detected spheres with ground-truth spheres.

    Candidate pairs are taken in order of increasing centre distance; each
    sphere is used at most once. A pair only counts if the centres are
    closer than ``max_distance`` (default: half the true radius).
    
    Args:
        detected: Detected spheres
        truth: Ground-truth spheres
        max_distance: Fixed matching tolerance in voxels
    
    Returns:
        Dict with true_positives, false_positives, false_negatives,
        precision, recall, mean_center_error and mean_radius_error
    """
    pairs = []
    for i, d in enumerate(detected):
        for j, t in enumerate(truth):
            dist = float(np.linalg.norm(d.center - t.center))
            limit = max_distance if max_distance is not None else 0.5 * t.radius
            if dist <= limit:
                pairs.append((dist, i, j))
    pairs.sort()

    used_detected, used_truth = set(), set()
    center_errors, radius_errors = [], []
    for dist, i, j in pairs:
        if i in used_detected or j in used_truth:
            continue
        used_detected.add(i)
        used_truth.add(j)
        center_errors.append(dist)
        radius_errors.append(abs(detected[i].radius - truth[j].radius))

    tp = len(center_errors)
    fp = len(detected) - tp
    fn = len(truth) - tp

    metrics = {
        'true_positives': tp,
        'false_positives': fp,
        'false_negatives': fn,
        'precision': tp / len(detected) if len(detected) else 1.0,
        'recall': tp / len(truth) if len(truth) else 1.0,
        'mean_center_error': float(np.mean(center_errors)) if center_errors else 0.0,
        'mean_radius_error': float(np.mean(radius_errors)) if radius_errors else 0.0,
    }
    logger.info(f"Matched {tp}/{len(truth)} spheres (precision={metrics['precision']:.3f}, "
                f"recall={metrics['recall']:.3f})")
    return metrics


__all__ = ["match_features"]
