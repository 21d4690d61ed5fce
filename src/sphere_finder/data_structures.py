"""Data structures for detected spheres.

This module defines the feature record produced by the greedy extractor
and the result container returned by the detection pipeline.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

FEATURE_COLUMNS = ["x", "y", "z", "radius"]


@dataclass(frozen=True)
class Feature:
    """A detected sphere in the index space of the original (unpadded) volume."""
    x: float
    y: float
    z: float
    radius: float

    @property
    def center(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.radius)

    def overlaps(self, other: "Feature", tolerance: float = 0.0) -> bool:
        """True if the two spheres interpenetrate by more than ``tolerance`` voxels."""
        gap = float(np.linalg.norm(self.center - other.center))
        return self.radius + other.radius - gap > tolerance


@dataclass
class DetectionResult:
    """Complete outcome of one detection run.

    ``raw_features`` keeps the extraction order, which is non-increasing in
    radius: a radius is only meaningful relative to that order, since every
    larger sphere was carved out of the distance field first.
    """
    raw_features: List[Feature] = field(default_factory=list)
    features: List[Feature] = field(default_factory=list)
    discarded: List[Feature] = field(default_factory=list)
    volume_shape: Tuple[int, ...] = ()
    config: Optional[object] = None
    processing_time: float = 0.0

    def __len__(self) -> int:
        return len(self.features)

    def as_tuples(self) -> List[Tuple[float, float, float, float]]:
        return [feature.as_tuple() for feature in self.features]

    def to_dataframe(self, raw: bool = False) -> pd.DataFrame:
        """Convert accepted (or, with ``raw=True``, all extracted) features to a DataFrame."""
        return features_to_dataframe(self.raw_features if raw else self.features)


def features_to_dataframe(features: List[Feature]) -> pd.DataFrame:
    return pd.DataFrame([f.as_tuple() for f in features], columns=FEATURE_COLUMNS, dtype=float)


__all__ = ["Feature", "DetectionResult", "FEATURE_COLUMNS", "features_to_dataframe"]
