"""Reading volumes and reading/writing feature tables."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

import cv2
import numpy as np
import pandas as pd

from .data_structures import Feature, FEATURE_COLUMNS, features_to_dataframe
from .utils.file_utils import get_image_files

logger = logging.getLogger(__name__)


def load_volume(path: Union[str, Path]) -> np.ndarray:
    """Load a 3D volume from a ``.npy`` file or a directory of 2D slices.

    Slices are read as grayscale, naturally sorted by filename and stacked
    along axis 0.

    Raises:
        ValueError: If the path is missing, unreadable or not a 3D volume
    """
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Input path does not exist: {path}")

    if path.is_dir():
        volume = _stack_slices(path)
    else:
        volume = np.load(path)

    if volume.ndim != 3:
        raise ValueError(f"Expected 3D volume, got {volume.ndim}D array")

    logger.info(f"Loaded volume: {path} (shape={volume.shape}, dtype={volume.dtype})")
    return volume


def _stack_slices(directory: Path) -> np.ndarray:
    slice_files = get_image_files(directory)
    if not slice_files:
        raise ValueError(f"No image slices found in {directory}")

    first = cv2.imread(str(slice_files[0]), cv2.IMREAD_GRAYSCALE)
    if first is None:
        raise ValueError(f"Failed to read slice: {slice_files[0]}")

    volume = np.empty((len(slice_files),) + first.shape, dtype=first.dtype)
    volume[0] = first
    for i, slice_path in enumerate(slice_files[1:], start=1):
        image = cv2.imread(str(slice_path), cv2.IMREAD_GRAYSCALE)
        if image is None:
            raise ValueError(f"Failed to read slice: {slice_path}")
        if image.shape != first.shape:
            raise ValueError(
                f"Inconsistent dimensions: {slice_path} "
                f"has shape {image.shape}, expected {first.shape}"
            )
        volume[i] = image

    logger.debug(f"Stacked {len(slice_files)} slices from {directory}")
    return volume


def save_features_csv(features: Iterable[Feature], out_csv: Union[str, Path]) -> None:
    """Save features to CSV with columns x, y, z, radius."""
    Path(out_csv).parent.mkdir(parents=True, exist_ok=True)
    df = features_to_dataframe(list(features))
    df.to_csv(out_csv, index=False)
    logger.info("Saved %d features to %s", len(df), out_csv)


def load_features_csv(csv_path: Union[str, Path]) -> List[Feature]:
    """Load features written by :func:`save_features_csv`."""
    df = pd.read_csv(csv_path)
    missing = [c for c in FEATURE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Feature CSV {csv_path} is missing columns: {missing}")
    return [
        Feature(float(row.x), float(row.y), float(row.z), float(row.radius))
        for row in df[FEATURE_COLUMNS].itertuples(index=False)
    ]


__all__ = ["load_volume", "save_features_csv", "load_features_csv"]
