"""Configuration settings for the sphere detection pipeline.

DEFAULTS SUMMARY:
================
minr      = 5     smallest radius (voxels) accepted as a feature; also the
                  fixed window radius of the false-maxima filter
padsize   = 100   isotropic padding added on every side of the volume
threshold = 120   intensities strictly below this are treated as the inside
                  of a (dark) sphere

Two padsize defaults exist for this algorithm. The written documentation
gives 50, while the executable has always used 100. Both are exported below;
the dataclass default follows the executable so that existing results are
reproduced. Either value works as long as padsize is at least the largest
radius expected in the volume.
"""

import math
from dataclasses import dataclass, field, asdict
from typing import Optional, Tuple

import numpy as np

from .exceptions import ConfigurationError

DOCUMENTED_PADSIZE = 50  # Value quoted in the written documentation
CODED_PADSIZE = 100  # Value used by the executable (active default)

DISTANCE_METRICS = ("euclidean", "taxicab", "chessboard")

# Tied maxima closer than this fraction of the peak value to the chosen
# representative are averaged into one centroid. Heuristic, not a proven
# centroid estimator.
TIE_CLUSTER_FRACTION = 0.5


@dataclass
class DetectionConfig:
    """Configuration for greedy sphere extraction."""
    minr: float = 5.0  # Minimum accepted radius (voxels)
    padsize: int = CODED_PADSIZE  # Must be >= largest expected radius
    threshold: float = 120.0  # Intensity cutoff, voxel < threshold is sphere interior
    distance_metric: str = "euclidean"  # Fixed for both passes of one run
    cluster_fraction: float = TIE_CLUSTER_FRACTION
    remove_false_maxima: bool = True  # Run the second-pass filter
    show_progress: bool = False  # tqdm progress bar for the filter pass

    def validate(self, volume: Optional[np.ndarray] = None) -> None:
        """Check parameters (and optionally the volume) before any work starts.

        Raises:
            ConfigurationError: If a parameter or the volume is unusable
        """
        if not _is_finite_number(self.minr) or self.minr <= 0:
            raise ConfigurationError(f"minr must be a positive number, got {self.minr!r}")

        if isinstance(self.padsize, bool) or not isinstance(self.padsize, (int, np.integer)):
            raise ConfigurationError(f"padsize must be an integer, got {self.padsize!r}")
        if self.padsize < 1:
            raise ConfigurationError(f"padsize must be >= 1, got {self.padsize}")
        if self.padsize < self.minr:
            raise ConfigurationError(
                f"padsize ({self.padsize}) must be >= minr ({self.minr})"
            )

        if not _is_finite_number(self.threshold):
            raise ConfigurationError(f"threshold must be a finite number, got {self.threshold!r}")

        if self.distance_metric not in DISTANCE_METRICS:
            raise ConfigurationError(
                f"Unsupported distance metric: {self.distance_metric!r} "
                f"(expected one of {', '.join(DISTANCE_METRICS)})"
            )

        if not _is_finite_number(self.cluster_fraction) or not 0 < self.cluster_fraction <= 1:
            raise ConfigurationError(
                f"cluster_fraction must be in (0, 1], got {self.cluster_fraction!r}"
            )

        if volume is not None:
            self._validate_volume(volume)

    def _validate_volume(self, volume: np.ndarray) -> None:
        if not isinstance(volume, np.ndarray):
            raise ConfigurationError(f"Expected a numpy array, got {type(volume).__name__}")
        if volume.ndim != 3:
            raise ConfigurationError(f"Expected 3D volume, got {volume.ndim}D array")
        if volume.size == 0:
            raise ConfigurationError(f"Volume is empty (shape={volume.shape})")
        if not (np.issubdtype(volume.dtype, np.number) or volume.dtype == bool):
            raise ConfigurationError(f"Volume must be numeric, got dtype {volume.dtype}")

        # The threshold is checked against the dtype's range, not the data range:
        # a uniform volume is a valid (empty) input for any in-range threshold.
        if np.issubdtype(volume.dtype, np.integer):
            info = np.iinfo(volume.dtype)
            if not info.min <= self.threshold <= info.max + 1:
                raise ConfigurationError(
                    f"threshold {self.threshold} is outside the intensity range "
                    f"[{info.min}, {info.max}] of dtype {volume.dtype}"
                )
        elif volume.dtype == bool and not 0 <= self.threshold <= 2:
            raise ConfigurationError(
                f"threshold {self.threshold} is outside the range of a boolean volume"
            )


@dataclass
class OutputConfig:
    """Configuration for result files written by the command-line pipeline."""
    save_features: bool = True  # features.csv
    save_summary: bool = True  # features_summary.csv
    save_histogram: bool = True  # hist_radius.png
    histogram_bins: int = 30
    figure_size: Tuple[float, float] = (10, 6)
    dpi: int = 150


@dataclass
class PipelineConfig:
    """Main pipeline configuration."""
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Global settings
    verbose: bool = False

    @classmethod
    def load_from_file(cls, config_path: str) -> 'PipelineConfig':
        """Load configuration from YAML file.

        Missing sections or keys keep their defaults.
        """
        import yaml
        from pathlib import Path

        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed configuration file {config_path}: {e}") from e

        try:
            config = cls()

            if 'detection' in data:
                dt_data = data['detection'] or {}
                defaults = DetectionConfig()
                config.detection = DetectionConfig(
                    minr=dt_data.get('minr', defaults.minr),
                    padsize=dt_data.get('padsize', defaults.padsize),
                    threshold=dt_data.get('threshold', defaults.threshold),
                    distance_metric=dt_data.get('distance_metric', defaults.distance_metric),
                    cluster_fraction=dt_data.get('cluster_fraction', defaults.cluster_fraction),
                    remove_false_maxima=dt_data.get('remove_false_maxima', defaults.remove_false_maxima),
                    show_progress=dt_data.get('show_progress', defaults.show_progress),
                )

            if 'output' in data:
                out_data = data['output'] or {}
                defaults = OutputConfig()
                config.output = OutputConfig(
                    save_features=out_data.get('save_features', defaults.save_features),
                    save_summary=out_data.get('save_summary', defaults.save_summary),
                    save_histogram=out_data.get('save_histogram', defaults.save_histogram),
                    histogram_bins=out_data.get('histogram_bins', defaults.histogram_bins),
                    figure_size=tuple(out_data.get('figure_size', defaults.figure_size)),
                    dpi=out_data.get('dpi', defaults.dpi),
                )

            if 'global' in data:
                config.verbose = bool((data['global'] or {}).get('verbose', config.verbose))
        except (AttributeError, TypeError) as e:
            raise ConfigurationError(f"Malformed configuration file {config_path}: {e}") from e

        config.detection.validate()
        return config

    def save_to_file(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        import yaml
        from pathlib import Path

        output = asdict(self.output)
        output['figure_size'] = list(output['figure_size'])
        config_dict = {
            'detection': asdict(self.detection),
            'output': output,
            'global': {
                'verbose': self.verbose
            }
        }

        config_file = Path(config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    return math.isfinite(value)


# Default configuration instance
DEFAULT_CONFIG = PipelineConfig()
