"""Command-line interface for sphere detection.

Writes, into a timestamped run directory:
1. features.csv          accepted spheres (x, y, z, radius)
2. features_summary.csv  radius statistics
3. hist_radius.png       radius histogram
4. config.yaml           the configuration actually used
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import PipelineConfig, DISTANCE_METRICS
from .detection import run_detection
from .exceptions import ConfigurationError, InsufficientPaddingError
from .io import load_volume, save_features_csv
from .statistics import analyze_features
from .utils.common import setup_logging, ensure_directory

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Locate and size dark spherical objects in a 3D volume",
        epilog="""
Examples:
  # Detect with default parameters
  sphere-finder data/volume.npy

  # Directory of slices with a custom threshold and padding
  sphere-finder data/slices --threshold 128 --padsize 50

  # Parameters from a YAML file
  sphere-finder data/volume.npy --config config/droplets.yaml
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("input",
                        help="Volume (.npy) or directory of 2D slices")
    parser.add_argument("--output_dir", default="output",
                        help="Base output directory")
    parser.add_argument("--config", type=str,
                        help="Path to YAML configuration file")
    parser.add_argument("--minr", type=float,
                        help="Minimum sphere radius in voxels")
    parser.add_argument("--padsize", type=int,
                        help="Padding in voxels, at least the largest expected radius")
    parser.add_argument("--threshold", type=float,
                        help="Intensity cutoff, voxels below it are sphere interior")
    parser.add_argument("--metric", choices=DISTANCE_METRICS,
                        help="Distance transform metric")
    parser.add_argument("--no_filter", action="store_true",
                        help="Skip the false-maxima filter")
    parser.add_argument("--no_histogram", action="store_true",
                        help="Do not write the radius histogram")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar during filtering")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable verbose logging")
    return parser


def _apply_overrides(config: PipelineConfig, args: argparse.Namespace) -> PipelineConfig:
    detection = config.detection
    if args.minr is not None:
        detection.minr = args.minr
    if args.padsize is not None:
        detection.padsize = args.padsize
    if args.threshold is not None:
        detection.threshold = args.threshold
    if args.metric is not None:
        detection.distance_metric = args.metric
    if args.no_filter:
        detection.remove_false_maxima = False
    if args.progress:
        detection.show_progress = True
    if args.no_histogram:
        config.output.save_histogram = False
    if args.verbose:
        config.verbose = True
    return config


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = PipelineConfig.load_from_file(args.config) if args.config else PipelineConfig()
        config = _apply_overrides(config, args)
        config.detection.validate()
    except (FileNotFoundError, ConfigurationError) as e:
        setup_logging(logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        return 2

    setup_logging(logging.DEBUG if config.verbose else logging.INFO)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = ensure_directory(Path(args.output_dir) / f"run_{timestamp}")
    logger.info(f"Starting detection with output directory: {output_dir}")

    try:
        volume = load_volume(args.input)
        result = run_detection(volume, config.detection)

        config.save_to_file(str(output_dir / "config.yaml"))
        if config.output.save_features:
            save_features_csv(result.features, output_dir / "features.csv")
        stats = None
        if config.output.save_summary:
            hist_path = output_dir / "hist_radius.png" if config.output.save_histogram else None
            stats = analyze_features(
                result.features,
                out_summary=str(output_dir / "features_summary.csv"),
                out_hist=str(hist_path) if hist_path else None,
                volume_shape=result.volume_shape,
                bins=config.output.histogram_bins,
                figure_size=config.output.figure_size,
                dpi=config.output.dpi,
            )
    except (ConfigurationError, InsufficientPaddingError) as e:
        logger.error(f"Detection aborted: {e}")
        return 2
    except Exception as e:
        logger.error(f"Detection failed: {e}")
        return 1

    print(f"\n{'='*60}")
    print("DETECTION COMPLETED")
    print(f"{'='*60}")
    print(f"Output directory: {output_dir}")
    print(f"Spheres: {len(result.features)} ({len(result.discarded)} false maxima removed)")
    if stats and stats['total_spheres']:
        print(f"Mean radius: {stats['mean_radius']:.2f}")
        print(f"Radius range: {stats['min_radius']:.2f}-{stats['max_radius']:.2f}")
    print(f"Processing time: {result.processing_time:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
