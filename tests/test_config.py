import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from sphere_finder.config import (
    DetectionConfig, PipelineConfig, OutputConfig,
    DOCUMENTED_PADSIZE, CODED_PADSIZE, TIE_CLUSTER_FRACTION
)
from sphere_finder.detection import run_detection
from sphere_finder.exceptions import ConfigurationError


def test_defaults():
    config = DetectionConfig()
    assert config.minr == 5
    assert config.threshold == 120
    assert config.padsize == CODED_PADSIZE == 100
    assert DOCUMENTED_PADSIZE == 50
    assert config.cluster_fraction == TIE_CLUSTER_FRACTION == 0.5
    assert config.distance_metric == "euclidean"
    config.validate()


@pytest.mark.parametrize("kwargs", [
    {"minr": 0},
    {"minr": -2},
    {"minr": float("nan")},
    {"padsize": 3},
    {"padsize": 0},
    {"padsize": 10.5},
    {"padsize": True},
    {"threshold": float("inf")},
    {"threshold": "120"},
    {"distance_metric": "cosine"},
    {"cluster_fraction": 0},
    {"cluster_fraction": 1.5},
])
def test_invalid_parameters(kwargs):
    with pytest.raises(ConfigurationError):
        DetectionConfig(**kwargs).validate()


def test_threshold_outside_dtype_range():
    volume = np.zeros((5, 5, 5), dtype=np.uint8)
    with pytest.raises(ConfigurationError):
        DetectionConfig(threshold=300).validate(volume)
    with pytest.raises(ConfigurationError):
        DetectionConfig(threshold=-1).validate(volume)
    # Float volumes accept any finite threshold
    DetectionConfig(threshold=300).validate(volume.astype(np.float32))


@pytest.mark.parametrize("volume", [
    np.zeros((5, 5), dtype=np.uint8),
    np.zeros((0, 5, 5), dtype=np.uint8),
    np.array([[["a"]]]),
])
def test_invalid_volume(volume):
    with pytest.raises(ConfigurationError):
        DetectionConfig(padsize=10).validate(volume)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        run_detection(np.zeros((5, 5, 5), dtype=np.uint8), DetectionConfig(minr=-1))


def test_yaml_round_trip(tmp_path):
    config = PipelineConfig(
        detection=DetectionConfig(minr=3.5, padsize=40, threshold=128, distance_metric="taxicab"),
        output=OutputConfig(save_histogram=False, histogram_bins=12, figure_size=(8, 4)),
        verbose=True,
    )
    path = tmp_path / "nested" / "config.yaml"
    config.save_to_file(str(path))

    loaded = PipelineConfig.load_from_file(str(path))
    assert loaded.detection == config.detection
    assert loaded.output == config.output
    assert loaded.verbose is True


def test_partial_yaml_keeps_defaults(tmp_path):
    path = tmp_path / "partial.yaml"
    path.write_text("detection:\n  threshold: 90\n", encoding="utf-8")

    loaded = PipelineConfig.load_from_file(str(path))
    assert loaded.detection.threshold == 90
    assert loaded.detection.padsize == CODED_PADSIZE
    assert loaded.output == OutputConfig()


def test_invalid_yaml_values(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("detection:\n  minr: -3\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        PipelineConfig.load_from_file(str(path))


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PipelineConfig.load_from_file(str(tmp_path / "missing.yaml"))


def test_unparseable_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("detection: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        PipelineConfig.load_from_file(str(path))
