import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from sphere_finder.detection import pad_volume, build_distance_field, bin_sphere
from sphere_finder.detection.extraction import resolve_centroid, carve_sphere, extract_features
from sphere_finder.exceptions import InsufficientPaddingError
from sphere_finder.synthetic import make_sphere_volume


SPHERES = [(15, 15, 15, 9), (42, 18, 40, 7), (20, 44, 30, 6)]


@pytest.fixture
def three_sphere_field():
    volume = make_sphere_volume((60, 60, 60), SPHERES)
    padded = pad_volume(volume, 12)
    return build_distance_field(padded, threshold=128)


def test_resolve_centroid_single_peak():
    region = np.zeros((10, 10, 10))
    region[1, 2, 3] = 4.0
    centroid = resolve_centroid(region, (1, 2, 3), 4.0)
    assert np.array_equal(centroid, [1.0, 2.0, 3.0])


def test_resolve_centroid_clusters_nearby_ties_only():
    # Flat-topped peak of three voxels plus an unrelated voxel with the same value
    region = np.zeros((20, 20, 20))
    region[5, 5, 5:8] = 7.0
    region[15, 15, 15] = 7.0

    centroid = resolve_centroid(region, (5, 5, 5), 7.0)
    assert np.allclose(centroid, [5.0, 5.0, 6.0])


def test_resolve_centroid_cluster_fraction():
    region = np.zeros((20, 20, 20))
    region[5, 5, 5:8] = 4.0
    # 4 * 0.25 = 1 voxel: only the seed and its direct neighbour are averaged
    centroid = resolve_centroid(region, (5, 5, 5), 4.0, cluster_fraction=0.25)
    assert np.allclose(centroid, [5.0, 5.0, 5.5])


def test_carve_sphere_zeroes_ball_only():
    field = np.ones((21, 21, 21))
    carve_sphere(field, (10, 10, 10), 3)

    assert field[10, 10, 10] == 0
    assert field[10, 10, 13] == 0
    assert field[10, 10, 14] == 1
    assert field[0, 0, 0] == 1
    assert (field == 0).sum() == bin_sphere(7).sum()


def test_carve_sphere_out_of_bounds():
    field = np.ones((21, 21, 21))
    with pytest.raises(InsufficientPaddingError):
        carve_sphere(field, (1, 10, 10), 3)


def test_extraction_order_is_non_increasing(three_sphere_field):
    features = extract_features(three_sphere_field, padsize=12, minr=4)

    assert len(features) >= 3
    radii = [f.radius for f in features]
    assert radii == sorted(radii, reverse=True)
    assert all(r >= 4 for r in radii)
    # Largest sphere first
    assert np.allclose(features[0].center, [15, 15, 15], atol=1)


def test_extracted_centroids_lie_inside_volume(three_sphere_field):
    for feature in extract_features(three_sphere_field, padsize=12, minr=3):
        assert 0 <= feature.x < 60
        assert 0 <= feature.y < 60
        assert 0 <= feature.z < 60


def test_extraction_carves_field(three_sphere_field):
    extract_features(three_sphere_field, padsize=12, minr=4)
    inner = three_sphere_field[12:-12, 12:-12, 12:-12]
    assert inner.max() < 4


def test_tied_maxima_use_smallest_index_first():
    field = np.zeros((36, 36, 36))
    region = field[8:-8, 8:-8, 8:-8]
    region[5, 5, 5:8] = 7.0
    region[15, 15, 15] = 7.0

    features = extract_features(field, padsize=8, minr=3)

    assert len(features) == 2
    assert features[0].as_tuple() == (5.0, 5.0, 6.0, 7.0)
    assert features[1].as_tuple() == (15.0, 15.0, 15.0, 7.0)


def test_insufficient_padding_detected_before_mutation():
    volume = make_sphere_volume((40, 40, 40), [(20, 20, 20, 9)])
    field = build_distance_field(pad_volume(volume, 5), threshold=128)
    before = field.copy()

    with pytest.raises(InsufficientPaddingError):
        extract_features(field, padsize=5, minr=5)
    assert np.array_equal(field, before)


def test_nothing_above_minr():
    volume = make_sphere_volume((30, 30, 30), [(15, 15, 15, 3)])
    field = build_distance_field(pad_volume(volume, 5), threshold=128)
    assert extract_features(field, padsize=5, minr=5) == []
