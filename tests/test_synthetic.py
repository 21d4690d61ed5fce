import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from sphere_finder.synthetic import make_sphere_volume
from sphere_finder.detection import bin_sphere


def test_sphere_is_stamped():
    volume = make_sphere_volume((20, 20, 20), [(10, 10, 10, 4)])

    assert volume.dtype == np.uint8
    assert volume[10, 10, 10] == 0
    assert volume[0, 0, 0] == 255
    assert (volume == 0).sum() == bin_sphere(9).sum()


def test_sphere_clipped_at_boundary():
    volume = make_sphere_volume((20, 20, 20), [(0, 10, 10, 4)])
    # Only the half with x >= 0 is visible
    assert (volume == 0).sum() == bin_sphere(9)[4:].sum()


def test_sphere_outside_volume_is_ignored():
    volume = make_sphere_volume((20, 20, 20), [(-10, 10, 10, 4)])
    assert (volume == 255).all()
