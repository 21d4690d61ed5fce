#!/usr/bin/env python3
"""Test package imports and basic functionality."""

import unittest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


class TestPackageImports(unittest.TestCase):
    """Test that all main package components can be imported."""

    def test_main_package_import(self):
        """Test main package imports without errors."""
        import sphere_finder
        self.assertTrue(hasattr(sphere_finder, '__version__'))
        for name in sphere_finder.__all__:
            self.assertTrue(hasattr(sphere_finder, name), name)

    def test_detection_imports(self):
        """Test detection stage imports."""
        from sphere_finder.detection import (
            pad_volume, build_distance_field, bin_sphere,
            extract_features, remove_false_maxima, run_detection, detect_features
        )
        for func in (pad_volume, build_distance_field, bin_sphere, extract_features,
                     remove_false_maxima, run_detection, detect_features):
            self.assertTrue(callable(func))

    def test_error_hierarchy(self):
        """Test exception classes derive from the package base class."""
        from sphere_finder.exceptions import (
            SphereFinderError, ConfigurationError, InsufficientPaddingError
        )
        self.assertTrue(issubclass(ConfigurationError, SphereFinderError))
        self.assertTrue(issubclass(ConfigurationError, ValueError))
        self.assertTrue(issubclass(InsufficientPaddingError, SphereFinderError))
        self.assertTrue(issubclass(InsufficientPaddingError, IndexError))

    def test_utils_imports(self):
        """Test utility imports."""
        from sphere_finder.utils import (
            setup_logging, Timer, ensure_directory,
            get_image_files, natural_sort_key
        )
        self.assertTrue(callable(setup_logging))
        self.assertTrue(callable(get_image_files))
        self.assertTrue(callable(natural_sort_key))


class TestBasicFunctionality(unittest.TestCase):
    """Test basic functionality of key components."""

    def test_natural_sort_functionality(self):
        """Test natural sorting utility."""
        from sphere_finder.utils import natural_sort_key

        test_paths = [Path(f) for f in ['z1.tif', 'z10.tif', 'z2.tif', 'z20.tif']]
        natural_sorted = [p.name for p in sorted(test_paths, key=natural_sort_key)]

        self.assertEqual(natural_sorted, ['z1.tif', 'z2.tif', 'z10.tif', 'z20.tif'])

    def test_timer_records_elapsed(self):
        """Test Timer context manager."""
        from sphere_finder.utils import Timer

        with Timer("noop") as timer:
            pass
        self.assertGreaterEqual(timer.elapsed, 0.0)

    def test_config_structure(self):
        """Test configuration structure."""
        from sphere_finder.config import DEFAULT_CONFIG

        self.assertTrue(hasattr(DEFAULT_CONFIG, 'detection'))
        self.assertTrue(hasattr(DEFAULT_CONFIG, 'output'))
        self.assertEqual(DEFAULT_CONFIG.detection.minr, 5)
        self.assertIsInstance(DEFAULT_CONFIG.detection.padsize, int)

    def test_feature_record(self):
        """Test Feature helpers."""
        from sphere_finder.data_structures import Feature

        a = Feature(0, 0, 0, 5)
        b = Feature(9, 0, 0, 5)
        self.assertEqual(a.as_tuple(), (0, 0, 0, 5))
        self.assertTrue(a.overlaps(b))
        self.assertFalse(a.overlaps(b, tolerance=1.5))
        self.assertFalse(a.overlaps(Feature(20, 0, 0, 5)))


if __name__ == '__main__':
    unittest.main()
