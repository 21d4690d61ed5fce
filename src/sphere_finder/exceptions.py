"""Exception types raised by the sphere detection pipeline."""


class SphereFinderError(Exception):
    """Base class for all sphere_finder errors."""


class ConfigurationError(SphereFinderError, ValueError):
    """Raised when detection parameters are invalid for the given volume.

    Validation runs once at the entry point, before any grid is allocated,
    so a configuration error never leaves partial results behind.
    """


class InsufficientPaddingError(SphereFinderError, IndexError):
    """Raised when a carving or search window would leave the padded volume."""


__all__ = ["SphereFinderError", "ConfigurationError", "InsufficientPaddingError"]
