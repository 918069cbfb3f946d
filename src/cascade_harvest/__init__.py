"""cascade_harvest - readiness detection and sequential dependent option harvesting."""

__version__ = "0.1.0"
