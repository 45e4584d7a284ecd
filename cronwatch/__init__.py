"""Watch scheduled jobs for missed runs and raise alerts."""

__version__ = "0.1.0"