"""Road scenario simulation and visualization-geometry engine."""

__version__ = "0.1.0"
