"""Cabinet decomposition and hardware-drilling engine."""

__version__ = "0.1.0"
