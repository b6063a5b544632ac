"""Election registry simulation and multi-process record sorting."""

__version__ = "0.1.0"