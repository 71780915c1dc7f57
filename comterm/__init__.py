"""A desktop terminal for serial (COM) ports, with a state model usable on its own."""

__version__ = "0.1.0"

__all__ = ["__version__"]