"""Calendar arithmetic, numbered binary file units, environment, argument and CPU-binding helpers."""

__version__ = "0.1.0"