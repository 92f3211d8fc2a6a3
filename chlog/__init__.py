"""chlog - YAML-first changelog management."""

__version__ = "0.4.0"
