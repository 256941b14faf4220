"""Two-player terminal chess with a mirrored board view."""

__version__ = "0.1.0"