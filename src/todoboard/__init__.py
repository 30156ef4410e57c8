"""todoboard - terminal task board backed by a remote task service."""

__version__ = "0.1.0"
