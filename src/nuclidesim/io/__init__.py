"""NuclideSim I/O helpers for JSON/YAML artifacts."""

from nuclidesim.io.artifacts import read_artifact, write_artifact

__all__ = ['read_artifact', 'write_artifact']
