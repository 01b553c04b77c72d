"""Infrastructure layer implementations."""

from canteiro.infrastructure import storage

__all__ = ["storage"]
