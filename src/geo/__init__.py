"""Geo module - coordinate types."""

from .coordinates import Coordinates

__all__ = [
    'Coordinates',
]
