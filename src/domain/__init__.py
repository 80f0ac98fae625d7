"""Domain layer - settings models and profiles."""
from domain.models import ContourSettings
from domain.profiles import load_profile, save_profile

__all__ = [
    'ContourSettings',
    'load_profile',
    'save_profile',
]
