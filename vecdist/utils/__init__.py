"""Utility functions for vecdist package."""

from .broadcast import is_observation_list, map_observations, recycle
from .dependencies import MissingDependencyError, require_package

__all__ = [
    'is_observation_list', 'map_observations', 'recycle',
    'MissingDependencyError', 'require_package',
]
