"""Base classes for distributions and distribution vectors."""

from .distribution import Distribution
from .vector import DistributionVector

__all__ = [
    "Distribution",
    "DistributionVector",
]
