"""Distribution variants."""

from .multivariate import MVN, MultivariateNormal, dist_multivariate_normal

__all__ = [
    "MVN",
    "MultivariateNormal",
    "dist_multivariate_normal",
]
