"""
vecdist: vectorised probability distributions.

Distributions share one interface (density, log_density, cdf, quantile,
generate, mean, covariance, variance, dimension, format) and can be held in a
:class:`DistributionVector` that answers each query element-wise.

Key features:
- Multivariate Normal with marginal and equicoordinate quantiles
- Numerics delegated to SciPy, checked eagerly per call
- Frozen dataclass parameter containers (vecdist.params)
"""

from vecdist.base import Distribution, DistributionVector
from vecdist.distributions import MVN, MultivariateNormal, dist_multivariate_normal
from vecdist.params import MultivariateNormalParams
from vecdist.utils import MissingDependencyError

__version__ = "0.1.0"

__all__ = [
    "Distribution",
    "DistributionVector",
    "MVN",
    "MultivariateNormal",
    "dist_multivariate_normal",
    "MultivariateNormalParams",
    "MissingDependencyError",
]
