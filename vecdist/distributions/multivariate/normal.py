"""
Multivariate Normal distribution.

The multivariate Normal distribution has PDF:

.. math::
    p(x|\\mu,\\Sigma) = (2\\pi)^{-d/2} |\\Sigma|^{-1/2}
    \\exp\\left(-\\frac{1}{2} (x-\\mu)^T \\Sigma^{-1} (x-\\mu)\\right)

for :math:`x \\in \\mathbb{R}^d`, where :math:`\\mu` is the mean vector
and :math:`\\Sigma` is the covariance matrix.

Density, CDF, sampling and the equicoordinate quantile are delegated to
SciPy (``scipy.stats.multivariate_normal`` and ``scipy.optimize.brentq``).
The marginal quantile is closed form.

Two quantile definitions are supported:

- **Marginal**: each coordinate's own normal quantile,
  :math:`q_j(p) = \\mu_j + \\sqrt{\\Sigma_{jj}}\\,\\Phi^{-1}(p)`.
- **Equicoordinate**: the scalar :math:`c` with
  :math:`P(X_1 \\le c, \\dots, X_d \\le c) = p`, repeated across the columns.

The covariance is not validated at construction; SciPy rejects a
non-symmetric or non positive semi-definite matrix when it is used.
"""

import logging
import warnings
from typing import Optional, Sequence, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.special import ndtri

from vecdist.base import Distribution, DistributionVector
from vecdist.params import MultivariateNormalParams
from vecdist.utils import (
    is_observation_list, map_observations, recycle, require_package,
)

logger = logging.getLogger(__name__)

EQUICOORDINATE_XTOL = 1e-6
EQUICOORDINATE_MAXITER = 100
EQUICOORDINATE_WIDEN_STEPS = 10

QUANTILE_TYPES = ("marginal", "equicoordinate")


class MultivariateNormal(Distribution):
    """
    Multivariate Normal distribution.

    Parameters
    ----------
    mu : array_like, optional
        Mean vector, shape ``(d,)``. A scalar is a 1-dimensional mean.
        Default ``0``.
    sigma : array_like, optional
        Covariance matrix, shape ``(d, d)``. A scalar is a ``1 x 1``
        variance. Default ``I_1``. If ``sigma`` carries column labels
        (e.g. a ``pandas.DataFrame``) they become :attr:`dimension_names`.
    dimension_names : sequence of str, optional
        Overrides labels taken from ``sigma``.

    Examples
    --------
    >>> dist = MultivariateNormal(mu=[1, 2], sigma=[[4, 2], [2, 3]])
    >>> dist.format()
    'MVN[2]'
    >>> dist.mean()
    array([[1., 2.]])
    >>> dist.quantile(0.5)
    array([[1., 2.]])
    """

    def __init__(self, mu: ArrayLike = 0.0, sigma: ArrayLike = None,
                 dimension_names: Optional[Sequence[str]] = None):
        if sigma is None:
            sigma = np.eye(1)
        labels = getattr(sigma, "columns", None)

        mu = np.atleast_1d(np.asarray(mu, dtype=float)).flatten()
        sigma = np.asarray(sigma, dtype=float)
        # Handle scalar input for 1D case
        if sigma.ndim == 0:
            sigma = sigma.reshape(1, 1)
        elif sigma.ndim == 1:
            sigma = np.diag(sigma)

        self._params = MultivariateNormalParams(mu=mu, sigma=sigma)
        super().__init__(
            dimension_names if dimension_names is not None
            else (None if labels is None else list(labels))
        )

    @property
    def params(self) -> MultivariateNormalParams:
        """Mean and covariance of the distribution."""
        return self._params

    # ============================================================
    # Display and shape
    # ============================================================

    def format(self, digits: int = 2, **kwargs) -> str:
        """Label with the dimensionality only, e.g. ``MVN[2]``."""
        return f"MVN[{self.dimension()}]"

    def dimension(self) -> int:
        """Length of the mean vector."""
        return self._params.d

    # ============================================================
    # Density and CDF
    # ============================================================

    def density(self, at: ArrayLike, log: bool = False, *,
                na_rm: bool = False, **kwargs) -> Union[float, NDArray[np.floating]]:
        """
        Probability density, or log density when ``log=True``.

        Parameters
        ----------
        at : array_like or list
            Shape ``(d,)`` for one point, ``(n, d)`` for n points. A list
            of points is evaluated element by element, in order.
        log : bool, optional
            Evaluate ``logpdf`` directly rather than taking the log of
            the density.

        Returns
        -------
        density : float or ndarray
        """
        stats = require_package("scipy.stats")
        if is_observation_list(at):
            return map_observations(
                lambda a: self.density(a, log=log, **kwargs), at
            )

        mu, sigma = self._params.mu, self._params.sigma
        fn = stats.multivariate_normal.logpdf if log else stats.multivariate_normal.pdf
        return fn(np.asarray(at, dtype=float), mean=mu, cov=sigma, **kwargs)

    def log_density(self, at: ArrayLike, *, na_rm: bool = False,
                    **kwargs) -> Union[float, NDArray[np.floating]]:
        """Log probability density."""
        return self.density(at, log=True, **kwargs)

    def cdf(self, q: ArrayLike, *, na_rm: bool = False, **kwargs) -> Union[float, NDArray]:
        """
        Joint CDF :math:`P(X \\le q)` at the upper corner ``q``.

        Parameters
        ----------
        q : array_like or list
            Upper bound vector of length ``d``. A list of bounds is
            evaluated element by element, in order.
        **kwargs
            Passed to ``scipy.stats.multivariate_normal.cdf``
            (e.g. ``maxpts``, ``abseps``, ``lower_limit``).

        Returns
        -------
        cdf : float or ndarray
        """
        stats = require_package("scipy.stats")
        if is_observation_list(q):
            return map_observations(lambda a: self.cdf(a, **kwargs), q)

        upper = np.asarray(q, dtype=float).flatten()
        d = self.dimension()
        # scipy reads a longer 1D bound as several points when d == 1
        if len(upper) != d:
            raise ValueError(f"Expected {d}-dimensional input, got {len(upper)}")
        out = stats.multivariate_normal.cdf(
            upper, mean=self._params.mu, cov=self._params.sigma, **kwargs
        )
        return float(np.ravel(out)[0])

    # ============================================================
    # Quantiles
    # ============================================================

    def quantile(self, p: ArrayLike, type: str = "marginal", *,
                 na_rm: bool = False, **kwargs) -> NDArray[np.floating]:
        """
        Quantiles, one row per probability and one column per dimension.

        Parameters
        ----------
        p : array_like
            Probabilities.
        type : {'marginal', 'equicoordinate'}
            ``'marginal'`` computes each dimension's normal quantile from its
            own mean and variance. ``'equicoordinate'`` solves for the scalar
            ``c`` with ``P(X_1 <= c, ..., X_d <= c) = p`` and repeats it across
            the columns.
        **kwargs
            For ``'equicoordinate'``: ``xtol`` and ``maxiter`` for
            ``brentq``; anything else goes to the CDF.

        Returns
        -------
        q : ndarray, shape ``(len(p), d)``
        """
        if type not in QUANTILE_TYPES:
            raise ValueError(
                f"type must be one of {QUANTILE_TYPES}, got {type!r}"
            )
        p = np.atleast_1d(np.asarray(p, dtype=float)).flatten()
        d = self.dimension()

        if type == "marginal":
            sd = np.sqrt(np.diag(self._params.sigma))
            return self._params.mu[np.newaxis, :] + np.outer(ndtri(p), sd)

        optimize = require_package("scipy.optimize")
        q = np.array([self._equicoordinate(pi, optimize, **kwargs) for pi in p])
        return np.repeat(q[:, np.newaxis], d, axis=1)

    def _equicoordinate(self, p: float, optimize, xtol: float = EQUICOORDINATE_XTOL,
                        maxiter: int = EQUICOORDINATE_MAXITER, **kwargs) -> float:
        """Solve ``cdf(c * ones(d)) = p`` for ``c``."""
        if p == 0:
            return -np.inf
        if p == 1:
            return np.inf
        if not 0 < p < 1:
            return np.nan

        d = self.dimension()
        mu = self._params.mu
        sd = np.sqrt(np.diag(self._params.sigma))

        def excess(c):
            return self.cdf(np.full(d, c), **kwargs) - p

        # The joint CDF at c is at most any marginal CDF at c, and at least
        # 1 - sum_j (1 - F_j(c)) by Bonferroni.
        lower = float(np.min(mu + sd * ndtri(p)))
        upper = float(np.max(mu + sd * ndtri(1 - (1 - p) / d)))
        step = 0.1 * float(np.max(sd))
        lower -= step
        upper += step

        f_lower, f_upper = excess(lower), excess(upper)
        widened = 0
        while f_lower > 0 or f_upper < 0:
            if widened == EQUICOORDINATE_WIDEN_STEPS:
                raise RuntimeError(
                    f"Could not bracket the equicoordinate quantile for p={p}"
                )
            if f_lower > 0:
                lower -= step
                f_lower = excess(lower)
            if f_upper < 0:
                upper += step
                f_upper = excess(upper)
            step *= 2
            widened += 1
        if widened:
            warnings.warn(
                f"Equicoordinate bracket widened {widened} times for p={p}; "
                "the CDF estimate may be noisy",
                RuntimeWarning,
            )

        logger.debug("Equicoordinate bracket for p=%g: [%g, %g]", p, lower, upper)
        c = optimize.brentq(excess, lower, upper, xtol=xtol, maxiter=maxiter)
        logger.debug("Equicoordinate quantile for p=%g: %g", p, c)
        return float(c)

    # ============================================================
    # Sampling
    # ============================================================

    def generate(self, times: int, *, na_rm: bool = False,
                 random_state=None, **kwargs) -> NDArray[np.floating]:
        """
        Draw ``times`` samples.

        Parameters
        ----------
        times : int
            Number of samples.
        random_state : int or Generator, optional
            Random number generator. Defaults to numpy's global state.

        Returns
        -------
        samples : ndarray, shape ``(times, d)``
        """
        stats = require_package("scipy.stats")
        d = self.dimension()
        draws = stats.multivariate_normal.rvs(
            mean=self._params.mu, cov=self._params.sigma, size=times,
            random_state=random_state, **kwargs
        )
        return np.reshape(draws, (times, d))

    # ============================================================
    # Moments
    # ============================================================

    def mean(self, **kwargs) -> NDArray[np.floating]:
        """Mean as a single row, shape ``(1, d)``."""
        return self._params.mu.copy().reshape(1, -1)

    def covariance(self, **kwargs) -> NDArray[np.floating]:
        """Covariance matrix, shape ``(d, d)``."""
        return self._params.sigma.copy()

    def variance(self, **kwargs) -> NDArray[np.floating]:
        """Diagonal of the covariance as a single row, shape ``(1, d)``."""
        return np.diag(self._params.sigma).copy().reshape(1, -1)


# Alias for convenience
MVN = MultivariateNormal


def _split_means(mu) -> list:
    if is_observation_list(mu):
        return list(mu)
    mu = np.asarray(mu, dtype=float)
    if mu.ndim == 2:
        return list(mu)
    return [mu]


def _split_covariances(sigma) -> list:
    if isinstance(sigma, (list, tuple)) and len(sigma) > 0 and all(
        np.ndim(s) == 2 for s in sigma
    ):
        return list(sigma)
    if hasattr(sigma, "columns"):
        return [sigma]
    sigma = np.asarray(sigma, dtype=float)
    if sigma.ndim == 3:
        return list(sigma)
    return [sigma]


def dist_multivariate_normal(mu: ArrayLike = 0.0, sigma: ArrayLike = None,
                             dimension_names: Optional[Sequence[str]] = None):
    """
    Create a vector of multivariate normal distributions.

    Parameters
    ----------
    mu : array_like or list
        A single mean vector, or a list (or 2-D array, one row each) of
        mean vectors.
    sigma : array_like or list, optional
        A single covariance matrix, or a list (or 3-D array) of matrices.
        Default ``I_1``.
    dimension_names : sequence of str, optional
        Labels applied to every element. By default each element takes the
        column labels of its ``sigma``, if it has any.

    Returns
    -------
    dist : DistributionVector
        One :class:`MultivariateNormal` per (mean, covariance) pair. A
        length-1 list of either parameter is recycled to the other's length.

    Raises
    ------
    ValueError
        If the parameter lists have incompatible lengths.

    Examples
    --------
    >>> dist = dist_multivariate_normal(mu=[[1, 2]], sigma=[[[4, 2], [2, 3]]])
    >>> dist.format()
    ['MVN[2]']
    """
    if sigma is None:
        sigma = np.eye(1)
    means = _split_means(mu)
    covs = _split_covariances(sigma)
    n = max(len(means), len(covs))
    means = recycle(means, n, "mu")
    covs = recycle(covs, n, "sigma")
    return DistributionVector(
        MultivariateNormal(m, s, dimension_names=dimension_names)
        for m, s in zip(means, covs)
    )
