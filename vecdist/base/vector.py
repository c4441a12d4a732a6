"""
Vectorised collections of distributions.

A :class:`DistributionVector` holds several distribution instances and
answers each query for every element, in order. Scalar-per-element results
(density, cdf, dimension) are collected into an ndarray; matrix-per-element
results (quantile, generate, mean, covariance, variance) into a list, so each
element keeps its own shape.
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray

from vecdist.utils import is_observation_list, recycle
from .distribution import Distribution


class DistributionVector:
    """
    Ordered collection of distributions queried element-wise.

    Parameters
    ----------
    distributions : iterable of Distribution
        Elements of the vector.

    Examples
    --------
    >>> from vecdist import dist_multivariate_normal
    >>> dist = dist_multivariate_normal(mu=[[0, 0], [1, 1]], sigma=[np.eye(2)])
    >>> dist.format()
    ['MVN[2]', 'MVN[2]']
    >>> dist.density([[0, 0], [1, 1]])
    array([0.15915494, 0.15915494])
    """

    def __init__(self, distributions: Iterable[Distribution]):
        self._distributions = list(distributions)
        for dist in self._distributions:
            if not isinstance(dist, Distribution):
                raise TypeError(
                    f"Expected Distribution elements, got {type(dist).__name__}"
                )

    def __len__(self) -> int:
        return len(self._distributions)

    def __iter__(self) -> Iterator[Distribution]:
        return iter(self._distributions)

    def __getitem__(self, index) -> Union[Distribution, 'DistributionVector']:
        if isinstance(index, slice):
            return DistributionVector(self._distributions[index])
        return self._distributions[index]

    def __repr__(self) -> str:
        return f"<DistributionVector[{len(self)}]>"

    # ============================================================
    # Fan-out helpers
    # ============================================================

    def _recycle_at(self, at) -> list:
        """One observation argument per element.

        A list of observations is matched to the elements (length 1 is
        recycled); anything else is shared by every element.
        """
        if is_observation_list(at):
            return recycle(at, len(self), "at")
        return [at] * len(self)

    def _apply(self, method: str, at, **kwargs) -> NDArray:
        """Call ``method`` on each element and collect one number per element.

        A vector of one distribution passes ``at`` through unchanged, so
        several points can be evaluated against it at once.
        """
        if len(self) == 1:
            out = getattr(self._distributions[0], method)(at, **kwargs)
            return np.atleast_1d(np.asarray(out, dtype=float))
        return np.array([
            np.asarray(getattr(dist, method)(a, **kwargs), dtype=float).item()
            for dist, a in zip(self._distributions, self._recycle_at(at))
        ])

    # ============================================================
    # Labels
    # ============================================================

    @property
    def dimension_names(self) -> List[Optional[tuple]]:
        return [dist.dimension_names for dist in self._distributions]

    @dimension_names.setter
    def dimension_names(self, names: Optional[Sequence[str]]) -> None:
        if names is not None:
            names = tuple(names)
            for dist in self._distributions:
                if len(names) != dist.dimension():
                    raise ValueError(
                        f"Expected {dist.dimension()} dimension names for "
                        f"{dist.format()}, got {len(names)}"
                    )
        for dist in self._distributions:
            dist.dimension_names = names

    # ============================================================
    # Element-wise operations
    # ============================================================

    def format(self, digits: int = 2, **kwargs) -> List[str]:
        return [dist.format(digits=digits, **kwargs) for dist in self._distributions]

    def density(self, at: ArrayLike, log: bool = False, *,
                na_rm: bool = False, **kwargs) -> NDArray[np.floating]:
        """Density of each element at its observation.

        ``at`` is either shared by all elements (it must then be a single
        point) or a list of one point per element. A vector of one
        distribution evaluates every point in ``at``.
        """
        return self._apply("density", at, log=log, na_rm=na_rm, **kwargs)

    def log_density(self, at: ArrayLike, *, na_rm: bool = False,
                    **kwargs) -> NDArray[np.floating]:
        return self.density(at, log=True, na_rm=na_rm, **kwargs)

    def cdf(self, q: ArrayLike, *, na_rm: bool = False,
            **kwargs) -> NDArray[np.floating]:
        """CDF of each element at its upper bound."""
        return self._apply("cdf", q, na_rm=na_rm, **kwargs)

    def quantile(self, p: ArrayLike, *, na_rm: bool = False,
                 **kwargs) -> List[NDArray[np.floating]]:
        return [dist.quantile(p, na_rm=na_rm, **kwargs) for dist in self._distributions]

    def generate(self, times: int, *, na_rm: bool = False,
                 **kwargs) -> List[NDArray[np.floating]]:
        return [dist.generate(times, na_rm=na_rm, **kwargs) for dist in self._distributions]

    def mean(self, **kwargs) -> List[NDArray[np.floating]]:
        return [dist.mean(**kwargs) for dist in self._distributions]

    def covariance(self, **kwargs) -> List[NDArray[np.floating]]:
        return [dist.covariance(**kwargs) for dist in self._distributions]

    def variance(self, **kwargs) -> List[NDArray[np.floating]]:
        return [dist.variance(**kwargs) for dist in self._distributions]

    def dimension(self) -> NDArray[np.int_]:
        return np.array([dist.dimension() for dist in self._distributions], dtype=int)
