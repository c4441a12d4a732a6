"""
Base class for probability distributions.

This module provides an abstract base class that defines the interface every
distribution variant implements. A single instance holds one
parameterisation; :class:`~vecdist.base.vector.DistributionVector` fans
the same calls out over a collection of instances.

The API includes:

- **Density functions**: :meth:`density`, :meth:`log_density`
- **Cumulative distribution**: :meth:`cdf`
- **Quantile function**: :meth:`quantile`
- **Random sampling**: :meth:`generate`
- **Moments**: :meth:`mean`, :meth:`covariance`, :meth:`variance`
- **Shape and display**: :meth:`dimension`, :meth:`format`

All methods accept ``na_rm`` so that every variant can be called with the
same signature; variants without missing-value handling ignore it.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union
import numpy as np
from numpy.typing import ArrayLike, NDArray


class Distribution(ABC):
    """
    Abstract base class for probability distributions.

    Subclasses must implement :meth:`format`, :meth:`density`,
    :meth:`generate`, :meth:`mean` and :meth:`dimension`. The remaining
    methods have defaults that either derive from those or raise
    ``NotImplementedError``.
    """

    def __init__(self, dimension_names: Optional[Sequence[str]] = None):
        self._dimension_names = None
        if dimension_names is not None:
            self.dimension_names = dimension_names

    # ============================================================
    # Labels
    # ============================================================

    @property
    def dimension_names(self) -> Optional[tuple]:
        """Labels of the dimensions, used for display only."""
        return self._dimension_names

    @dimension_names.setter
    def dimension_names(self, names: Optional[Sequence[str]]) -> None:
        if names is None:
            self._dimension_names = None
            return
        names = tuple(str(n) for n in names)
        if len(names) != self.dimension():
            raise ValueError(
                f"Expected {self.dimension()} dimension names, got {len(names)}"
            )
        self._dimension_names = names

    # ============================================================
    # Interface
    # ============================================================

    @abstractmethod
    def format(self, digits: int = 2, **kwargs) -> str:
        """
        Short human-readable label.

        Parameters
        ----------
        digits : int, optional
            Significant digits for variants that print parameter values.

        Returns
        -------
        label : str
        """
        pass

    @abstractmethod
    def density(self, at: ArrayLike, log: bool = False, *,
                na_rm: bool = False, **kwargs) -> Union[float, NDArray]:
        """
        Probability density function.

        Parameters
        ----------
        at : array_like or list
            Points at which to evaluate the density.
        log : bool, optional
            Return the natural-log density instead.

        Returns
        -------
        density : float or ndarray
        """
        pass

    def log_density(self, at: ArrayLike, *, na_rm: bool = False,
                    **kwargs) -> Union[float, NDArray]:
        """
        Log of the probability density function.

        Default implementation: ``density(at, log=True)``.
        """
        return self.density(at, log=True, na_rm=na_rm, **kwargs)

    def cdf(self, q: ArrayLike, *, na_rm: bool = False,
            **kwargs) -> Union[float, NDArray]:
        """
        Cumulative distribution function.

        Parameters
        ----------
        q : array_like or list
            Upper bound(s) at which to evaluate the CDF.

        Returns
        -------
        cdf : float or ndarray
        """
        raise NotImplementedError("CDF not implemented for this distribution")

    def quantile(self, p: ArrayLike, *, na_rm: bool = False,
                 **kwargs) -> NDArray[np.floating]:
        """
        Quantile function (inverse of CDF).

        Parameters
        ----------
        p : array_like
            Probabilities at which to evaluate the quantile.

        Returns
        -------
        quantile : ndarray
        """
        raise NotImplementedError("Quantile not implemented for this distribution")

    @abstractmethod
    def generate(self, times: int, *, na_rm: bool = False,
                 **kwargs) -> NDArray:
        """
        Random generation.

        Parameters
        ----------
        times : int
            Number of draws.

        Returns
        -------
        draws : ndarray
        """
        pass

    @abstractmethod
    def mean(self, **kwargs) -> NDArray[np.floating]:
        """Mean of the distribution."""
        pass

    def covariance(self, **kwargs) -> NDArray[np.floating]:
        """Covariance of the distribution."""
        raise NotImplementedError("Covariance not implemented for this distribution")

    def variance(self, **kwargs) -> NDArray[np.floating]:
        """Variance of the distribution."""
        raise NotImplementedError("Variance not implemented for this distribution")

    @abstractmethod
    def dimension(self) -> int:
        """Dimensionality of the parameter space."""
        pass

    def __repr__(self) -> str:
        """String representation of the distribution."""
        return f"<{self.format()}>"

    def __str__(self) -> str:
        return self.format()
