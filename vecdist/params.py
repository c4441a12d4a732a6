"""
Frozen dataclass parameter containers for distributions.

Each distribution's parameters are represented as a frozen dataclass
with ``slots=True``. This provides:

- **Attribute access**: ``params.mu``, ``params.sigma``
- **Immutability**: Prevents accidental reassignment after construction
- **Dict conversion**: ``dataclasses.asdict(params)`` when needed

Examples
--------
>>> import numpy as np
>>> from vecdist.params import MultivariateNormalParams
>>> p = MultivariateNormalParams(mu=np.zeros(2), sigma=np.eye(2))
>>> p.d
2
>>> p.mu = np.ones(2)  # Raises FrozenInstanceError

Notes
-----
``frozen=True`` prevents attribute reassignment, but numpy arrays
are internally mutable (``params.mu[0] = 999`` still works at the Python level).
Distributions hand out copies, never the stored arrays.
"""

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True, slots=True)
class MultivariateNormalParams:
    """
    Parameters of the Multivariate Normal distribution.

    Attributes
    ----------
    mu : np.ndarray
        Mean vector, shape ``(d,)``.
    sigma : np.ndarray
        Covariance matrix, shape ``(d, d)``.
    """
    mu: np.ndarray
    sigma: np.ndarray

    @property
    def d(self) -> int:
        """Length of the mean vector."""
        return len(self.mu)


__all__ = [
    "MultivariateNormalParams",
]
