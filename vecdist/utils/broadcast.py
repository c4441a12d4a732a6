"""Broadcasting helpers shared by the distribution implementations."""

from typing import Any, Callable, Sequence
import numpy as np
from numpy.typing import ArrayLike, NDArray


def is_observation_list(at: Any) -> bool:
    """
    Whether ``at`` is a list of separate observations.

    A ``list`` or ``tuple`` whose elements are not all scalars is read as a
    list of observations, each evaluated on its own. Anything else, including
    a flat list of numbers or an ndarray, is a single row or a matrix of rows.
    An empty list is an empty list of observations.
    """
    if not isinstance(at, (list, tuple)):
        return False
    if len(at) == 0:
        return True
    return not all(np.ndim(a) == 0 for a in at)


def map_observations(
    func: Callable[[ArrayLike], float],
    at: Sequence[ArrayLike],
) -> NDArray[np.floating]:
    """
    Apply ``func`` to each element of ``at`` and collect the results in order.

    Each call must return a single number.

    Parameters
    ----------
    func : callable
        Evaluates one observation.
    at : sequence
        Observations.

    Returns
    -------
    out : ndarray, shape ``(len(at),)``
    """
    out = np.empty(len(at), dtype=float)
    for i, a in enumerate(at):
        out[i] = np.asarray(func(a), dtype=float).item()
    return out


def recycle(values: Sequence[Any], n: int, name: str) -> list:
    """
    Recycle a length-1 sequence to length ``n``.

    Raises
    ------
    ValueError
        If ``values`` has neither length 1 nor length ``n``.
    """
    values = list(values)
    if len(values) == n:
        return values
    if len(values) == 1:
        return values * n
    raise ValueError(
        f"{name} has length {len(values)}, expected 1 or {n}"
    )
