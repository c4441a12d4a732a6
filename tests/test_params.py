"""
Tests for frozen dataclass parameter containers.

Tests that the parameter dataclass:
- Can be constructed with valid values
- Is frozen (raises FrozenInstanceError on attribute assignment)
- Supports dataclasses.asdict()
"""

import dataclasses
import pytest
import numpy as np

from vecdist.params import MultivariateNormalParams


class TestMultivariateNormalParams:
    def test_construction(self):
        mu = np.array([1.0, 2.0])
        sigma = np.array([[4.0, 2.0], [2.0, 3.0]])
        p = MultivariateNormalParams(mu=mu, sigma=sigma)
        np.testing.assert_array_equal(p.mu, mu)
        np.testing.assert_array_equal(p.sigma, sigma)
        assert p.d == 2

    def test_frozen_mu(self):
        p = MultivariateNormalParams(mu=np.array([1.0, 2.0]), sigma=np.eye(2))
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.mu = np.array([3.0, 4.0])

    def test_frozen_sigma(self):
        p = MultivariateNormalParams(mu=np.array([1.0, 2.0]), sigma=np.eye(2))
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.sigma = np.eye(2) * 2

    def test_slots(self):
        p = MultivariateNormalParams(mu=np.zeros(1), sigma=np.eye(1))
        assert not hasattr(p, "__dict__")

    def test_asdict(self):
        p = MultivariateNormalParams(mu=np.array([1.0]), sigma=np.array([[2.0]]))
        d = dataclasses.asdict(p)
        assert set(d.keys()) == {"mu", "sigma"}

    def test_dimension(self):
        p = MultivariateNormalParams(mu=np.zeros(3), sigma=np.eye(3))
        assert p.d == 3
