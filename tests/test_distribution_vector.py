"""
Tests for DistributionVector and the dist_multivariate_normal factory.

Tests include:
- Bulk construction and recycling of parameter lists
- Element-wise fan-out of every operation, in order
- Dimension names applied across the vector
"""

import numpy as np
import pytest

from vecdist import (
    DistributionVector,
    MultivariateNormal,
    dist_multivariate_normal,
)


@pytest.fixture
def vec():
    return dist_multivariate_normal(
        mu=[[1, 2], [0, 0]],
        sigma=[np.array([[4, 2], [2, 3]]), np.eye(2)],
    )


# ============================================================
# Construction
# ============================================================

class TestFactory:

    def test_default(self):
        dist = dist_multivariate_normal()
        assert len(dist) == 1
        assert dist.format() == ["MVN[1]"]
        np.testing.assert_array_equal(dist[0].mean(), [[0.0]])
        np.testing.assert_array_equal(dist[0].covariance(), [[1.0]])

    def test_single_pair(self):
        dist = dist_multivariate_normal(mu=[1, 2], sigma=[[4, 2], [2, 3]])
        assert len(dist) == 1
        assert dist.format() == ["MVN[2]"]
        np.testing.assert_array_equal(dist[0].covariance(), [[4.0, 2.0], [2.0, 3.0]])

    def test_listed_pair(self):
        dist = dist_multivariate_normal(mu=[[1, 2]], sigma=[[[4, 2], [2, 3]]])
        assert len(dist) == 1
        np.testing.assert_array_equal(dist.mean()[0], [[1.0, 2.0]])

    def test_two_pairs(self, vec):
        assert len(vec) == 2
        np.testing.assert_array_equal(vec.dimension(), [2, 2])
        assert all(isinstance(d, MultivariateNormal) for d in vec)

    def test_recycles_covariance(self):
        dist = dist_multivariate_normal(mu=[[0, 0], [1, 1], [2, 2]], sigma=np.eye(2))
        assert len(dist) == 3
        for d in dist:
            np.testing.assert_array_equal(d.covariance(), np.eye(2))

    def test_recycles_mean(self):
        sigma = np.stack([np.eye(2), 2 * np.eye(2)])
        dist = dist_multivariate_normal(mu=[1, 1], sigma=sigma)
        assert len(dist) == 2
        np.testing.assert_array_equal(dist[1].covariance(), 2 * np.eye(2))
        np.testing.assert_array_equal(dist[1].mean(), [[1.0, 1.0]])

    def test_mixed_dimensions(self):
        dist = dist_multivariate_normal(mu=[[0], [0, 0, 0]], sigma=[np.eye(1), np.eye(3)])
        assert dist.format() == ["MVN[1]", "MVN[3]"]

    def test_incompatible_lengths(self):
        with pytest.raises(ValueError, match="sigma"):
            dist_multivariate_normal(
                mu=[[0, 0], [1, 1], [2, 2]], sigma=[np.eye(2), np.eye(2)]
            )

    def test_dimension_names_argument(self):
        dist = dist_multivariate_normal(mu=[1, 2], sigma=np.eye(2), dimension_names=["x", "y"])
        assert dist.dimension_names == [("x", "y")]

    def test_dimension_names_from_columns(self):
        pd = pytest.importorskip("pandas")
        sigma = pd.DataFrame(np.eye(2), columns=["a", "b"], index=["a", "b"])
        dist = dist_multivariate_normal(mu=[0, 0], sigma=sigma)
        assert dist.dimension_names == [("a", "b")]

    def test_rejects_non_distributions(self):
        with pytest.raises(TypeError):
            DistributionVector([1, 2])


class TestContainer:

    def test_indexing(self, vec):
        assert isinstance(vec[0], MultivariateNormal)
        sub = vec[1:]
        assert isinstance(sub, DistributionVector)
        assert len(sub) == 1

    def test_repr(self, vec):
        assert repr(vec) == "<DistributionVector[2]>"

    def test_set_dimension_names(self, vec):
        vec.dimension_names = ["x", "y"]
        assert vec.dimension_names == [("x", "y"), ("x", "y")]

    def test_dimension_names_all_or_nothing(self):
        vec = dist_multivariate_normal(mu=[[0, 0], [0, 0, 0]], sigma=[np.eye(2), np.eye(3)])
        with pytest.raises(ValueError):
            vec.dimension_names = ["x", "y"]
        assert vec.dimension_names == [None, None]

    def test_clear_dimension_names(self, vec):
        vec.dimension_names = ["x", "y"]
        vec.dimension_names = None
        assert vec.dimension_names == [None, None]


# ============================================================
# Element-wise operations
# ============================================================

class TestFanOut:

    def test_density_shared_point(self, vec):
        out = vec.density([1, 2])
        assert out.shape == (2,)
        assert out[0] == vec[0].density([1, 2])
        assert out[1] == vec[1].density([1, 2])

    def test_density_point_per_element(self, vec):
        out = vec.density([[1, 2], [0, 0]])
        np.testing.assert_allclose(out, [vec[0].density([1, 2]), vec[1].density([0, 0])])
        assert out[1] == pytest.approx(1 / (2 * np.pi))

    def test_single_element_evaluates_every_point(self):
        dist = dist_multivariate_normal(mu=[1, 2], sigma=[[4, 2], [2, 3]])
        points = [[2, 1], [0, 0], [1, 2]]
        np.testing.assert_allclose(dist.density(points), dist[0].density(points))
        assert dist.cdf([[0, 0], [10, 10]]).shape == (2,)
        assert dist.density([2, 1]).shape == (1,)

    def test_log_density(self, vec):
        np.testing.assert_allclose(vec.log_density([0, 0]), np.log(vec.density([0, 0])))

    def test_cdf(self, vec):
        out = vec.cdf([0, 0])
        assert out.shape == (2,)
        assert out[1] == pytest.approx(0.25, abs=1e-4)

    def test_quantile(self, vec):
        q = vec.quantile([0.5, 0.9])
        assert len(q) == 2
        np.testing.assert_allclose(q[0][0], [1.0, 2.0])
        np.testing.assert_allclose(q[1][0], [0.0, 0.0])
        assert q[1].shape == (2, 2)

    def test_quantile_type_passed_through(self, vec):
        q = vec.quantile([0.0, 1.0], type="equicoordinate")
        for qi in q:
            np.testing.assert_array_equal(qi[:, 0], [-np.inf, np.inf])

    def test_generate(self, vec):
        draws = vec.generate(4, random_state=0)
        assert [x.shape for x in draws] == [(4, 2), (4, 2)]

    def test_moments(self, vec):
        np.testing.assert_array_equal(vec.mean()[0], [[1.0, 2.0]])
        np.testing.assert_array_equal(vec.covariance()[1], np.eye(2))
        np.testing.assert_array_equal(vec.variance()[0], [[4.0, 3.0]])
