"""Tests for standard normal sources and the inverse-CDF sampling capability."""

import numpy as np
import pytest

from pfcore.errors import InvalidResize
from pfcore.distributions import (
    ApproximateMoments,
    Moment,
    RandomSource,
    Sampling,
    StandardNormalDistribution,
    StandardNormalMap,
    VariateSpace,
)


def test_random_source_is_deterministic():
    """Same seed, same stream."""
    a = RandomSource(42)
    b = RandomSource(42)
    np.testing.assert_array_equal(a.standard_normal(10), b.standard_normal(10))
    assert a.standard_normal() == b.standard_normal()


def test_random_source_reseed():
    """Reseeding restarts the stream."""
    source = RandomSource(3)
    first = source.standard_normal(5)
    source.reseed(3)
    np.testing.assert_array_equal(source.standard_normal(5), first)


def test_random_source_rejects_negative_seed():
    """Seeds are unsigned."""
    with pytest.raises(ValueError, match="non-negative"):
        RandomSource(-1)


def test_scalar_standard_normal():
    """Scalar variates are floats with exact moments 0 and 1."""
    dist = StandardNormalDistribution(seed=0)
    assert isinstance(dist.sample(), float)
    assert dist.dimension == 1
    assert dist.mean() == 0.0
    assert dist.covariance() == 1.0
    assert dist.approximate_mean() == 0.0
    assert dist.approximate_covariance() == 1.0


def test_vector_standard_normal():
    """Vector variates have zero mean and identity covariance."""
    dist = StandardNormalDistribution(seed=0, space=VariateSpace.dynamic_space(3))
    assert dist.sample().shape == (3,)
    np.testing.assert_array_equal(dist.mean(), np.zeros(3))
    np.testing.assert_array_equal(dist.covariance(), np.eye(3))
    assert dist.sample_many(4).shape == (4, 3)


def test_standard_normal_capabilities():
    """Standard normal offers sampling and exact moments."""
    dist = StandardNormalDistribution(seed=0)
    assert isinstance(dist, Sampling)
    assert isinstance(dist, Moment)
    assert isinstance(dist, ApproximateMoments)


def test_standard_normal_empirical_moments():
    """Many draws reproduce zero mean and identity covariance."""
    dist = StandardNormalDistribution(seed=5, space=VariateSpace.fixed_space(2))
    draws = dist.sample_many(200_000)
    np.testing.assert_allclose(draws.mean(axis=0), np.zeros(2), atol=0.01)
    np.testing.assert_allclose(np.cov(draws.T), np.eye(2), atol=0.02)


def test_standard_normal_resize():
    """Dynamic spaces resize, fixed and scalar ones refuse."""
    dynamic = StandardNormalDistribution(seed=0, space=VariateSpace.dynamic_space(2))
    dynamic.set_dimension(4)
    assert dynamic.dimension == 4
    assert dynamic.sample().shape == (4,)
    np.testing.assert_array_equal(dynamic.covariance(), np.eye(4))

    fixed = StandardNormalDistribution(seed=0, space=VariateSpace.fixed_space(2))
    fixed.set_dimension(2)
    with pytest.raises(InvalidResize):
        fixed.set_dimension(3)
    assert fixed.dimension == 2

    with pytest.raises(InvalidResize):
        StandardNormalDistribution(seed=0).set_dimension(2)


def test_shared_source():
    """Distributions built on one RandomSource advance the same stream."""
    source = RandomSource(9)
    a = StandardNormalDistribution(source=source)
    b = StandardNormalDistribution(source=source)
    draws = [a.sample(), b.sample()]

    reference = RandomSource(9).standard_normal(2)
    np.testing.assert_allclose(draws, reference)


class ShiftedScaled(StandardNormalMap):
    """N(mu, sigma^2) expressed as a map of standard normal noise."""

    def __init__(self, mu, sigma, seed=None):
        super().__init__(seed=seed)
        self.mu = mu
        self.sigma = sigma

    def map_standard_normal(self, sample):
        return self.mu + self.sigma * sample


def test_standard_normal_map_default_sampling():
    """sample() maps a standard normal draw, reproducibly per seed."""
    dist = ShiftedScaled(10.0, 2.0, seed=4)
    expected = 10.0 + 2.0 * RandomSource(4).standard_normal()
    assert dist.sample() == pytest.approx(expected)
    assert isinstance(dist, Sampling)


def test_standard_normal_map_variate_dimension():
    """The noise dimension is exposed; scalar noise cannot be resized."""
    dist = ShiftedScaled(0.0, 1.0, seed=0)
    assert dist.standard_variate_dimension == 1
    with pytest.raises(InvalidResize):
        dist.standard_variate_dimension = 3


def test_standard_normal_map_is_abstract():
    """A map without map_standard_normal cannot be instantiated."""
    with pytest.raises(TypeError):
        StandardNormalMap(seed=0)
