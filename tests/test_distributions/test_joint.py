"""Tests for the joint distribution of independent marginals."""

import numpy as np
import pytest

from pfcore.distributions import (
    ApproximateMoments,
    DiscreteDistribution,
    JointDistribution,
    Moment,
    StandardNormalDistribution,
    VariateSpace,
)


def test_joint_of_discrete_marginals(rng):
    """Mean stacks marginal means; covariance is block diagonal."""
    scalar = DiscreteDistribution(3)
    scalar.set_locations([-1.0, 0.0, 1.0])
    scalar.install_log_unnormalized_mass([0.0, 0.0, np.log(2.0)])

    vector = DiscreteDistribution(20, space=VariateSpace.dynamic_space(2))
    vector.set_locations(rng.normal(size=(20, 2)))
    vector.install_log_unnormalized_mass(rng.normal(size=20))

    joint = JointDistribution(scalar, vector)
    assert joint.dimension == 3

    mean = joint.mean()
    assert mean.shape == (3,)
    assert mean[0] == pytest.approx(0.25)
    np.testing.assert_allclose(mean[1:], vector.mean())

    cov = joint.covariance()
    assert cov.shape == (3, 3)
    assert cov[0, 0] == pytest.approx(0.6875)
    np.testing.assert_allclose(cov[1:, 1:], vector.covariance())
    np.testing.assert_array_equal(cov[0, 1:], np.zeros(2))
    np.testing.assert_array_equal(cov[1:, 0], np.zeros(2))


def test_joint_with_standard_normal():
    """Any exact-moment marginal can take part."""
    joint = JointDistribution(
        StandardNormalDistribution(seed=0, space=VariateSpace.fixed_space(2)),
        StandardNormalDistribution(seed=1),
    )
    np.testing.assert_array_equal(joint.mean(), np.zeros(3))
    np.testing.assert_array_equal(joint.covariance(), np.eye(3))


def test_joint_is_moment():
    """The joint exposes exact and approximate moments."""
    joint = JointDistribution(DiscreteDistribution(2))
    assert isinstance(joint, Moment)
    assert isinstance(joint, ApproximateMoments)
    np.testing.assert_array_equal(joint.approximate_mean(), joint.mean())
    assert len(joint.distributions) == 1


def test_joint_tracks_marginal_updates():
    """Joint moments are read from the marginals at call time."""
    marginal = DiscreteDistribution(2)
    marginal.set_locations([0.0, 4.0])
    joint = JointDistribution(marginal)
    assert joint.mean()[0] == pytest.approx(2.0)

    marginal.install_log_unnormalized_mass([0.0, np.log(3.0)])
    assert joint.mean()[0] == pytest.approx(3.0)


def test_joint_requires_moment_marginals():
    """Marginals without exact moments and empty joints are rejected."""
    with pytest.raises(ValueError):
        JointDistribution()
    with pytest.raises(TypeError):
        JointDistribution(object())
