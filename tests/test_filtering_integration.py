"""Integration tests: a bootstrap particle filter built on the distribution engine.

The filter loop itself is not part of pfcore; these tests drive the
population-mutation, diagnostics and sampling entry points the way a
filter would and compare the result with a Kalman filter.
"""

import numpy as np
import pytest

import pfcore as pf
from pfcore import (
    DiscreteDistribution,
    StandardNormalDistribution,
    VariateSpace,
    gaussian_log_density,
)


def test_import_from_main_package():
    """The public API is available from the top-level package."""
    for name in (
        "DiscreteDistribution",
        "JointDistribution",
        "StandardNormalDistribution",
        "logsumexp",
        "EmptyPopulation",
        "get_logger",
        "debug_context",
    ):
        assert hasattr(pf, name)
    assert pf.__version__


def run_random_walk_filter(observations, q, r, n_particles, seed, kl_threshold):
    """Bootstrap filter for x_t = x_{t-1} + w_t, y_t = x_t + v_t with a N(0, 1) prior."""
    space = VariateSpace.dynamic_space(1)
    population = DiscreteDistribution(1, space=space, seed=seed)
    population.from_distribution(StandardNormalDistribution(seed=seed + 1, space=space), n_particles)
    process_noise = StandardNormalDistribution(seed=seed + 2, space=space)

    estimates = []
    log_evidence = 0.0
    n_resampled = 0
    for t, y in enumerate(observations):
        if t > 0:
            noise = process_noise.sample_many(n_particles)
            population.set_locations(population.locations + np.sqrt(q) * noise)

        log_lik = gaussian_log_density(population.locations.T, np.array([y]), np.array([[r]]))
        log_evidence += population.apply_log_weight_delta(log_lik)
        estimates.append(float(population.mean()[0]))

        if population.kl_from_uniform() > kl_threshold:
            population.resample()
            n_resampled += 1

    return np.array(estimates), log_evidence, n_resampled


def kalman_random_walk(observations, q, r):
    """Exact filtered means and log-evidence for the same model."""
    m, p = 0.0, 1.0
    means = []
    log_evidence = 0.0
    for t, y in enumerate(observations):
        if t > 0:
            p = p + q
        s = p + r
        log_evidence += -0.5 * (np.log(2 * np.pi * s) + (y - m) ** 2 / s)
        k = p / s
        m = m + k * (y - m)
        p = (1 - k) * p
        means.append(m)
    return np.array(means), log_evidence


def test_bootstrap_filter_matches_kalman(rng):
    """Particle estimates track the exact Kalman means."""
    q, r = 0.1, 0.5
    T = 25
    x = rng.normal()
    observations = []
    for _ in range(T):
        x = x + rng.normal(scale=np.sqrt(q))
        observations.append(x + rng.normal(scale=np.sqrt(r)))
    observations = np.array(observations)

    estimates, log_evidence, n_resampled = run_random_walk_filter(
        observations, q, r, n_particles=2000, seed=10, kl_threshold=0.3
    )
    kf_means, kf_log_evidence = kalman_random_walk(observations, q, r)

    assert n_resampled > 0
    assert np.max(np.abs(estimates - kf_means)) < 0.25
    assert log_evidence == pytest.approx(kf_log_evidence, abs=1.0)


def test_bootstrap_filter_is_reproducible():
    """Same seeds, same estimates."""
    observations = np.array([0.1, 0.4, 0.2, -0.3, 0.0])
    first = run_random_walk_filter(observations, 0.1, 0.5, n_particles=200, seed=3, kl_threshold=0.1)
    second = run_random_walk_filter(observations, 0.1, 0.5, n_particles=200, seed=3, kl_threshold=0.1)
    np.testing.assert_array_equal(first[0], second[0])
    assert first[1] == second[1]
