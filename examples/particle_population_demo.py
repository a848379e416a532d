"""Example: weighted particle populations with pfcore

Demonstrates log-domain weight updates, degeneracy diagnostics and
seeded resampling on a small two-dimensional population.
"""

import numpy as np

from pfcore import (
    DiscreteDistribution,
    StandardNormalDistribution,
    VariateSpace,
    gaussian_log_density,
)


def example_importance_update():
    """Example: correcting a prior population with one measurement."""
    print("=" * 60)
    print("Example 1: Importance update and diagnostics")
    print("=" * 60)

    space = VariateSpace.fixed_space(2)
    population = DiscreteDistribution(1, space=space, seed=42)
    population.from_distribution(StandardNormalDistribution(seed=7, space=space), 500)

    print(f"Prior mean:         {population.mean()}")
    print(f"Prior KL(p || u):   {population.kl_from_uniform():.4f}")

    # Measure the first coordinate: y = x[0] + v, v ~ N(0, 0.2)
    y = 0.8
    log_lik = gaussian_log_density(population.locations[:, :1].T, np.array([y]), np.array([[0.2]]))
    log_evidence = population.apply_log_weight_delta(log_lik)

    print(f"Posterior mean:     {population.mean()}")
    print(f"Posterior cov:\n{population.covariance()}")
    print(f"Log-evidence:       {log_evidence:.4f}")
    print(f"Entropy:            {population.entropy():.4f}")
    print(f"KL(p || u):         {population.kl_from_uniform():.4f}")
    print(f"ESS:                {population.effective_sample_size():.1f}")
    print(f"Mode:               {population.max()}")
    print()
    return population


def example_resampling(population):
    """Example: resampling once the population degenerates."""
    print("=" * 60)
    print("Example 2: Resampling")
    print("=" * 60)

    ancestors = population.resample()
    distinct = len(np.unique(ancestors))
    print(f"Distinct ancestors: {distinct} of {population.size}")
    print(f"KL after resample:  {population.kl_from_uniform():.4f}")
    print(f"Mean after resample: {population.mean()}")
    print()


if __name__ == "__main__":
    population = example_importance_update()
    example_resampling(population)
    print("Particle population demo complete")
