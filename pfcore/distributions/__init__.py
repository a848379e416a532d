"""Distributions: capability interfaces, standard normal noise and particle populations.

This module provides:
- Capability interfaces (Sampling, ApproximateMoments, Moment, StandardNormalMap)
- A seedable standard normal source
- DiscreteDistribution, the weighted particle population
- JointDistribution, composing marginal moments
- Numerically stable helpers (log-sum-exp, normal CDF, Gaussian log-density)
"""

from .discrete import DiscreteDistribution
from .interfaces import ApproximateMoments, Moment, Sampling
from .joint import JointDistribution
from .mapping import StandardNormalMap
from .standard_normal import RandomSource, StandardNormalDistribution
from .utils import (
    effective_sample_size,
    gaussian_log_density,
    logsumexp,
    normalize_log_weights,
    standard_normal_cdf,
)
from .variate import Variate, VariateSpace

__all__ = [
    "Sampling",
    "ApproximateMoments",
    "Moment",
    "StandardNormalMap",
    "RandomSource",
    "StandardNormalDistribution",
    "DiscreteDistribution",
    "JointDistribution",
    "Variate",
    "VariateSpace",
    "logsumexp",
    "normalize_log_weights",
    "effective_sample_size",
    "standard_normal_cdf",
    "gaussian_log_density",
]
