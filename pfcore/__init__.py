"""pfcore - discrete distributions and moment estimation for particle filters."""

__version__ = "0.1.0"

# Distributions
from .distributions import (
    ApproximateMoments,
    DiscreteDistribution,
    JointDistribution,
    Moment,
    RandomSource,
    Sampling,
    StandardNormalDistribution,
    StandardNormalMap,
    Variate,
    VariateSpace,
    effective_sample_size,
    gaussian_log_density,
    logsumexp,
    normalize_log_weights,
    standard_normal_cdf,
)

# Configuration
from .config import default_seed, set_default_seed

# Diagnostics
from .diagnostics import (
    assert_monotone,
    assert_normalized,
    check_population,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

# Errors
from .errors import (
    DimensionMismatch,
    DistributionError,
    EmptyPopulation,
    ErrorKind,
    InvalidResize,
    InvalidWeight,
    validate_log_mass,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "__version__",
    "Sampling",
    "ApproximateMoments",
    "Moment",
    "StandardNormalMap",
    "RandomSource",
    "StandardNormalDistribution",
    "default_seed",
    "set_default_seed",
    "DiscreteDistribution",
    "JointDistribution",
    "Variate",
    "VariateSpace",
    "logsumexp",
    "normalize_log_weights",
    "effective_sample_size",
    "standard_normal_cdf",
    "gaussian_log_density",
    "assert_normalized",
    "assert_monotone",
    "check_population",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "ErrorKind",
    "DistributionError",
    "EmptyPopulation",
    "InvalidWeight",
    "InvalidResize",
    "DimensionMismatch",
    "validate_log_mass",
    "get_logger",
    "set_log_level",
    "configure_logging",
]
