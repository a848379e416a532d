"""Weighted particle populations as discrete distributions.

``DiscreteDistribution`` owns N (location, weight) pairs. Weights are kept
in the log domain and renormalized with the log-sum-exp trick on every
update; a cumulative table is rebuilt alongside so that a uniform draw can
be inverted into a particle index by binary search.

Sampling goes standard normal -> uniform (through the normal CDF) ->
particle index (through the cumulative table), so a single seed makes every
resampling step reproducible.

Example:
    >>> dist = DiscreteDistribution(3, seed=0)
    >>> dist.set_locations([-1.0, 0.0, 1.0])
    >>> log_z = dist.install_log_unnormalized_mass([0.0, 0.0, np.log(2.0)])
    >>> dist.prob_mass()
    array([0.25, 0.25, 0.5 ])
    >>> dist.mean()
    0.25
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from ..diagnostics.core import check_population
from ..config import is_debug_enabled
from ..errors import EmptyPopulation, InvalidWeight, error_for, validate_log_mass
from ..logging import get_logger
from .interfaces import Moment, Sampling
from .mapping import StandardNormalMap
from .standard_normal import RandomSource
from .utils import effective_sample_size, normalize_log_weights, standard_normal_cdf
from .variate import Variate, VariateSpace

logger = get_logger(__name__)


class DiscreteDistribution(Moment, StandardNormalMap):
    """Empirical distribution over a weighted set of particle locations.

    The weighted sums returned by ``mean`` and ``covariance`` are the exact
    moments of this discrete distribution, hence ``Moment`` rather than
    ``ApproximateMoments``. They are recomputed on every call.

    Args:
        size: Initial number of particles. The population starts uniformly
            weighted with all locations at the origin. ``0`` creates an
            empty population that must be filled before use.
        space: Variate space of the locations. Defaults to scalar variates.
        seed: Seed of the standard normal noise used for sampling.
        source: Shared ``RandomSource`` to draw the noise from.
    """

    def __init__(
        self,
        size: int = 1,
        space: Optional[VariateSpace] = None,
        seed: Optional[int] = None,
        source: Optional[RandomSource] = None,
    ) -> None:
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        StandardNormalMap.__init__(self, seed=seed, source=source)
        self.space = space if space is not None else VariateSpace.scalar_space()

        self._locations = self.space.zeros(0)
        self._log_weight = np.zeros(0)
        self._weight = np.zeros(0)
        self._cumulative = np.zeros(0)

        if size > 0:
            self.set_uniform(size)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size}, dimension={self.dimension})"

    # ------------------------------------------------------------------
    # Population mutation
    # ------------------------------------------------------------------

    def install_log_unnormalized_mass(self, values: np.ndarray) -> float:
        """Replace the weights with normalized ``exp(values)``.

        The log-weights are shifted by their log-sum-exp, so the stored
        ``log_prob_mass`` and ``prob_mass`` stay consistent and the
        cumulative table ends at 1. If the length of ``values`` differs
        from the current size, locations are truncated or padded with
        zeros.

        Args:
            values: Unnormalized log-probability mass, shape (N,).

        Returns:
            The log normalizer, ``logsumexp(values)``.

        Raises:
            EmptyPopulation: If ``values`` is empty.
            InvalidWeight: If ``values`` is not a 1D vector of finite reals.
        """
        try:
            values = np.asarray(values, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidWeight(f"Log-weights are not a numeric vector: {exc}") from exc

        kind = validate_log_mass(values)
        if kind is not None:
            raise error_for(kind, f"Cannot install log-weights of shape {values.shape}")

        weight, log_z = normalize_log_weights(values)
        log_weight = values - log_z
        cumulative = np.cumsum(weight)

        n = len(values)
        old_n = len(self._locations)
        if n != old_n:
            locations = self.space.zeros(n)
            keep = min(n, old_n)
            locations[:keep] = self._locations[:keep]
            self._locations = locations
            logger.debug("Resized population from %d to %d particles", old_n, n)

        self._log_weight = log_weight
        self._weight = weight
        self._cumulative = cumulative

        logger.debug("Installed log mass for %d particles, log normalizer %.6g", n, log_z)
        if is_debug_enabled():
            self.check_invariants()
        return log_z

    def apply_log_weight_delta(self, delta: np.ndarray) -> float:
        """Importance-weight update: add ``delta`` to the normalized log-weights.

        Repeated deltas compose additively in the log domain, so two
        successive calls give the same weights as one call with the sum.

        Args:
            delta: Log-weight increments, shape (N,), e.g. measurement
                log-likelihoods.

        Returns:
            The log normalizer of the updated weights, which is the
            incremental log-evidence ``log(sum(w_i * exp(delta_i)))``.

        Raises:
            EmptyPopulation: If the population is empty.
            InvalidWeight: If ``delta`` has the wrong length or non-finite
                entries.
        """
        try:
            delta = np.asarray(delta, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidWeight(f"Log-weight delta is not a numeric vector: {exc}") from exc

        if self.size == 0:
            raise EmptyPopulation("Cannot update the weights of an empty population")
        kind = validate_log_mass(delta, size=self.size)
        if kind is not None:
            raise error_for(
                kind, f"Log-weight delta of shape {delta.shape} does not fit {self.size} particles"
            )
        return self.install_log_unnormalized_mass(self._log_weight + delta)

    def set_uniform(self, size: Optional[int] = None) -> None:
        """Reset to uniform weights ``1 / size``.

        Args:
            size: New population size. If None, keeps the current size.

        Raises:
            EmptyPopulation: If the resulting size is zero.
        """
        if size is None:
            size = self.size
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.install_log_unnormalized_mass(np.zeros(size))

    def location(self, i: int) -> Variate:
        """Location of particle ``i``."""
        return self.space.export(self._locations[i])

    def set_location(self, i: int, value: Variate) -> None:
        """Overwrite the location of particle ``i``. Weights are untouched.

        Raises:
            DimensionMismatch: If ``value`` has the wrong dimension.
        """
        self._locations[i] = self.space.coerce(value)

    @property
    def locations(self) -> np.ndarray:
        """Copy of all locations: shape (N,) for scalars, (N, dim) otherwise."""
        if self.space.scalar:
            return self._locations[:, 0].copy()
        return self._locations.copy()

    def set_locations(self, values: np.ndarray) -> None:
        """Overwrite all locations at once. Weights are untouched.

        Raises:
            DimensionMismatch: If the locations have the wrong dimension.
            ValueError: If the number of locations differs from ``size``.
        """
        locations = self.space.coerce_many(values)
        if len(locations) != self.size:
            raise ValueError(f"Expected {self.size} locations, got {len(locations)}")
        self._locations = locations.copy()

    def from_distribution(self, source: Sampling, size: int) -> None:
        """Fill the population with ``size`` draws from ``source``, uniformly weighted.

        Draws land in a fresh array before anything is overwritten, so
        ``source`` may be this distribution.
        """
        if size <= 0:
            raise EmptyPopulation(f"Cannot draw a population of size {size}")
        new_locations = np.stack([self.space.coerce(source.sample()) for _ in range(size)])
        self.set_uniform(size)
        self._locations = new_locations

    def resample(self, size: Optional[int] = None) -> np.ndarray:
        """Replace the population by ``size`` draws from itself, uniformly weighted.

        Args:
            size: Size of the new population. If None, keeps the current size.

        Returns:
            Ancestor indices of the new particles, shape (size,).
        """
        if size is None:
            size = self.size
        if size <= 0:
            raise EmptyPopulation(f"Cannot draw a population of size {size}")
        ancestors = self.sample_indices(size)
        new_locations = self._locations[ancestors].copy()
        self.set_uniform(size)
        self._locations = new_locations
        return ancestors

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def map_standard_normal(
        self, sample: float, return_index: bool = False
    ) -> Union[Variate, Tuple[Variate, int]]:
        """Map a standard normal draw to a particle through the normal CDF."""
        return self.map_standard_uniform(standard_normal_cdf(float(sample)), return_index=return_index)

    def map_standard_uniform(
        self, sample: float, return_index: bool = False
    ) -> Union[Variate, Tuple[Variate, int]]:
        """Invert a uniform draw through the cumulative table.

        Selects the first particle whose cumulative weight is >= ``sample``.
        Draws at or above the last cumulative value (possible through
        rounding) select the last particle.

        Args:
            sample: Uniform(0, 1) value.
            return_index: Also return the selected particle index.

        Returns:
            The selected location, or ``(location, index)``.

        Raises:
            EmptyPopulation: If the population is empty.
            ValueError: If ``sample`` is NaN.
        """
        self._require_population("sample")
        if np.isnan(sample):
            raise ValueError("Cannot map a NaN draw to a particle")
        n = self.size
        index = int(np.searchsorted(self._cumulative, sample, side="left"))
        if index >= n:
            logger.debug("Uniform draw %.17g past cumulative end, clamped to %d", sample, n - 1)
            index = n - 1

        value = self.location(index)
        if return_index:
            return value, index
        return value

    def sample(self, return_index: bool = False) -> Union[Variate, Tuple[Variate, int]]:
        """Draw a particle location (and optionally its index)."""
        return self.map_standard_normal(self.standard_normal.sample(), return_index=return_index)

    def sample_indices(self, n: int) -> np.ndarray:
        """Draw ``n`` particle indices with the same mapping as ``sample``.

        Returns:
            Integer array of shape (n,).
        """
        self._require_population("sample")
        z = self.standard_normal.sample_many(n)[:, 0]
        indices = np.searchsorted(self._cumulative, standard_normal_cdf(z), side="left")
        return np.minimum(indices, self.size - 1)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._log_weight)

    @property
    def dimension(self) -> int:
        return self.space.dimension

    def log_prob_mass(self, i: Optional[int] = None) -> Union[float, np.ndarray]:
        """Normalized log-weight of particle ``i``, or a copy of all of them."""
        if i is None:
            return self._log_weight.copy()
        return float(self._log_weight[i])

    def prob_mass(self, i: Optional[int] = None) -> Union[float, np.ndarray]:
        """Normalized weight of particle ``i``, or a copy of all of them."""
        if i is None:
            return self._weight.copy()
        return float(self._weight[i])

    @property
    def cumulative(self) -> np.ndarray:
        """Copy of the cumulative weight table."""
        return self._cumulative.copy()

    def mean(self) -> Variate:
        """Weighted mean of the locations."""
        self._require_population("mean")
        return self.space.export(self._weight @ self._locations)

    def covariance(self) -> Variate:
        """Weighted covariance of the locations (variance for scalars)."""
        self._require_population("covariance")
        mu = self._weight @ self._locations
        delta = self._locations - mu
        cov = (self._weight[:, np.newaxis] * delta).T @ delta
        return self.space.export_second_moment(cov)

    def max(self) -> Variate:
        """Location with the largest weight; ties go to the lowest index."""
        self._require_population("max")
        return self.location(int(np.argmax(self._log_weight)))

    def entropy(self) -> float:
        """Shannon entropy of the weights in nats.

        Zero-mass particles contribute nothing, even when their log-weight
        overflowed to ``-inf``.
        """
        positive = self._weight > 0
        return float(-np.sum(self._log_weight[positive] * self._weight[positive]))

    def kl_from_uniform(self) -> float:
        """KL divergence from the uniform distribution over the same support.

        Zero for uniform weights, approaching ``log(N)`` as the mass
        collapses on a single particle.
        """
        self._require_population("kl_from_uniform")
        return float(np.log(self.size) - self.entropy())

    def effective_sample_size(self) -> float:
        """``1 / sum(w^2)``: N for uniform weights, 1 for a collapsed population."""
        self._require_population("effective_sample_size")
        return effective_sample_size(self._weight)

    def check_invariants(self, atol: float = 1e-9) -> None:
        """Raise ``ValueError`` if the population invariants do not hold."""
        check_population(
            self._locations,
            self._log_weight,
            self._weight,
            self._cumulative,
            dimension=self.space.dimension,
            atol=atol,
        )

    def _require_population(self, operation: str) -> None:
        if self.size == 0:
            raise EmptyPopulation(f"Cannot compute {operation} of an empty population")
