"""Seedable standard normal sources.

``RandomSource`` wraps a NumPy ``Generator`` and draws i.i.d. N(0, 1)
scalars. ``StandardNormalDistribution`` shapes those draws into variates of
a ``VariateSpace`` and reports its exact moments (zero mean, identity
covariance).
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from ..config import default_seed
from ..logging import get_logger
from .interfaces import Moment, Sampling
from .variate import Variate, VariateSpace

logger = get_logger(__name__)


class RandomSource:
    """Deterministic generator of independent standard normal scalars.

    Args:
        seed: Non-negative integer seed. If None, uses ``default_seed()``.

    Examples:
        >>> a, b = RandomSource(7), RandomSource(7)
        >>> a.standard_normal() == b.standard_normal()
        True
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = default_seed()
        if seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        self.seed = int(seed)
        self._generator = np.random.default_rng(self.seed)

    def standard_normal(self, size: Optional[Union[int, tuple]] = None) -> Union[float, np.ndarray]:
        """Draw N(0, 1) values; a float if ``size`` is None, else an array."""
        if size is None:
            return float(self._generator.standard_normal())
        return self._generator.standard_normal(size)

    def reseed(self, seed: int) -> None:
        """Restart the stream from ``seed``."""
        self.seed = int(seed)
        self._generator = np.random.default_rng(self.seed)


class StandardNormalDistribution(Sampling, Moment):
    """Standard normal variates of a configurable dimension.

    Args:
        seed: Seed for the embedded ``RandomSource``.
        space: Variate space; defaults to scalar variates.
        source: Existing ``RandomSource`` to draw from instead of creating
            one from ``seed``.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        space: Optional[VariateSpace] = None,
        source: Optional[RandomSource] = None,
    ) -> None:
        self.space = space if space is not None else VariateSpace.scalar_space()
        self.source = source if source is not None else RandomSource(seed)

    @property
    def dimension(self) -> int:
        return self.space.dimension

    def set_dimension(self, dimension: int) -> None:
        """Change the variate dimension.

        Raises:
            InvalidResize: If the space is scalar or fixed.
        """
        old = self.space.dimension
        self.space = self.space.resized(dimension)
        if dimension != old:
            logger.debug("Standard normal dimension changed from %d to %d", old, dimension)

    def sample(self) -> Variate:
        if self.space.scalar:
            return self.source.standard_normal()
        return self.source.standard_normal(self.space.dimension)

    def sample_many(self, n: int) -> np.ndarray:
        """Draw ``n`` variates as an ``(n, dim)`` array."""
        return self.source.standard_normal((n, self.space.dimension))

    def mean(self) -> Variate:
        return self.space.export(np.zeros(self.space.dimension))

    def covariance(self) -> Variate:
        return self.space.export_second_moment(np.eye(self.space.dimension))
