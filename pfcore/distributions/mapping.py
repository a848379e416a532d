"""Sampling through a map from standard normal noise.

A ``StandardNormalMap`` owns a ``StandardNormalDistribution`` and defines
``sample()`` as "draw standard normal noise, then map it". Subclasses only
decide how the noise is interpreted, which keeps every such distribution
reproducible from a single seed.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Optional

from .interfaces import Sampling
from .standard_normal import RandomSource, StandardNormalDistribution
from .variate import Variate, VariateSpace


class StandardNormalMap(Sampling):
    """Inverse-CDF style sampling capability.

    Args:
        standard_space: Variate space of the standard normal noise.
        seed: Seed for the noise source.
        source: Shared ``RandomSource`` to draw the noise from.
    """

    def __init__(
        self,
        standard_space: Optional[VariateSpace] = None,
        seed: Optional[int] = None,
        source: Optional[RandomSource] = None,
    ) -> None:
        self.standard_normal = StandardNormalDistribution(seed=seed, space=standard_space, source=source)

    @abstractmethod
    def map_standard_normal(self, sample: Variate) -> Variate:
        """Map a standard normal sample into this distribution's variate space."""

    def sample(self) -> Variate:
        return self.map_standard_normal(self.standard_normal.sample())

    @property
    def standard_variate_dimension(self) -> int:
        return self.standard_normal.dimension

    @standard_variate_dimension.setter
    def standard_variate_dimension(self, dimension: int) -> None:
        self.standard_normal.set_dimension(dimension)
