"""Joint distribution of independent marginals.

The joint mean stacks the marginal means and the joint covariance places the
marginal covariances on the diagonal. Only moments are composed; the
marginals keep ownership of their particle arrays.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .interfaces import Moment
from .utils import ensure_1d


class JointDistribution(Moment):
    """Product of independent marginal distributions.

    Args:
        *distributions: Marginals implementing ``Moment`` and exposing a
            ``dimension`` attribute. Scalar marginals contribute one
            component.

    Examples:
        >>> a = DiscreteDistribution(2)
        >>> b = DiscreteDistribution(3, space=VariateSpace.dynamic_space(2))
        >>> JointDistribution(a, b).dimension
        3
    """

    def __init__(self, *distributions: Moment) -> None:
        if not distributions:
            raise ValueError("JointDistribution needs at least one marginal")
        for distribution in distributions:
            if not isinstance(distribution, Moment):
                raise TypeError(
                    f"Marginal {distribution.__class__.__name__} does not provide exact moments"
                )
        self._distributions: Tuple[Moment, ...] = tuple(distributions)

    @property
    def distributions(self) -> Tuple[Moment, ...]:
        return self._distributions

    @property
    def dimension(self) -> int:
        return sum(distribution.dimension for distribution in self._distributions)

    def mean(self) -> np.ndarray:
        return np.concatenate([ensure_1d(np.asarray(d.mean(), dtype=float)) for d in self._distributions])

    def covariance(self) -> np.ndarray:
        dim = self.dimension
        cov = np.zeros((dim, dim))
        offset = 0
        for distribution in self._distributions:
            block = np.atleast_2d(np.asarray(distribution.covariance(), dtype=float))
            k = distribution.dimension
            cov[offset:offset + k, offset:offset + k] = block
            offset += k
        return cov
