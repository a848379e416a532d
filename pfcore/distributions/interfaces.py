"""Capability interfaces for distributions.

A concrete distribution mixes in whichever capabilities it supports:

- ``Sampling``: draws variates.
- ``ApproximateMoments``: estimates of the first two central moments.
- ``Moment``: exact moments. Every ``Moment`` is also a valid
  ``ApproximateMoments``; the reverse does not hold.

The inverse-CDF capability lives in :mod:`pfcore.distributions.mapping`
because it carries its own standard normal source.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .variate import Variate


class Sampling(ABC):
    """Anything that can draw a variate."""

    @abstractmethod
    def sample(self) -> Variate:
        """Draw one variate."""


class ApproximateMoments(ABC):
    """Numerical approximation of the first two central moments."""

    @abstractmethod
    def approximate_mean(self) -> Variate:
        """Estimate of the mean."""

    @abstractmethod
    def approximate_covariance(self) -> Variate:
        """Estimate of the covariance (variance for scalar variates)."""


class Moment(ApproximateMoments):
    """Exact first two central moments.

    Subclasses implement ``mean`` and ``covariance``; the approximate
    accessors forward to them.
    """

    @abstractmethod
    def mean(self) -> Variate:
        """Mean of the distribution."""

    @abstractmethod
    def covariance(self) -> Variate:
        """Covariance matrix, or variance for scalar variates."""

    def approximate_mean(self) -> Variate:
        return self.mean()

    def approximate_covariance(self) -> Variate:
        return self.covariance()
