"""Error kinds raised by the distribution engine.

Every error is reported at the offending call, before any state is changed.
The exception classes derive from ``ValueError`` and carry an ``ErrorKind``
so callers can branch on the kind without matching on messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np


class ErrorKind(str, Enum):
    """Failure categories of the distribution engine."""

    EMPTY_POPULATION = "empty_population"
    INVALID_WEIGHT = "invalid_weight"
    INVALID_RESIZE = "invalid_resize"
    DIMENSION_MISMATCH = "dimension_mismatch"


class DistributionError(ValueError):
    """Base class for distribution errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyPopulation(DistributionError):
    """Moment, argmax or sampling query on a population of zero particles."""

    kind = ErrorKind.EMPTY_POPULATION


class InvalidWeight(DistributionError):
    """Non-finite, malformed or missing log-weight input."""

    kind = ErrorKind.INVALID_WEIGHT


class InvalidResize(DistributionError):
    """Dimension change requested on a fixed-size or scalar variate."""

    kind = ErrorKind.INVALID_RESIZE


class DimensionMismatch(DistributionError):
    """Location dimension disagrees with the declared variate dimension."""

    kind = ErrorKind.DIMENSION_MISMATCH


_EXCEPTIONS = {
    ErrorKind.EMPTY_POPULATION: EmptyPopulation,
    ErrorKind.INVALID_WEIGHT: InvalidWeight,
    ErrorKind.INVALID_RESIZE: InvalidResize,
    ErrorKind.DIMENSION_MISMATCH: DimensionMismatch,
}


def error_for(kind: ErrorKind, message: str) -> DistributionError:
    """Build the exception instance matching ``kind``."""
    return _EXCEPTIONS[kind](message)


def validate_log_mass(values: np.ndarray, size: Optional[int] = None) -> Optional[ErrorKind]:
    """Check a log-probability-mass vector without raising.

    Args:
        values: Candidate log-weights.
        size: Required length, if the caller needs one (importance updates).

    Returns:
        None if ``values`` can be installed, otherwise the ``ErrorKind``
        describing why not.
    """
    values = np.asarray(values, dtype=float)
    if values.ndim != 1:
        return ErrorKind.INVALID_WEIGHT
    if size is not None and len(values) != size:
        return ErrorKind.INVALID_WEIGHT
    if len(values) == 0:
        return ErrorKind.EMPTY_POPULATION
    if not np.all(np.isfinite(values)):
        return ErrorKind.INVALID_WEIGHT
    return None
