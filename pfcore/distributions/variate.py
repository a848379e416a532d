"""Variate spaces: the shape contract shared by all distributions.

A population of N variates is always stored as an ``(N, dim)`` float array.
The ``VariateSpace`` decides how single variates and second moments are
handed back to callers: scalar spaces export Python floats, vector spaces
export arrays.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from ..errors import DimensionMismatch, InvalidResize

Variate = Union[float, np.ndarray]


@dataclass(frozen=True)
class VariateSpace:
    """Dimension and resize policy of a variate type.

    Attributes:
        dimension: Number of components of each variate.
        scalar: Variates are exported as floats and second moments as a
            variance instead of a covariance matrix.
        fixed: The dimension is part of the type and cannot change.
    """

    dimension: int
    scalar: bool = False
    fixed: bool = False

    def __post_init__(self) -> None:
        if self.dimension < 1:
            raise ValueError(f"Variate dimension must be >= 1, got {self.dimension}")
        if self.scalar and self.dimension != 1:
            raise ValueError("Scalar variate spaces are one-dimensional")

    @classmethod
    def scalar_space(cls) -> "VariateSpace":
        """Real-valued variates."""
        return cls(dimension=1, scalar=True, fixed=True)

    @classmethod
    def fixed_space(cls, dimension: int) -> "VariateSpace":
        """Vectors whose dimension may never change."""
        return cls(dimension=dimension, fixed=True)

    @classmethod
    def dynamic_space(cls, dimension: int) -> "VariateSpace":
        """Vectors whose dimension may be changed after construction."""
        return cls(dimension=dimension)

    @property
    def resizable(self) -> bool:
        return not (self.scalar or self.fixed)

    def resized(self, dimension: int) -> "VariateSpace":
        """Return the space with a new dimension.

        Raises:
            InvalidResize: For scalar spaces, or fixed spaces asked for a
                different dimension.
        """
        if dimension == self.dimension:
            return self
        if self.scalar:
            raise InvalidResize("Attempt to resize a scalar-valued distribution.")
        if self.fixed:
            raise InvalidResize(
                "Attempt to resize a fixed-size distribution. "
                f"Size is: {self.dimension}. Requested is: {dimension}."
            )
        return VariateSpace(dimension=dimension)

    def zeros(self, n: int) -> np.ndarray:
        """Storage for ``n`` variates."""
        return np.zeros((n, self.dimension))

    def coerce(self, value: Variate) -> np.ndarray:
        """Convert a single variate to a ``(dim,)`` float array.

        Raises:
            DimensionMismatch: If ``value`` does not have ``dimension``
                components.
        """
        vec = np.asarray(value, dtype=float)
        if vec.ndim == 0:
            vec = vec.reshape(1)
        elif vec.ndim == 2 and 1 in vec.shape:
            vec = vec.ravel()
        if vec.ndim != 1 or vec.shape[0] != self.dimension:
            raise DimensionMismatch(
                f"Variate of shape {np.shape(value)} does not match dimension {self.dimension}"
            )
        return vec

    def coerce_many(self, values: np.ndarray) -> np.ndarray:
        """Convert a batch of variates to an ``(n, dim)`` float array."""
        arr = np.asarray(values, dtype=float)
        if arr.ndim == 1 and self.dimension == 1:
            arr = arr.reshape(-1, 1)
        if arr.ndim != 2 or arr.shape[1] != self.dimension:
            raise DimensionMismatch(
                f"Locations of shape {np.shape(values)} do not match dimension {self.dimension}"
            )
        return arr

    def export(self, vec: np.ndarray) -> Variate:
        """Hand a ``(dim,)`` array back in the caller's variate type."""
        if self.scalar:
            return float(vec[0])
        return np.array(vec, dtype=float)

    def export_second_moment(self, mat: np.ndarray) -> Variate:
        """Hand a ``(dim, dim)`` matrix back as a variance or covariance."""
        if self.scalar:
            return float(mat[0, 0])
        return np.array(mat, dtype=float)
