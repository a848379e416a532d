"""Invariant checks for weighted particle populations."""

from __future__ import annotations

from typing import Optional

import numpy as np


def assert_normalized(weights: np.ndarray, atol: float = 1e-9) -> None:
    """
    Assert that a weight vector is finite, non-negative and sums to 1.

    Parameters
    ----------
    weights:
        Normalized weights, shape (N,).
    atol:
        Absolute tolerance for |sum(weights) - 1|.

    Raises
    ------
    ValueError
        If the weights are not normalized within the tolerance.
    """
    weights = np.asarray(weights, dtype=float)
    if not np.all(np.isfinite(weights)):
        raise ValueError("Weights contain non-finite values.")
    if np.any(weights < 0.0):
        raise ValueError("Weights contain negative values.")

    total = float(np.sum(weights))
    if abs(total - 1.0) > atol:
        raise ValueError(
            f"Weights are not normalized within tolerance {atol}. Sum found: {total}"
        )


def assert_monotone(cumulative: np.ndarray, atol: float = 1e-9) -> None:
    """
    Assert that a cumulative table is non-decreasing and ends at 1.

    Parameters
    ----------
    cumulative:
        Prefix sums of normalized weights, shape (N,).
    atol:
        Absolute tolerance for |cumulative[-1] - 1|.

    Raises
    ------
    ValueError
        If the table decreases anywhere or does not end at 1.
    """
    cumulative = np.asarray(cumulative, dtype=float)
    if cumulative.size == 0:
        raise ValueError("Cumulative table is empty.")
    if np.any(np.diff(cumulative) < 0.0):
        raise ValueError("Cumulative table is not non-decreasing.")
    if abs(float(cumulative[-1]) - 1.0) > atol:
        raise ValueError(
            f"Cumulative table ends at {float(cumulative[-1])}, expected 1 within {atol}."
        )


def check_population(
    locations: np.ndarray,
    log_weight: np.ndarray,
    weight: np.ndarray,
    cumulative: np.ndarray,
    dimension: Optional[int] = None,
    atol: float = 1e-9,
) -> None:
    """
    Check the structural invariants of a particle population.

    Verifies that all arrays have the same length, that the weights are
    normalized and equal ``exp(log_weight)``, that the cumulative table is
    monotone and ends at 1, and that every location has ``dimension``
    components.

    Parameters
    ----------
    locations:
        Particle locations, shape (N, dim).
    log_weight, weight, cumulative:
        Parallel arrays of shape (N,).
    dimension:
        Declared variate dimension. Skipped if None.
    atol:
        Absolute tolerance used for every floating-point comparison.

    Raises
    ------
    ValueError
        On the first violated invariant.
    """
    n = len(log_weight)
    lengths = {len(locations), len(weight), len(cumulative), n}
    if len(lengths) != 1:
        raise ValueError(
            f"Population arrays disagree in length: locations={len(locations)}, "
            f"log_weight={n}, weight={len(weight)}, cumulative={len(cumulative)}"
        )

    assert_normalized(weight, atol=atol)
    assert_monotone(cumulative, atol=atol)

    if not np.allclose(weight, np.exp(log_weight), rtol=0.0, atol=atol):
        raise ValueError("Weights are not consistent with exp(log_weight).")

    if dimension is not None and np.ndim(locations) == 2 and locations.shape[1] != dimension:
        raise ValueError(
            f"Locations have dimension {locations.shape[1]}, expected {dimension}."
        )
