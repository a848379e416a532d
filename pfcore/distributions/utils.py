"""Numerical utilities for weighted particle populations.

Provides stable implementations of log-sum-exp, log-weight normalization,
the standard normal CDF and the multivariate normal log-density used by
correction steps to produce log-weights.
"""

import math
from typing import Optional, Tuple, Union

import numpy as np

_SQRT2 = math.sqrt(2.0)
_vector_erf = np.vectorize(math.erf, otypes=[float])


def logsumexp(a: np.ndarray, axis: Optional[int] = None) -> np.ndarray:
    """Compute log-sum-exp in a numerically stable way.

    Computes log(sum(exp(a))) avoiding overflow/underflow by subtracting
    the maximum before exponentiating.

    Args:
        a: Input array of log-values.
        axis: Axis along which to compute. If None, flattens array.

    Returns:
        Log-sum-exp result, same shape as input (with axis removed if specified).

    Examples:
        >>> logsumexp(np.array([-10, -11, -12]))
        -9.40760596444438...
    """
    a = np.asarray(a, dtype=float)
    if axis is None:
        a_flat = a.ravel()
        if len(a_flat) == 0:
            return np.array(-np.inf)
        a_max = np.max(a_flat)
        if not np.isfinite(a_max):
            return np.array(a_max)
        return a_max + np.log(np.sum(np.exp(a_flat - a_max)))

    a_max = np.max(a, axis=axis, keepdims=True)
    # Rows that are entirely -inf would produce nan below
    a_max = np.where(np.isfinite(a_max), a_max, 0.0)
    sum_exp = np.sum(np.exp(a - a_max), axis=axis, keepdims=True)
    with np.errstate(divide="ignore"):
        result = a_max + np.log(sum_exp)
    return np.squeeze(result, axis=axis)


def normalize_log_weights(log_w: np.ndarray) -> Tuple[np.ndarray, float]:
    """Normalize log-weights and return normalized weights + log-evidence.

    Computes: w = exp(log_w - logsumexp(log_w)).

    Args:
        log_w: Log-weights, shape (N,).

    Returns:
        Tuple of (normalized_weights, log_evidence) where
        log_evidence = logsumexp(log_w).

    Examples:
        >>> w, log_z = normalize_log_weights(np.array([-1.0, -2.0, -3.0]))
        >>> np.allclose(np.sum(w), 1.0)
        True
    """
    log_w = np.asarray(log_w, dtype=float)
    log_z = float(logsumexp(log_w))
    w = np.exp(log_w - log_z)
    return w, log_z


def effective_sample_size(weights: np.ndarray) -> float:
    """Compute effective sample size (ESS) from normalized weights.

    ESS = 1 / sum(w^2). Ranges from 1 (all mass on one particle) to N
    (uniform weights).

    Args:
        weights: Normalized weights (should sum to 1), shape (N,).

    Returns:
        Effective sample size (scalar).
    """
    weights = np.asarray(weights, dtype=float)
    weights = weights / np.sum(weights)
    return float(1.0 / np.sum(weights**2))


def standard_normal_cdf(z: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Evaluate the standard normal CDF, 0.5 * (1 + erf(z / sqrt(2))).

    Args:
        z: Scalar or array of standard normal values.

    Returns:
        Float for scalar input, otherwise an array of the same shape.

    Examples:
        >>> standard_normal_cdf(0.0)
        0.5
    """
    if np.ndim(z) == 0:
        return 0.5 * (1.0 + math.erf(float(z) / _SQRT2))
    z = np.asarray(z, dtype=float)
    return 0.5 * (1.0 + _vector_erf(z / _SQRT2))


def gaussian_log_density(inputs: np.ndarray, mean: np.ndarray, covariance: np.ndarray) -> np.ndarray:
    """Evaluate the multivariate normal log-density on a batch of columns.

    Uses a Cholesky factorization of the covariance for numerical stability.

    Args:
        inputs: Points to evaluate, shape (d,) for a single point or (d, M)
            for M points stored as columns.
        mean: Mean vector, shape (d,).
        covariance: Covariance matrix, shape (d, d). Must be positive definite.

    Returns:
        Log-density values, shape (M,) (shape (1,) for a single point).

    Raises:
        ValueError: If shapes are incompatible or the covariance is not
            positive definite.

    Examples:
        >>> gaussian_log_density(np.array([0.0]), np.array([0.0]), np.eye(1))
        array([-0.91893853])
    """
    mean = np.atleast_1d(np.asarray(mean, dtype=float))
    covariance = np.atleast_2d(np.asarray(covariance, dtype=float))
    inputs = np.asarray(inputs, dtype=float)
    if inputs.ndim <= 1:
        inputs = inputs.reshape(-1, 1)

    d = len(mean)
    if inputs.shape[0] != d:
        raise ValueError(f"inputs shape {inputs.shape} incompatible with mean shape {mean.shape}")
    if covariance.shape != (d, d):
        raise ValueError(f"cov shape {covariance.shape} incompatible with mean shape {mean.shape}")

    try:
        L = np.linalg.cholesky(covariance)
    except np.linalg.LinAlgError:
        raise ValueError("Covariance matrix is not positive definite")

    diff = inputs - mean[:, np.newaxis]
    y = np.linalg.solve(L, diff)
    log_det = np.sum(np.log(np.diag(L)))

    return -0.5 * d * np.log(2 * np.pi) - log_det - 0.5 * np.sum(y * y, axis=0)


def ensure_1d(x: np.ndarray) -> np.ndarray:
    """Ensure array is 1D, raising error if not.

    Args:
        x: Input array.

    Returns:
        1D array.

    Raises:
        ValueError: If array has more than one dimension.
    """
    x = np.asarray(x)
    if x.ndim == 0:
        return x.reshape(1)
    if x.ndim > 1:
        raise ValueError(f"Expected 1D array, got shape {x.shape}")
    return x
