"""Runtime settings for pfcore.

Two settings are read from the environment at import time and can be
overridden in code:

- ``PFCORE_DEBUG`` (``1``/``true``/``yes``/``on``): re-check population
  invariants after every mutation.
- ``PFCORE_SEED``: seed used by random sources created without one.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

DEBUG_ENV_VAR = "PFCORE_DEBUG"
SEED_ENV_VAR = "PFCORE_SEED"
FALLBACK_SEED = 1

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in _TRUTHY


def _env_seed(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        seed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    if seed < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {seed}")
    return seed


_debug_enabled: bool = _env_flag(DEBUG_ENV_VAR)
_seed_override: Optional[int] = None


def is_debug_enabled() -> bool:
    """Return whether invariant checking after mutations is enabled."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable debug mode."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily enable or disable debug mode.

    Example
    -------
    >>> with debug_context(True):
    ...     dist.set_uniform(10)  # invariants checked here
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev


def default_seed() -> int:
    """Seed for random sources created without an explicit one.

    Precedence: ``set_default_seed`` override, then ``PFCORE_SEED``, then 1.
    The environment is read on every call so tests can monkeypatch it.

    Raises:
        ValueError: If ``PFCORE_SEED`` is not a non-negative integer.
    """
    if _seed_override is not None:
        return _seed_override
    seed = _env_seed(SEED_ENV_VAR)
    return FALLBACK_SEED if seed is None else seed


def set_default_seed(seed: Optional[int]) -> None:
    """Override the default seed; ``None`` falls back to the environment."""
    if seed is not None and seed < 0:
        raise ValueError(f"seed must be non-negative, got {seed}")
    global _seed_override
    _seed_override = None if seed is None else int(seed)
