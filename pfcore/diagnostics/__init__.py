"""Diagnostics and debugging utilities for pfcore."""

from ..config import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)
from .core import (
    assert_monotone,
    assert_normalized,
    check_population,
)

__all__ = [
    "assert_normalized",
    "assert_monotone",
    "check_population",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
