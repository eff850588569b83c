"""Matrices that remember their inverse.

`CacheMatrix` holds a matrix and a cached inverse; replacing the matrix
clears the cache. `cache_solve` returns the cached inverse when there is one
and computes (and caches) it otherwise.
"""
from __future__ import annotations

__version__ = "0.1.0"

import logging
from typing import Any, Callable

from ._internal import observability as _observability
from ._internal.config import settings as _settings
from ._internal.container import CacheMatrix, make_cache_matrix
from ._internal.cache_solve import cache_solve
from ._internal.solvers import inv
from ._internal.warnings import (
    CacheMatrixWarning,
    CacheMatrixVerificationWarning,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

_observability.default_instance().set_history_limit(_settings.trace_limit)


def set_debug_checks(enabled: bool) -> bool:
    """Enable/disable verification of inverses stored with `CacheMatrix.set_inverse`.

    Checks only warn (`CacheMatrixVerificationWarning`); they never refuse a write.
    Seeded from the CACHEMATRIX_DEBUG_CHECKS environment variable.
    """
    _settings.debug_checks = bool(enabled)
    return _settings.debug_checks


def get_debug_checks() -> bool:
    return _settings.debug_checks


def debug_checks(enabled: bool = True) -> Any:
    """Context manager that temporarily toggles debug checks."""
    return _settings.debug_checks_override(enabled)


def set_default_solver(solver: Callable[..., Any] | None) -> Callable[..., Any]:
    """Install the solver `cache_solve` uses when none is passed. `None` restores `inv`."""
    return _settings.set_default_solver(solver)


def get_default_solver() -> Callable[..., Any]:
    return _settings.get_default_solver()


def last_cache_trace(outcome: str | None = None) -> dict[str, Any] | None:
    """Return the most recent cache trace, optionally for one outcome ("hit", "miss", "error")."""
    return _observability.default_instance().last(outcome)


def cache_traces() -> list[dict[str, Any]]:
    return _observability.default_instance().history()


def cache_stats() -> dict[str, int]:
    return _observability.default_instance().stats()


def clear_cache_traces() -> None:
    _observability.default_instance().clear()


__all__ = [
    "CacheMatrix",
    "make_cache_matrix",
    "cache_solve",
    "inv",
    "set_debug_checks",
    "get_debug_checks",
    "debug_checks",
    "set_default_solver",
    "get_default_solver",
    "last_cache_trace",
    "cache_traces",
    "cache_stats",
    "clear_cache_traces",
    "CacheMatrixWarning",
    "CacheMatrixVerificationWarning",
]
