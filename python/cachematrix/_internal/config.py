from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from .solvers import inv as _inv

_TRUTHY = frozenset({"1", "true", "yes", "on"})

DEBUG_CHECKS_ENV_VAR = "CACHEMATRIX_DEBUG_CHECKS"
TRACE_LIMIT_ENV_VAR = "CACHEMATRIX_TRACE_LIMIT"
DEFAULT_TRACE_LIMIT = 64


def _env_flag(name: str) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return False
    return raw.strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


class Settings:
    """Process-wide settings, seeded from the environment on first import."""

    def __init__(self, *, default_solver: Callable[..., Any]) -> None:
        self._builtin_solver = default_solver
        self._solver: Callable[..., Any] = default_solver
        self.debug_checks: bool = _env_flag(DEBUG_CHECKS_ENV_VAR)
        self.trace_limit: int = _env_int(TRACE_LIMIT_ENV_VAR, DEFAULT_TRACE_LIMIT)

    def get_default_solver(self) -> Callable[..., Any]:
        return self._solver

    def set_default_solver(self, solver: Callable[..., Any] | None) -> Callable[..., Any]:
        if solver is None:
            solver = self._builtin_solver
        if not callable(solver):
            raise TypeError(f"solver must be callable, got {type(solver).__name__}")
        self._solver = solver
        return solver

    @contextmanager
    def debug_checks_override(self, enabled: bool) -> Iterator[None]:
        prev = self.debug_checks
        self.debug_checks = bool(enabled)
        try:
            yield
        finally:
            self.debug_checks = prev


settings = Settings(default_solver=_inv)
