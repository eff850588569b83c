from __future__ import annotations

import logging
from typing import Any, Callable

from . import observability as _observability
from .config import settings as _settings
from .solvers import solver_name

logger = logging.getLogger(__name__)

_REQUIRED_METHODS = ("get", "get_inverse", "set_inverse")


def _check_container(container: Any) -> None:
    missing = [name for name in _REQUIRED_METHODS if not callable(getattr(container, name, None))]
    if missing:
        raise TypeError(
            f"cache_solve expects a CacheMatrix-like object; {type(container).__name__} "
            f"is missing {', '.join(missing)}"
        )


def cache_solve(
    container: Any,
    *args: Any,
    solver: Callable[..., Any] | None = None,
    **options: Any,
) -> Any:
    """Return the inverse of the matrix held by `container`.

    A cached inverse is returned as-is (and a "getting cached inverse" record
    is logged). Otherwise the current value is passed to `solver` together
    with `args` and `options`, the result is cached on the container and
    returned. Solver errors propagate unchanged and leave the cache empty.
    """
    _check_container(container)
    if solver is None:
        solver = _settings.get_default_solver()
    elif not callable(solver):
        raise TypeError(f"solver must be callable, got {type(solver).__name__}")

    obs = _observability.default_instance()
    lock = getattr(container, "lock", None)
    if lock is None:
        return _resolve(container, args, options, solver=solver, obs=obs)
    with lock:
        return _resolve(container, args, options, solver=solver, obs=obs)


def _resolve(
    container: Any,
    args: tuple[Any, ...],
    options: dict[str, Any],
    *,
    solver: Callable[..., Any],
    obs: _observability.CacheObservability,
) -> Any:
    inverse = container.get_inverse()
    version = getattr(container, "version", None)
    if inverse is not None:
        logger.info("getting cached inverse")
        obs.record("cache_solve", "hit", matrix=inverse, version=version)
        return inverse

    value = container.get()
    name = solver_name(solver)
    try:
        computed = solver(value, *args, **options)
    except Exception as exc:
        logger.debug("inversion failed with %s; cache left empty", type(exc).__name__)
        obs.record("cache_solve", "error", matrix=value, version=version, solver=name, error=exc)
        raise

    # A solver that replaced the value under us must not repopulate the cache.
    if version is not None and getattr(container, "version", None) != version:
        logger.debug("matrix changed during inversion (version %s); result not cached", version)
        obs.record("cache_solve", "miss", matrix=computed, version=version, solver=name)
        return computed

    container.set_inverse(computed)
    logger.debug("cached inverse computed by %s", name)
    obs.record("cache_solve", "miss", matrix=computed, version=version, solver=name)
    stored = container.get_inverse()
    return computed if stored is None else stored
