from __future__ import annotations

import logging
import threading
import warnings
from typing import Any

import numpy as np

from . import formatting as _formatting
from .coercion import empty_matrix, owned_copy, shape_of
from .config import settings as _settings
from .warnings import CacheMatrixVerificationWarning

logger = logging.getLogger(__name__)


def _verify_inverse(value: Any, inverse: Any) -> None:
    """Debug-only check that `inverse` inverts `value`. Warns, never raises."""
    if not (isinstance(value, np.ndarray) and isinstance(inverse, np.ndarray)):
        warnings.warn(
            "cached inverse could not be verified: value and inverse must both be arrays",
            CacheMatrixVerificationWarning,
            stacklevel=3,
        )
        return

    if value.ndim != 2 or value.shape[0] != value.shape[1] or inverse.shape != value.shape:
        warnings.warn(
            f"cached inverse shape {inverse.shape} does not match value shape {value.shape}",
            CacheMatrixVerificationWarning,
            stacklevel=3,
        )
        return

    try:
        product = value @ inverse
        ok = bool(np.allclose(product, np.eye(value.shape[0])))
    except TypeError:
        ok = False
    if not ok:
        warnings.warn(
            "cached inverse does not invert the current value (value @ inverse != I)",
            CacheMatrixVerificationWarning,
            stacklevel=3,
        )


class CacheMatrix:
    """A matrix together with a cached copy of its inverse.

    Replacing the matrix with `set` always clears the cached inverse in the
    same step. `set_inverse` trusts its caller: it stores whatever it is given
    as the inverse of the current value, so only code that actually computed
    the inverse of `get()` (normally `cache_solve`) should call it. With debug
    checks enabled a mismatch is reported as a warning, but still stored.

    Values are copied on the way in. Array-like input is stored as a
    read-only ndarray so it cannot drift away from its cached inverse.
    """

    def __init__(self, x: Any = None) -> None:
        self.lock = threading.RLock()
        self._value: Any = empty_matrix() if x is None else owned_copy(x)
        self._inverse: Any | None = None
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    @property
    def shape(self) -> tuple[int, int] | None:
        return shape_of(self._value)

    def set(self, y: Any) -> None:
        value = owned_copy(y)
        with self.lock:
            self._value = value
            self._inverse = None
            self._version += 1
        logger.debug("matrix value replaced (version=%d); cached inverse cleared", self._version)

    def get(self) -> Any:
        return self._value

    def set_inverse(self, inverse: Any) -> None:
        stored = owned_copy(inverse)
        with self.lock:
            if _settings.debug_checks:
                _verify_inverse(self._value, stored)
            self._inverse = stored

    def get_inverse(self) -> Any | None:
        return self._inverse

    def has_inverse(self) -> bool:
        return self._inverse is not None

    def clear_inverse(self) -> None:
        with self.lock:
            self._inverse = None

    def __str__(self) -> str:
        return _formatting.container_str(self)

    def __repr__(self) -> str:
        return _formatting.container_repr(self)


def make_cache_matrix(x: Any = None) -> CacheMatrix:
    """Create a `CacheMatrix` holding `x` (an empty 0x0 matrix by default)."""
    return CacheMatrix(x)
