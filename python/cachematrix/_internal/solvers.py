"""External inversion capability.

`inv` is the default solver used by `cache_solve`. Any callable with the
signature ``solver(matrix, *args, **options)`` can stand in for it.
"""
from __future__ import annotations

from typing import Any

import numpy as np

from .coercion import as_square_matrix


def inv(a: Any, *, check_finite: bool = True) -> np.ndarray:
    """Return the inverse of a square matrix.

    Args:
        a: A square matrix (ndarray or nested sequence).
        check_finite: Reject NaN/inf entries before inverting.

    Raises:
        numpy.linalg.LinAlgError: `a` is not 2D, not square, or singular.
        ValueError: `check_finite` is set and `a` holds non-finite entries.
    """
    array = as_square_matrix(a)
    if check_finite and array.size and not np.all(np.isfinite(array)):
        raise ValueError("Matrix input must not contain infs or NaNs.")
    return np.linalg.inv(array)


def solver_name(solver: Any) -> str:
    name = getattr(solver, "__qualname__", None) or getattr(solver, "__name__", None)
    if name is None:
        return type(solver).__name__
    module = getattr(solver, "__module__", None)
    return f"{module}.{name}" if module else str(name)
