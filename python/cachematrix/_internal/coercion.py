from __future__ import annotations

import copy
from collections.abc import Sequence as _SequenceABC
from typing import Any

import numpy as np


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def empty_matrix() -> np.ndarray:
    return freeze(np.empty((0, 0), dtype=np.float64))


def freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


def owned_copy(candidate: Any) -> Any:
    """Return a private copy of `candidate` suitable for storing in a container.

    Array-like input becomes a read-only ndarray. Anything NumPy cannot turn
    into a rectangular numeric array (ragged rows, arbitrary objects) is kept
    as a deep copy, unvalidated; shape checks happen at the solver boundary.
    """
    if candidate is None:
        return None

    if isinstance(candidate, np.ndarray):
        return freeze(np.array(candidate, copy=True))

    if is_sequence_like(candidate) or hasattr(candidate, "__array__"):
        try:
            array = np.array(candidate, copy=True)
        except (TypeError, ValueError):
            array = None
        if array is not None and array.dtype != np.dtype(object):
            return freeze(array)

    return copy.deepcopy(candidate)


def as_square_matrix(candidate: Any) -> np.ndarray:
    """Coerce `candidate` to a 2D square ndarray, raising LinAlgError otherwise."""
    try:
        array = np.asarray(candidate)
    except (TypeError, ValueError) as exc:
        raise np.linalg.LinAlgError(f"Matrix input is not array-like: {exc}") from exc

    if array.ndim != 2:
        raise np.linalg.LinAlgError(
            f"Matrix input must be a 2D square structure (got ndim={array.ndim})."
        )
    if array.shape[0] != array.shape[1]:
        raise np.linalg.LinAlgError(
            f"Matrix input must be square (rows == columns), got shape {array.shape}."
        )
    return array


def shape_of(obj: Any) -> tuple[int, int] | None:
    shape = getattr(obj, "shape", None)
    if isinstance(shape, tuple) and len(shape) == 2:
        return int(shape[0]), int(shape[1])
    return None


def dtype_label(obj: Any) -> str | None:
    dtype_attr = getattr(obj, "dtype", None)
    if dtype_attr is not None:
        return str(dtype_attr)
    if obj is None:
        return None
    return type(obj).__name__
