from __future__ import annotations

import time
from collections import deque
from dataclasses import asdict, dataclass
from typing import Any, Deque, Dict, List, Tuple

from .coercion import dtype_label, shape_of

OUTCOMES: Tuple[str, ...] = ("hit", "miss", "error")


@dataclass
class CacheRecord:
    op: str
    outcome: str
    trace_tag: str
    shape: Tuple[int, int] | None
    dtype: str | None
    version: int | None
    solver: str | None
    error: str | None
    timestamp: float


class CacheObservability:
    def __init__(self, *, history_limit: int = 64) -> None:
        self._counter = 0
        self._last: dict[str, dict[str, Any]] = {}
        self._history: Deque[dict[str, Any]] = deque(maxlen=max(1, int(history_limit)))
        self._counts: Dict[str, int] = {outcome: 0 for outcome in OUTCOMES}

    def clear(self) -> None:
        self._last.clear()
        self._history.clear()
        for outcome in OUTCOMES:
            self._counts[outcome] = 0

    def set_history_limit(self, value: int) -> int:
        limit = max(1, int(value))
        self._history = deque(self._history, maxlen=limit)
        return limit

    def _record(self, record: CacheRecord) -> dict[str, Any]:
        payload = asdict(record)
        self._last["__latest__"] = payload
        self._last[record.outcome] = payload
        self._history.append(payload)
        self._counts[record.outcome] += 1
        return payload

    def record(
        self,
        op: str,
        outcome: str,
        *,
        matrix: Any = None,
        version: int | None = None,
        solver: str | None = None,
        error: BaseException | None = None,
    ) -> dict[str, Any]:
        if outcome not in OUTCOMES:
            raise ValueError(f"unknown cache outcome {outcome!r}; expected one of {OUTCOMES}")

        self._counter += 1
        record = CacheRecord(
            op=op,
            outcome=outcome,
            trace_tag=f"{op}:{outcome}:{self._counter}",
            shape=shape_of(matrix),
            dtype=dtype_label(matrix),
            version=version,
            solver=solver,
            error=f"{type(error).__name__}: {error}" if error is not None else None,
            timestamp=time.time(),
        )
        return self._record(record)

    def last(self, outcome: str | None = None) -> dict[str, Any] | None:
        key = outcome or "__latest__"
        payload = self._last.get(key)
        if payload is None:
            return None
        return dict(payload)

    def history(self) -> List[dict[str, Any]]:
        return [dict(item) for item in self._history]

    def stats(self) -> Dict[str, int]:
        return dict(self._counts)


# Module-level singleton helpers (optional convenience)
_default_observability = CacheObservability()


def default_instance() -> CacheObservability:
    return _default_observability
