"""
Collapses concurrent cache fills for the same key into a single fill.
"""

import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, Hashable


class InFlightGuard:
    """Runs at most one fill per key at a time.

    Callers arriving while a fill for their key is running wait for it and
    receive the same result, or the same exception.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: Dict[Hashable, Future] = {}

    def run(self, key: Hashable, fill: Callable[[], Any]) -> Any:
        with self._lock:
            future = self._pending.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._pending[key] = future

        if not owner:
            return future.result()

        try:
            result = fill()
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._lock:
                self._pending.pop(key, None)

    def is_pending(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._pending

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)
