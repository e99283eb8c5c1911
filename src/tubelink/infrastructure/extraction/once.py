"""Thread-safe initialize-exactly-once holder.

The first caller of ``get()`` runs the factory under a lock; concurrent
callers block on the lock and then receive the same instance. After
construction the value is read without locking.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class OnceInitializer(Generic[T]):
    """Runs *factory* exactly once and hands out its result.

    A factory failure is recorded and re-raised to every later caller;
    the factory is never retried.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._initialized = False
        self._value: T | None = None
        self._error: BaseException | None = None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def get(self) -> T:
        if not self._initialized:
            with self._lock:
                # Double-check after acquiring lock
                if not self._initialized:
                    if self._error is not None:
                        raise self._error
                    try:
                        self._value = self._factory()
                    except BaseException as exc:
                        self._error = exc
                        raise
                    self._initialized = True
        return self._value  # type: ignore[return-value]
