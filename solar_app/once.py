"""Thread-safe compute-once cell."""

import threading
from collections.abc import Callable
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class OnceCell(Generic[T]):
    """
    Holds a value computed by the first caller of get_or_init.

    Each cell has its own lock, so initializing one cell may initialize
    another without deadlocking. If the factory raises, the exception is
    kept and re-raised to every later caller; the factory never runs twice.
    """

    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._done = False
        self._value: Optional[T] = None
        self._error: Optional[BaseException] = None

    def get_or_init(self, factory: Callable[[], T]) -> T:
        if not self._done:
            with self._lock:
                if not self._done:
                    try:
                        self._value = factory()
                    except BaseException as e:
                        self._error = e
                        raise
                    finally:
                        self._done = True

        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    @property
    def is_set(self) -> bool:
        """Whether the value was materialized successfully."""
        return self._done and self._error is None

    def peek(self) -> Optional[T]:
        """Return the value if materialized, without initializing it."""
        return self._value if self.is_set else None
