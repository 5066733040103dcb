"""Per-thread accumulation and storage, hazard pointers and bounded queues.

The per-thread containers hold a fixed number of slots (the concurrency). Each
thread that touches a container is given the next free slot the first time
and keeps it afterwards. A thread that arrives when every slot is taken gets
a RuntimeError.
"""

from __future__ import annotations

import copy
import os
import threading
from collections import deque
from typing import Any, Callable

__all__ = [
    "Accumulator",
    "ThreadLocalVar",
    "HazardPointerOwner",
    "MisoQueue",
    "SimoQueue",
]


def _default_concurrency() -> int:
    return os.cpu_count() or 1


class _Slots:
    """Hands out one slot index per thread, up to a fixed number of slots."""

    def __init__(self, concurrency: int | None) -> None:
        if concurrency is None:
            concurrency = _default_concurrency()
        if isinstance(concurrency, bool) or not isinstance(concurrency, int):
            raise TypeError(f"concurrency must be an integer, got {concurrency!r}")
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self.size = concurrency
        self._ids: dict[int, int] = {}
        self._lock = threading.Lock()

    def index(self) -> int:
        ident = threading.get_ident()
        found = self._ids.get(ident)
        if found is not None:
            return found
        with self._lock:
            found = self._ids.get(ident)
            if found is not None:
                return found
            if len(self._ids) >= self.size:
                raise RuntimeError(
                    f"more threads than the {self.size} slots this container holds"
                )
            found = len(self._ids)
            self._ids[ident] = found
            return found


class Accumulator:
    """Folds values per thread with a binary function and combines them on demand.

    Every slot starts as a copy of ``value``; ``get`` folds ``value`` with every
    slot in turn.
    """

    def __init__(
        self,
        functor: Callable[[Any, Any], Any],
        value: Any = 0,
        *,
        concurrency: int | None = None,
    ) -> None:
        if not callable(functor):
            raise TypeError("functor must be callable")
        self._functor = functor
        self._value = value
        self._slots = _Slots(concurrency)
        self._values = [copy.copy(value) for _ in range(self._slots.size)]

    @property
    def concurrency(self) -> int:
        return self._slots.size

    def increase(self, value: Any) -> Accumulator:
        """Fold ``value`` into the calling thread's slot; return self."""
        index = self._slots.index()
        self._values[index] = self._functor(self._values[index], value)
        return self

    def reset(self, value: Any) -> None:
        """Set every slot to a copy of ``value``."""
        self._values = [copy.copy(value) for _ in range(self._slots.size)]

    def get(self) -> Any:
        """Return the initial value folded with every slot."""
        result = self._value
        for item in list(self._values):
            result = self._functor(result, item)
        return result


class ThreadLocalVar:
    """One value per thread, each made by ``factory`` (None when there is none)."""

    def __init__(
        self,
        factory: Callable[[], Any] | None = None,
        *,
        concurrency: int | None = None,
    ) -> None:
        if factory is not None and not callable(factory):
            raise TypeError("factory must be callable")
        self._factory = factory
        self._slots = _Slots(concurrency)
        self._values = [self._fresh() for _ in range(self._slots.size)]

    def _fresh(self) -> Any:
        return None if self._factory is None else self._factory()

    @property
    def concurrency(self) -> int:
        return self._slots.size

    def current(self) -> Any:
        """Return the calling thread's value."""
        return self._values[self._slots.index()]

    def set_current(self, value: Any) -> None:
        """Replace the calling thread's value."""
        self._values[self._slots.index()] = value

    def reset(self) -> None:
        """Give every slot a fresh value from the factory."""
        self._values = [self._fresh() for _ in range(self._slots.size)]

    def for_each(self, func: Callable[[Any], Any]) -> None:
        """Call ``func`` with every slot's value, in slot order."""
        if not callable(func):
            raise TypeError("for_each needs a callable")
        for value in list(self._values):
            func(value)


class HazardPointerOwner:
    """One published pointer per thread, for checking whether others still use an object."""

    def __init__(self, *, concurrency: int | None = None) -> None:
        self._slots = _Slots(concurrency)
        self._pointers: list[Any] = [None] * self._slots.size

    @property
    def concurrency(self) -> int:
        return self._slots.size

    def get_hazard_pointer(self) -> Any:
        """Return the object the calling thread has published, or None."""
        return self._pointers[self._slots.index()]

    def set_hazard_pointer(self, pointer: Any) -> None:
        """Publish ``pointer`` as in use by the calling thread (None clears it)."""
        self._pointers[self._slots.index()] = pointer

    def outstanding_hazard_pointer_for(self, pointer: Any) -> bool:
        """Return True if a thread other than the caller has published ``pointer``."""
        if pointer is None:
            return False
        own = self._slots.index()
        return any(
            published is pointer
            for index, published in enumerate(list(self._pointers))
            if index != own
        )


class _BoundedQueue:
    """A FIFO of fixed capacity: 2**n slots, of which 2**n - 1 may be filled."""

    def __init__(self, n: int) -> None:
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"n must be an integer, got {n!r}")
        if n < 0:
            raise ValueError(f"n must not be negative, got {n}")
        self._capacity = (1 << n) - 1
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def _push(self, value: Any) -> bool:
        with self._lock:
            if len(self._items) >= self._capacity:
                return False
            self._items.append(value)
            return True

    def _pop(self) -> Any:
        with self._lock:
            if not self._items:
                raise IndexError("pop from an empty queue")
            return self._items.popleft()

    def _size(self) -> int:
        return len(self._items)


class MisoQueue(_BoundedQueue):
    """Bounded queue for many producers and a single consumer."""

    def push(self, value: Any) -> bool:
        """Append ``value``; return False, leaving the queue unchanged, if it is full."""
        return self._push(value)

    def pop(self) -> Any:
        """Remove and return the oldest value; raise IndexError if the queue is empty."""
        return self._pop()

    def __len__(self) -> int:
        return self._size()


class SimoQueue(_BoundedQueue):
    """Bounded queue for a single producer and many consumers."""

    def push(self, value: Any) -> bool:
        """Append ``value``; return False, leaving the queue unchanged, if it is full."""
        return self._push(value)

    def pop(self) -> Any:
        """Remove and return the oldest value; raise IndexError if the queue is empty."""
        return self._pop()

    def __len__(self) -> int:
        return self._size()