"""Small building blocks for task flows: errors, a scope guard, a write-once
cell and a spin lock."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

__all__ = [
    "UsedParaError",
    "EmptyParaError",
    "ScopeGuard",
    "SingleAssign",
    "SpinLock",
]


class UsedParaError(RuntimeError):
    """Raised when a task or task group is used more than once."""

    def __init__(self) -> None:
        super().__init__("Fatal error! Can't use a para or paragroup more than one time!")


class EmptyParaError(RuntimeError):
    """Raised when an empty task or task group is used."""

    def __init__(self) -> None:
        super().__init__("Fatal error! Can't use an empty para or paragroup!")


class ScopeGuard:
    """Context manager that runs ``on_enter`` on entry and ``on_exit`` on every exit."""

    def __init__(
        self,
        on_exit: Callable[[], Any],
        on_enter: Callable[[], Any] | None = None,
    ) -> None:
        if not callable(on_exit):
            raise TypeError("on_exit must be callable")
        if on_enter is not None and not callable(on_enter):
            raise TypeError("on_enter must be callable")
        self._on_exit = on_exit
        self._on_enter = on_enter

    def __enter__(self) -> ScopeGuard:
        if self._on_enter is not None:
            self._on_enter()
        return self

    def __exit__(self, *args: Any) -> bool:
        self._on_exit()
        return False


_UNSET = object()


class SingleAssign:
    """A cell that keeps the first value assigned to it and ignores later ones."""

    def __init__(self, value: Any = _UNSET) -> None:
        self._lock = threading.Lock()
        self._assigned = value is not _UNSET
        self._value = value if self._assigned else None

    @property
    def assigned(self) -> bool:
        return self._assigned

    def assign(self, value: Any) -> SingleAssign:
        """Store ``value`` unless a value was stored before; return self."""
        with self._lock:
            if not self._assigned:
                self._value = value
                self._assigned = True
        return self

    def get(self) -> Any:
        """Return the stored value, or None if nothing was assigned."""
        return self._value


class SpinLock:
    """A lock that busy-waits, yielding the processor, until it is free."""

    def __init__(self) -> None:
        self._flag = threading.Lock()

    def lock(self) -> None:
        while not self._flag.acquire(blocking=False):
            time.sleep(0)

    def try_lock(self) -> bool:
        return self._flag.acquire(blocking=False)

    def unlock(self) -> None:
        try:
            self._flag.release()
        except RuntimeError:
            pass

    @property
    def locked(self) -> bool:
        return self._flag.locked()

    def __enter__(self) -> SpinLock:
        self.lock()
        return self

    def __exit__(self, *args: Any) -> bool:
        self.unlock()
        return False