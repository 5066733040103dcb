"""Concatenation of tuples and loose items into one flat tuple."""

from __future__ import annotations

from itertools import chain
from typing import Any

__all__ = ["merge_tuples"]


def merge_tuples(*args: Any) -> tuple:
    """Join the arguments into one tuple.

    Each argument that is a tuple contributes its items; any other argument
    contributes itself. Only one level is flattened.
    """
    return tuple(chain.from_iterable(arg if isinstance(arg, tuple) else (arg,) for arg in args))