"""Column types for MySQL tables: character, text, bit, binary, JSON and medium integers.

Each type knows its column definition (``ddl``), how to turn a Python value
into the value handed to a database driver (``bind``), and how to turn a value
read back from a result set into a Python value (``load``).
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

__all__ = [
    "SqlType",
    "CharType",
    "VarcharType",
    "TextKind",
    "TextType",
    "BitType",
    "BinaryType",
    "VarBinaryType",
    "JsonType",
    "MediumIntType",
]

_MAX_CHAR_LENGTH = 0xFF
_MAX_VARCHAR_LENGTH = 0xFFFF
_MAX_BINARY_LENGTH = 0xFFFFFFFF
_MAX_BIT_LENGTH = 64


def _check_length(length: int, maximum: int, what: str) -> None:
    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f"{what} length must be an integer, got {length!r}")
    if not 0 <= length <= maximum:
        raise ValueError(f"{what} length must be between 0 and {maximum}, got {length}")


def _as_text(raw: Any) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("utf-8")
    if isinstance(raw, str):
        return raw
    raise TypeError(f"expected text, got {type(raw).__name__}")


def _as_bytes(raw: Any) -> bytes:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw)
    if isinstance(raw, str):
        return raw.encode("utf-8")
    raise TypeError(f"expected bytes, got {type(raw).__name__}")


def _require_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    return value


class SqlType(ABC):
    """A column type. String-valued by default; subclasses override as needed."""

    @abstractmethod
    def ddl(self) -> str:
        """Return the type fragment used in a CREATE TABLE column definition."""

    def bind(self, value: Any) -> Any:
        """Convert a Python value into the parameter passed to the driver."""
        return _require_str(value)

    def load(self, raw: Any) -> Any:
        """Convert a value read from a result set into a Python value."""
        return _as_text(raw)


@dataclass(frozen=True)
class CharType(SqlType):
    """Fixed-length ``CHAR(n)`` column holding text."""

    length: int

    def __post_init__(self) -> None:
        _check_length(self.length, _MAX_CHAR_LENGTH, "CHAR")

    def ddl(self) -> str:
        return f" CHAR({self.length}) "


@dataclass(frozen=True)
class VarcharType(SqlType):
    """Variable-length ``VARCHAR(n)`` column holding text."""

    length: int

    def __post_init__(self) -> None:
        _check_length(self.length, _MAX_VARCHAR_LENGTH, "VARCHAR")

    def ddl(self) -> str:
        return f" VARCHAR({self.length}) "


class TextKind(enum.Enum):
    """Sizes of text column."""

    TINY = "TINYTEXT"
    MEDIUM = "MEDIUMTEXT"
    LONG = "LONGTEXT"


@dataclass(frozen=True)
class TextType(SqlType):
    """A ``TINYTEXT``, ``MEDIUMTEXT`` or ``LONGTEXT`` column."""

    kind: TextKind

    def __post_init__(self) -> None:
        if not isinstance(self.kind, TextKind):
            raise TypeError(f"kind must be a TextKind, got {self.kind!r}")

    def ddl(self) -> str:
        return f" {self.kind.value} "


@dataclass(frozen=True)
class BitType(SqlType):
    """A ``BIT(n)`` column; values are non-negative integers of at most n bits."""

    length: int

    def __post_init__(self) -> None:
        _check_length(self.length, _MAX_BIT_LENGTH, "BIT")
        if self.length == 0:
            raise ValueError("BIT length must be at least 1")

    @property
    def mask(self) -> int:
        return (1 << self.length) - 1

    def ddl(self) -> str:
        return f" BIT({self.length}) "

    def bind(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return value & self.mask

    def load(self, raw: Any) -> int:
        if isinstance(raw, (bytes, bytearray, memoryview)):
            number = int.from_bytes(bytes(raw), "big")
        elif isinstance(raw, int) and not isinstance(raw, bool):
            number = raw
        else:
            raise TypeError(f"expected int or bytes, got {type(raw).__name__}")
        return number & self.mask


@dataclass(frozen=True)
class BinaryType(SqlType):
    """Fixed-length ``BINARY(n)`` column holding bytes."""

    length: int

    def __post_init__(self) -> None:
        _check_length(self.length, _MAX_BINARY_LENGTH, "BINARY")

    def ddl(self) -> str:
        return f" BINARY({self.length}) "

    def bind(self, value: Any) -> bytes:
        return _as_bytes(value)

    def load(self, raw: Any) -> bytes:
        return _as_bytes(raw)


@dataclass(frozen=True)
class VarBinaryType(SqlType):
    """Variable-length ``VARBINARY(n)`` column holding bytes."""

    length: int

    def __post_init__(self) -> None:
        _check_length(self.length, _MAX_BINARY_LENGTH, "VARBINARY")

    def ddl(self) -> str:
        return f" VARBINARY({self.length}) "

    def bind(self, value: Any) -> bytes:
        return _as_bytes(value)

    def load(self, raw: Any) -> bytes:
        return _as_bytes(raw)


@dataclass(frozen=True)
class JsonType(SqlType):
    """A ``JSON`` column, carried as its text form."""

    def ddl(self) -> str:
        return "JSON"


@dataclass(frozen=True)
class MediumIntType(SqlType):
    """A ``MEDIUMINT`` column, signed or unsigned."""

    unsigned: bool = False

    def ddl(self) -> str:
        return " MEDIUMINT UNSIGNED " if self.unsigned else " MEDIUMINT "

    def bind(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return value

    def load(self, raw: Any) -> int:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("ascii")
        return int(raw)