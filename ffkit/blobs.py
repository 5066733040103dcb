"""MySQL ``BLOB`` and ``DECIMAL`` column types."""

from __future__ import annotations

import enum
import io
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Any, BinaryIO

from .sqltypes import SqlType

__all__ = ["BlobKind", "BlobType", "DecimalType"]

_MAX_PRECISION = 65
_MAX_SCALE = 30
_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


class BlobKind(enum.Enum):
    """Sizes of blob column."""

    TINY = "TINYBLOB"
    BLOB = "BLOB"
    MEDIUM = "MEDIUMBLOB"
    LONG = "LONGBLOB"


@dataclass(frozen=True)
class BlobType(SqlType):
    """A blob column; values are bound from bytes or streams and read back as streams."""

    kind: BlobKind = BlobKind.BLOB

    def __post_init__(self) -> None:
        if not isinstance(self.kind, BlobKind):
            raise TypeError(f"kind must be a BlobKind, got {self.kind!r}")

    def ddl(self) -> str:
        return f" {self.kind.value} "

    def bind(self, value: Any) -> bytes:
        if hasattr(value, "read"):
            value = value.read()
        if isinstance(value, str):
            return value.encode("utf-8")
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        raise TypeError(f"expected bytes, str or a readable stream, got {type(value).__name__}")

    def load(self, raw: Any) -> BinaryIO:
        if hasattr(raw, "read"):
            return raw
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        if isinstance(raw, (bytes, bytearray, memoryview)):
            return io.BytesIO(bytes(raw))
        raise TypeError(f"expected bytes, str or a readable stream, got {type(raw).__name__}")


@dataclass(frozen=True)
class DecimalType(SqlType):
    """A ``DECIMAL(P, D)`` column; values are kept rounded to D decimal places."""

    precision: int
    scale: int

    def __post_init__(self) -> None:
        for name in ("precision", "scale"):
            number = getattr(self, name)
            if isinstance(number, bool) or not isinstance(number, int):
                raise TypeError(f"{name} must be an integer, got {number!r}")
        if not 1 <= self.precision <= _MAX_PRECISION:
            raise ValueError(f"precision should be between 1 to {_MAX_PRECISION}.")
        if not 0 <= self.scale <= _MAX_SCALE:
            raise ValueError(f"scale should be between 0 to {_MAX_SCALE}.")
        if self.precision < self.scale:
            raise ValueError("precision must be >= scale")

    def coerce(self, value: Any) -> Decimal:
        """Convert ``value`` to a Decimal rounded half up to this type's scale."""
        if isinstance(value, bool):
            raise TypeError("expected a number, got bool")
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode("ascii")
        try:
            if isinstance(value, Decimal):
                number = value
            elif isinstance(value, int):
                number = Decimal(value)
            elif isinstance(value, float):
                number = Decimal(repr(value))
            elif isinstance(value, str):
                number = Decimal(value.strip())
            else:
                raise TypeError(f"expected a number or str, got {type(value).__name__}")
        except InvalidOperation as exc:
            raise ValueError(f"not a decimal number: {value!r}") from exc
        if not number.is_finite():
            raise ValueError(f"not a finite decimal number: {value!r}")
        try:
            return number.quantize(Decimal(1).scaleb(-self.scale), context=_CONTEXT)
        except InvalidOperation as exc:
            raise ValueError(f"decimal number too large: {value!r}") from exc

    def ddl(self) -> str:
        return f" Decimal({self.precision}, {self.scale}) "

    def bind(self, value: Any) -> str:
        return format(self.coerce(value), "f")

    def load(self, raw: Any) -> Decimal:
        return self.coerce(raw)