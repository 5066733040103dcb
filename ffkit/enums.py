"""MySQL ``ENUM`` and ``SET`` column types and the values they hold."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from .sqltypes import SqlType

__all__ = [
    "ENUM_NOT_FOUND",
    "NotInEnumOrSet",
    "EnumValue",
    "SetValue",
    "EnumType",
    "SetType",
]

ENUM_NOT_FOUND = "enum_not_found"


class NotInEnumOrSet(ValueError):
    """Raised when a name is not one of the members of an enum or set."""

    def __init__(self, name: str) -> None:
        super().__init__(f"cannot find {name} in mysql.enum or mysql.set")
        self.name = name


def _decode(raw: Any) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("utf-8")
    if isinstance(raw, str):
        return raw
    raise TypeError(f"expected text, got {type(raw).__name__}")


class _Choices(SqlType):
    """Shared behaviour of column types defined by a list of member names."""

    _keyword = ""

    def __init__(self, *names: str) -> None:
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"member names must be str, got {name!r}")
        self._names = tuple(names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def index_of(self, name: str) -> int | None:
        """Return the index of the first member that starts with ``name``, or None."""
        return next(
            (index for index, member in enumerate(self._names) if member.startswith(name)),
            None,
        )

    def name_of(self, index: int) -> str:
        """Return the member at ``index``, or ``ENUM_NOT_FOUND`` if there is none."""
        if 0 <= index < len(self._names):
            return self._names[index]
        return ENUM_NOT_FOUND

    def _require_index(self, name: str) -> int:
        index = self.index_of(name)
        if index is None:
            raise NotInEnumOrSet(name)
        return index

    def _render_ddl(self) -> str:
        members = ",".join(f"'{name}'" for name in self._names)
        return f" {self._keyword} ({members} )"

    def ddl(self) -> str:
        return self._render_ddl()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._names == other._names  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._names))

    def __repr__(self) -> str:
        members = ", ".join(repr(name) for name in self._names)
        return f"{type(self).__name__}({members})"


@dataclass(frozen=True)
class EnumValue:
    """One member of an enum type, held by index; index -1 means no member."""

    type: EnumType
    index: int = -1

    @property
    def value(self) -> str:
        return self.type.name_of(self.index)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SetValue:
    """A selection of members of a set type, held by index in the given order."""

    type: SetType
    indices: tuple[int, ...] = ()

    @property
    def values(self) -> list[str]:
        return [self.type.name_of(index) for index in self.indices]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.indices)

    def __str__(self) -> str:
        return ",".join(self.values)


class EnumType(_Choices):
    """An ``ENUM`` column whose members are given in order."""

    _keyword = "ENUM"

    def index_of(self, name: str) -> int | None:
        """Return the index of the first member that starts with ``name``, or None."""
        return super().index_of(name)

    def name_of(self, index: int) -> str:
        """Return the member at ``index``, or ``ENUM_NOT_FOUND`` if there is none."""
        return super().name_of(index)

    def parse(self, name: str) -> EnumValue:
        """Return the value for ``name``; raise NotInEnumOrSet if it is no member."""
        return EnumValue(self, self._require_index(name))

    def ddl(self) -> str:
        return self._render_ddl()

    def bind(self, value: Any) -> str:
        if isinstance(value, str):
            value = self.parse(value)
        if not isinstance(value, EnumValue):
            raise TypeError(f"expected EnumValue or str, got {type(value).__name__}")
        if value.type != self:
            raise TypeError("value belongs to a different enum type")
        return value.value

    def load(self, raw: Any) -> EnumValue:
        index = self.index_of(_decode(raw))
        return EnumValue(self, -1 if index is None else index)


class SetType(_Choices):
    """A ``SET`` column whose members are given in order."""

    _keyword = "SET"

    def parse(self, names: str | Iterable[str]) -> SetValue:
        """Return the value holding ``names``; raise NotInEnumOrSet on any non-member."""
        if isinstance(names, str):
            names = [names]
        return SetValue(self, tuple(self._require_index(name) for name in names))

    def ddl(self) -> str:
        return self._render_ddl()

    def bind(self, value: Any) -> str:
        if not isinstance(value, SetValue):
            value = self.parse(value)
        if value.type != self:
            raise TypeError("value belongs to a different set type")
        return ",".join(value.values)

    def load(self, raw: Any) -> SetValue:
        return self.parse(_decode(raw).split(","))