"""MySQL date and time column types: DATETIME, TIMESTAMP, DATE, YEAR and TIME.

Resolutions are given as a denominator of one second (1, 10, 100, ... 10**10),
which fixes the fractional-second precision (*fsp*) of the column.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from .sqltypes import SqlType

__all__ = [
    "fsp_for_denominator",
    "DateTimeType",
    "TimestampType",
    "DateType",
    "YearType",
    "TimeType",
]

_MICROS = 1_000_000
_MAX_FSP = 6
_FSP_BY_DENOMINATOR = {10**exponent: exponent for exponent in range(11)}

_DATETIME_RE = re.compile(
    r"\s*(\d{1,4})-(\d{1,2})-(\d{1,2})[ T](\d{1,2}):(\d{1,2}):(\d{1,2})(?:\.(\d*))?\s*$"
)
_DATE_RE = re.compile(r"\s*(\d{1,4})-(\d{1,2})-(\d{1,2})")
_TIME_RE = re.compile(r"\s*([+-])?(\d+):(\d{1,2}):(\d{1,2})(?:\.(\d*))?\s*$")
_YEAR_RE = re.compile(r"\s*([+-]?\d+)")


def fsp_for_denominator(denominator: int) -> int:
    """Return the number of decimal digits of a resolution of 1/denominator second."""
    if isinstance(denominator, bool) or not isinstance(denominator, int):
        raise TypeError(f"denominator must be an integer, got {denominator!r}")
    try:
        return _FSP_BY_DENOMINATOR[denominator]
    except KeyError:
        raise ValueError(
            f"denominator must be a power of ten from 1 to 10**10, got {denominator}"
        ) from None


def _text(raw: Any) -> str:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("ascii")
    if isinstance(raw, str):
        return raw
    raise TypeError(f"expected text, got {type(raw).__name__}")


def _ticks(micros: int, denominator: int) -> int:
    """Whole ticks of 1/denominator second in a non-negative count of microseconds."""
    if denominator <= _MICROS:
        return micros // (_MICROS // denominator)
    return micros * (denominator // _MICROS)


def _truncate(micros: int, denominator: int) -> int:
    """Drop the part of a non-negative count of microseconds finer than the resolution."""
    if denominator >= _MICROS:
        return micros
    return micros - micros % (_MICROS // denominator)


def _fraction_micros(digits: str | None, denominator: int) -> int:
    if not digits:
        return 0
    return _truncate(int(digits[:6].ljust(6, "0")), denominator)


def _local_naive(value: Any) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"expected datetime or date, got {type(value).__name__}")


def _format_date(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


@dataclass(frozen=True)
class DateTimeType(SqlType):
    """A ``DATETIME`` column holding naive local datetimes at a given resolution."""

    denominator: int = 1

    def __post_init__(self) -> None:
        fsp_for_denominator(self.denominator)

    @property
    def fsp(self) -> int:
        return fsp_for_denominator(self.denominator)

    def _column_ddl(self, keyword: str) -> str:
        fsp = self.fsp
        if fsp > _MAX_FSP:
            raise ValueError(
                "according to MYSQL, *fsp* of timestamp support up to 6, i.e., microsecods"
            )
        if fsp:
            return f" {keyword} ({fsp}) DEFAULT CURRENT_TIMESTAMP({fsp}) "
        return f" {keyword} DEFAULT CURRENT_TIMESTAMP"

    def ddl(self) -> str:
        return self._column_ddl("DATETIME")

    def bind(self, value: Any) -> str:
        moment = _local_naive(value)
        ticks = _ticks(moment.microsecond, self.denominator)
        width = max(self.fsp, 1)
        return (
            f"{_format_date(moment)} "
            f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
            f".{ticks:0{width}d}"
        )

    def load(self, raw: Any) -> datetime:
        if isinstance(raw, datetime):
            moment = _local_naive(raw)
            return moment.replace(microsecond=_truncate(moment.microsecond, self.denominator))
        text = _text(raw)
        match = _DATETIME_RE.match(text)
        if match is None:
            raise ValueError(f"not a datetime: {text!r}")
        year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
        micros = _fraction_micros(match.group(7), self.denominator)
        return datetime(year, month, day, hour, minute, second, micros)


@dataclass(frozen=True)
class TimestampType(DateTimeType):
    """A ``TIMESTAMP`` column; values behave as for ``DATETIME``."""

    def ddl(self) -> str:
        return self._column_ddl("TIMESTAMP")


@dataclass(frozen=True)
class DateType(SqlType):
    """A ``DATE`` column holding calendar dates."""

    def ddl(self) -> str:
        return " DATE "

    def bind(self, value: Any) -> str:
        if isinstance(value, datetime):
            value = _local_naive(value).date()
        if not isinstance(value, date):
            raise TypeError(f"expected date, got {type(value).__name__}")
        return _format_date(value)

    def load(self, raw: Any) -> date:
        if isinstance(raw, datetime):
            return _local_naive(raw).date()
        if isinstance(raw, date):
            return raw
        text = _text(raw)
        match = _DATE_RE.match(text)
        if match is None:
            raise ValueError(f"not a date: {text!r}")
        year, month, day = (int(part) for part in match.groups())
        return date(year, month, day)


@dataclass(frozen=True)
class YearType(SqlType):
    """A ``YEAR`` column holding an integer year."""

    def ddl(self) -> str:
        return " YEAR "

    def bind(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return str(value)

    def load(self, raw: Any) -> int:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        text = _text(raw)
        match = _YEAR_RE.match(text)
        if match is None:
            raise ValueError(f"not a year: {text!r}")
        return int(match.group(1))


@dataclass(frozen=True)
class TimeType(SqlType):
    """A ``TIME`` column holding timedeltas at a given resolution."""

    denominator: int = 1

    def __post_init__(self) -> None:
        fsp_for_denominator(self.denominator)

    @property
    def fsp(self) -> int:
        return fsp_for_denominator(self.denominator)

    def ddl(self) -> str:
        fsp = self.fsp
        return f" TIME ({fsp}) " if fsp else " TIME "

    def bind(self, value: Any) -> str:
        if not isinstance(value, timedelta):
            raise TypeError(f"expected timedelta, got {type(value).__name__}")
        micros = value // timedelta(microseconds=1)
        sign = "-" if micros < 0 else ""
        ticks = _ticks(abs(micros), self.denominator)
        whole_seconds, fraction = divmod(ticks, self.denominator)
        hours, rest = divmod(whole_seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
        if self.denominator > 1:
            text += f".{fraction:0{self.fsp}d}"
        return text

    def load(self, raw: Any) -> timedelta:
        if isinstance(raw, timedelta):
            micros = raw // timedelta(microseconds=1)
            kept = _truncate(abs(micros), self.denominator)
            return timedelta(microseconds=-kept if micros < 0 else kept)
        text = _text(raw)
        match = _TIME_RE.match(text)
        if match is None:
            raise ValueError(f"not a time: {text!r}")
        sign, hours, minutes, seconds, digits = match.groups()
        span = timedelta(
            hours=int(hours),
            minutes=int(minutes),
            seconds=int(seconds),
            microseconds=_fraction_micros(digits, self.denominator),
        )
        return -span if sign == "-" else span