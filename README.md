# ffkit

ffkit is a set of small building blocks:

- **MySQL column types.** Each type describes one MySQL column. It gives you the
  `CREATE TABLE` type fragment (`ddl()`), turns a Python value into the value
  bound to a statement (`bind(value)`), and turns a value read back from a
  result set into a Python value (`load(raw)`).
- **Tuple merging.** `merge_tuples` flattens a mix of tuples and single values
  into one tuple.
- **Concurrency helpers.** These are a scope guard, a write-once cell, a spin
  lock, a per-thread accumulator, per-thread variables, hazard-pointer
  bookkeeping and fixed-capacity queues.
- **Event dispatch.** `EventHandler` keeps one handler per event and calls it
  when the event is triggered.

The package has no runtime dependencies.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Column types

Every column type shares the `SqlType` interface from `ffkit.sqltypes`:
`ddl()`, `bind(value)` and `load(raw)`. By default a type binds a `str` and
loads text, decoding bytes as UTF-8.

### `ffkit.sqltypes`

- `CharType(length)` is `CHAR(n)` with a length of 0 to 255.
  `VarcharType(length)` is `VARCHAR(n)` with a length of 0 to 65535. Both hold
  text.
- `TextType(kind)` holds text. The `kind` is one of the `TextKind` members
  `TINY`, `MEDIUM` or `LONG`, giving `TINYTEXT`, `MEDIUMTEXT` or `LONGTEXT`.
- `BitType(length)` is `BIT(n)` with a length of 1 to 64. Its values are ints.
  `bind` masks an int to n bits. `load` accepts an int or big-endian bytes.
- `BinaryType(length)` and `VarBinaryType(length)` hold bytes. A `str` is
  encoded as UTF-8.
- `JsonType()` is a `JSON` column. Its values are carried as text.
- `MediumIntType(unsigned=False)` is `MEDIUMINT`, or `MEDIUMINT UNSIGNED` when
  `unsigned` is true. Its values are ints.

```python
from ffkit.sqltypes import VarcharType, BitType

VarcharType(64).ddl()     # " VARCHAR(64) "
BitType(4).bind(0xFF)     # 15
```

### `ffkit.enums`

`EnumType(*names)` and `SetType(*names)` describe `ENUM` and `SET` columns.
Their member names are kept in the order you give them.

- `index_of(name)` returns the index of the first member that *starts with*
  `name`, or `None` if there is none.
- `name_of(index)` returns the member at that index. If there is no member
  there, it returns the string `ENUM_NOT_FOUND` (`"enum_not_found"`).
- `EnumType.parse(name)` returns an `EnumValue`.
- `SetType.parse(names)` returns a `SetValue`. It takes a single name or an
  iterable of names, and keeps them in the order given.
- Both `parse` methods raise `NotInEnumOrSet`, a `ValueError`, for a name that
  is not a member.
- `EnumType.load` does not raise for an unknown name. It gives an `EnumValue`
  with index -1 instead. `SetType.load` splits the text on commas and parses
  the parts.

```python
from ffkit.enums import EnumType, SetType

sex = EnumType("male", "female", "bisex", "none")
sex.ddl()                    # " ENUM ('male','female','bisex','none' )"
value = sex.parse("male")
sex.bind(value)              # "male"
str(value)                   # "male"

flags = SetType("male", "female", "bisex", "none")
flags.bind(flags.parse(["bisex", "male"]))   # "bisex,male"
flags.load("female,none").values              # ["female", "none"]
```

### `ffkit.blobs`

- `BlobType(kind=BlobKind.BLOB)` is a blob column. `BlobKind` has the members
  `TINY`, `BLOB`, `MEDIUM` and `LONG`.
  - `bind` accepts bytes, a `str` (encoded as UTF-8) or a readable stream,
    which it reads to the end.
  - `load` returns a readable binary stream. Bytes and text are wrapped in
    `io.BytesIO`, and a stream is returned as is.
- `DecimalType(precision, scale)` is `DECIMAL(P, D)`. The precision must be 1
  to 65, the scale 0 to 30, and the precision at least the scale.
  - `coerce(value)` turns an int, float, `Decimal`, `str` or bytes into a
    `Decimal`, rounded half up to `scale` places.
  - `bind` returns the fixed-point text of that value.
  - `load` returns a `Decimal`.
  - Values that are not numbers, or not finite, raise `ValueError`.

```python
from ffkit.blobs import DecimalType

money = DecimalType(35, 5)
money.bind("12345.24456789")   # "12345.24457"
```

### `ffkit.times`

Resolutions are given as a denominator of one second: 1, 10, 100 and so on up
to 10**10. `fsp_for_denominator(denominator)` returns the number of fractional
digits for that denominator, and raises `ValueError` for any other value.

- `DateTimeType(denominator=1)` and `TimestampType(denominator=1)` hold naive
  local `datetime` values.
  - Their `ddl` adds `DEFAULT CURRENT_TIMESTAMP` and raises `ValueError` when
    the resolution is finer than microseconds.
  - `bind` gives `"YYYY-MM-DD HH:MM:SS.f"`. The fraction is always present, at
    least one digit wide. An aware datetime is first converted to local time.
  - `load` parses that form and drops the precision finer than the column's
    resolution.
- `DateType()` binds and loads `date` values as `"YYYY-MM-DD"`.
- `YearType()` binds an int as text and loads an int.
- `TimeType(denominator=1)` binds and loads `timedelta` values as
  `"HH:MM:SS"`. A fraction is added when the denominator is above 1, and
  negative spans are supported.

```python
from datetime import timedelta
from ffkit.times import TimeType

TimeType(1000).ddl()                                      # " TIME (3) "
TimeType(1000).bind(timedelta(hours=120, seconds=23.1))   # "120:00:23.100"
```

## Tuples

```python
from ffkit.tuples import merge_tuples

merge_tuples((1, 2), 3, (4,))   # (1, 2, 3, 4)
merge_tuples(((1,), 2))         # ((1,), 2); only one level is flattened
```

## Concurrency helpers

### `ffkit.flow`

- `ScopeGuard(on_exit, on_enter=None)` is a context manager. It calls
  `on_enter` on entry and `on_exit` on every exit. It does not suppress
  exceptions.
- `SingleAssign(value=...)` is a cell that keeps only its first value.
  `assign(value)` stores the value only if nothing was stored before.
  `get()` returns the stored value, or `None` if nothing was assigned.
  `assigned` tells you whether a value was stored.
- `SpinLock` has `lock()`, `try_lock()`, `unlock()` and a `locked` property,
  and can be used with `with`. `lock()` busy-waits, yielding the processor.
  Unlocking a lock that is not held does nothing.
- `UsedParaError` and `EmptyParaError` are `RuntimeError`s with fixed
  messages, for a task that is reused or empty.

### `ffkit.parallel`

The per-thread containers hold a fixed number of slots, set by
`concurrency=`. It defaults to `os.cpu_count()`. Each thread gets its own slot
the first time it uses a container, and keeps it. A thread that arrives when
every slot is taken gets a `RuntimeError`.

- `Accumulator(functor, value=0, *, concurrency=None)`
  - `increase(value)` folds a value into the calling thread's slot.
  - `reset(value)` sets every slot to `value`.
  - `get()` folds the initial value with every slot in turn.
- `ThreadLocalVar(factory=None, *, concurrency=None)` holds one value per
  slot, made by the factory.
  - `current()` returns the calling thread's value, and `set_current(value)`
    replaces it.
  - `reset()` gives every slot a fresh value from the factory.
  - `for_each(func)` calls `func` on every slot's value.
- `HazardPointerOwner(*, concurrency=None)` lets each thread publish the
  object it is using.
  - `set_hazard_pointer(obj)` publishes an object for the calling thread, and
    `get_hazard_pointer()` returns it.
  - `outstanding_hazard_pointer_for(obj)` tells you whether another thread
    has published the same object.
- `MisoQueue(n)` and `SimoQueue(n)` are FIFO queues that hold at most
  `2**n - 1` items.
  - `push(value)` returns `False` when the queue is full.
  - `pop()` raises `IndexError` when the queue is empty.
  - `len()` gives the number of items.
  - Both are guarded by a lock.

```python
from ffkit.parallel import Accumulator

total = Accumulator(lambda a, b: a + b, 0, concurrency=4)
total.increase(3).increase(4)
total.get()   # 7
```

## Events

```python
from ffkit.events import EventHandler

events = EventHandler()
events.listen("connected", lambda conn: f"connected {conn}")
events.trigger("connected", "conn-1")   # "connected conn-1"
"connected" in events                   # True
```

An event is any hashable key. An object with an `identifier` attribute is
keyed by that identifier. Listening again replaces the earlier handler.
Triggering an event with no handler does nothing and returns `None`.

## What ffkit does not do

- ffkit does not connect to a database. Its column types produce type
  fragments and convert values, but it has no table definitions, no
  statement or query building, and no driver. Pass the bound values to a
  MySQL driver of your choice yourself.
- ffkit does not do any networking. `EventHandler` is only an in-process
  dispatcher: there are no connections, servers or packet formats.
- The per-thread helpers are plain thread-safe containers. They are not a
  task scheduler.