import io
from decimal import Decimal

import pytest

from ffkit.blobs import BlobKind, BlobType, DecimalType


@pytest.mark.parametrize(
    "kind, expected",
    [
        (BlobKind.TINY, " TINYBLOB "),
        (BlobKind.BLOB, " BLOB "),
        (BlobKind.MEDIUM, " MEDIUMBLOB "),
        (BlobKind.LONG, " LONGBLOB "),
    ],
)
def test_blob_ddl(kind, expected):
    assert BlobType(kind).ddl() == expected


def test_blob_default_kind():
    assert BlobType().kind is BlobKind.BLOB


def test_blob_bind_reads_stream():
    assert BlobType().bind(io.BytesIO(b"hello world")) == b"hello world"


def test_blob_bind_text_stream():
    assert BlobType(BlobKind.TINY).bind(io.StringIO("hello world 2")) == b"hello world 2"


def test_blob_bind_bytes_and_str():
    blob = BlobType()
    assert blob.bind(b"abc") == b"abc"
    assert blob.bind("abc") == b"abc"
    assert blob.bind(bytearray(b"xyz")) == b"xyz"


def test_blob_bind_rejects_none():
    with pytest.raises(TypeError):
        BlobType().bind(None)


def test_blob_load_returns_stream():
    stream = BlobType().load(b"hello world")
    assert stream.read() == b"hello world"


def test_blob_load_passes_stream_through():
    source = io.BytesIO(b"data")
    assert BlobType().load(source) is source


def test_blob_round_trip():
    blob = BlobType(BlobKind.LONG)
    payload = bytes(range(256))
    assert blob.bind(blob.load(payload)) == payload


def test_blob_rejects_bad_kind():
    with pytest.raises(TypeError):
        BlobType("BLOB")


def test_decimal_ddl():
    assert DecimalType(35, 5).ddl() == " Decimal(35, 5) "


@pytest.mark.parametrize("precision, scale", [(0, 0), (66, 2), (40, 31), (2, 3), (5, -1)])
def test_decimal_rejects_bad_parameters(precision, scale):
    with pytest.raises(ValueError):
        DecimalType(precision, scale)


def test_decimal_rounds_to_scale():
    assert DecimalType(35, 5).coerce("12345.24456789") == Decimal("12345.24457")


def test_decimal_doubling_keeps_scale():
    column = DecimalType(35, 5)
    doubled = column.coerce(column.coerce("12345.24456789") * 2)
    assert doubled == column.coerce("12345.24456789") * 2
    assert doubled.as_tuple().exponent == -5


@pytest.mark.parametrize("value", [1, "2.5", 3.25, Decimal("-7.123456"), "1e2"])
def test_decimal_bind_has_fixed_places(value):
    column = DecimalType(20, 4)
    text = column.bind(value)
    whole, _, fraction = text.partition(".")
    assert len(fraction) == 4
    assert "e" not in text.lower()


@pytest.mark.parametrize("value", [0, "12345.24456789", -3.5, Decimal("99.999")])
def test_decimal_round_trip(value):
    column = DecimalType(35, 5)
    assert column.load(column.bind(value)) == column.coerce(value)


def test_decimal_zero_scale():
    column = DecimalType(10, 0)
    assert column.bind("41.6") == "42"


def test_decimal_load_bytes():
    column = DecimalType(10, 2)
    assert column.load(b"1.25") == column.coerce("1.25")


@pytest.mark.parametrize("value", ["abc", "nan", float("inf")])
def test_decimal_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        DecimalType(10, 2).coerce(value)


def test_decimal_rejects_bool():
    with pytest.raises(TypeError):
        DecimalType(10, 2).coerce(True)