import pytest

from ffkit.sqltypes import (
    BinaryType,
    BitType,
    CharType,
    JsonType,
    MediumIntType,
    SqlType,
    TextKind,
    TextType,
    VarBinaryType,
    VarcharType,
)


def test_varchar_ddl_matches_source_format():
    assert VarcharType(64).ddl() == " VARCHAR(64) "


def test_binary_and_varbinary_ddl():
    assert BinaryType(64).ddl() == " BINARY(64) "
    assert VarBinaryType(64).ddl() == " VARBINARY(64) "


def test_bit_ddl():
    assert BitType(63).ddl() == " BIT(63) "


def test_json_ddl_has_no_padding():
    assert JsonType().ddl() == "JSON"


def test_medium_int_ddl_signed_and_unsigned():
    assert MediumIntType().ddl() == " MEDIUMINT "
    assert MediumIntType(unsigned=True).ddl() == " MEDIUMINT UNSIGNED "


@pytest.mark.parametrize(
    "kind, expected",
    [
        (TextKind.TINY, " TINYTEXT "),
        (TextKind.MEDIUM, " MEDIUMTEXT "),
        (TextKind.LONG, " LONGTEXT "),
    ],
)
def test_text_ddl(kind, expected):
    assert TextType(kind).ddl() == expected


def test_char_ddl_contains_length():
    ddl = CharType(10).ddl()
    assert "CHAR(10)" in ddl
    assert ddl.startswith(" ") and ddl.endswith(" ")


@pytest.mark.parametrize(
    "column",
    [CharType(8), VarcharType(64), TextType(TextKind.LONG), JsonType()],
)
def test_text_round_trip(column):
    value = "1992-08-07 13:05:01"
    assert column.load(column.bind(value)) == value


def test_text_load_decodes_bytes():
    assert VarcharType(64).load("héllo".encode("utf-8")) == "héllo"


def test_text_bind_rejects_non_string():
    with pytest.raises(TypeError):
        VarcharType(64).bind(5)


@pytest.mark.parametrize("column", [BinaryType(64), VarBinaryType(64)])
def test_binary_round_trip(column):
    assert column.load(column.bind(b"male")) == b"male"
    assert column.bind("female") == b"female"


def test_binary_rejects_int():
    with pytest.raises(TypeError):
        BinaryType(4).bind(3)


def test_bit_round_trip_and_mask():
    column = BitType(63)
    assert column.load(column.bind(0x56)) == 0x56
    assert column.bind(-1) == (1 << 63) - 1


def test_bit_load_from_bytes_big_endian():
    column = BitType(16)
    assert column.load((0x56).to_bytes(2, "big")) == 0x56


def test_bit_length_limits():
    with pytest.raises(ValueError):
        BitType(0)
    with pytest.raises(ValueError):
        BitType(65)


def test_bit_bind_rejects_bool():
    with pytest.raises(TypeError):
        BitType(8).bind(True)


def test_length_limits():
    with pytest.raises(ValueError):
        CharType(256)
    with pytest.raises(ValueError):
        VarcharType(65536)
    with pytest.raises(ValueError):
        BinaryType(-1)


def test_medium_int_round_trip():
    column = MediumIntType()
    assert column.load(column.bind(15)) == 15
    assert column.load("15") == 15


def test_medium_int_bind_rejects_string():
    with pytest.raises(TypeError):
        MediumIntType().bind("15")


def test_text_type_requires_kind():
    with pytest.raises(TypeError):
        TextType("TINYTEXT")


def test_sql_type_is_abstract():
    with pytest.raises(TypeError):
        SqlType()


def test_types_are_value_objects():
    assert VarcharType(64) == VarcharType(64)
    assert {VarcharType(64), VarcharType(64), CharType(64)} == {VarcharType(64), CharType(64)}