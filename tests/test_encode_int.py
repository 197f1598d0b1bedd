import io

import pytest

from packwire.encode import InvalidDataWriteError, InvalidMarkerWriteError
from packwire.encode_int import (
    write_i8,
    write_i16,
    write_i32,
    write_i64,
    write_nfix,
    write_pfix,
    write_sint,
    write_u8,
    write_u16,
    write_u32,
    write_u64,
    write_uint,
)
from packwire.marker import Marker, MarkerKind


class _FailingWriter:
    """Accepts ``ok_writes`` writes, then raises OSError."""

    def __init__(self, ok_writes=0):
        self.ok_writes = ok_writes

    def write(self, data):
        if self.ok_writes <= 0:
            raise OSError("broken pipe")
        self.ok_writes -= 1
        return len(data)


@pytest.mark.parametrize(
    "val, expected",
    [
        (0, b"\x00"),
        (0xFF, b"\xcc\xff"),
        (0xFFFF, b"\xcd\xff\xff"),
        (0xFFFFFFFF, b"\xce\xff\xff\xff\xff"),
        (0xFFFFFFFFFFFFFFFF, b"\xcf\xff\xff\xff\xff\xff\xff\xff\xff"),
    ],
)
def test_uint_limits(val, expected):
    buf = io.BytesIO()
    write_uint(buf, val)
    assert buf.getvalue() == expected


@pytest.mark.parametrize(
    "val, expected",
    [
        (-128, b"\xd0\x80"),
        (127, b"\x7f"),
        (-32768, b"\xd1\x80\x00"),
        (32767, b"\xcd\x7f\xff"),
        (-2147483648, b"\xd2\x80\x00\x00\x00"),
        (2147483647, b"\xce\x7f\xff\xff\xff"),
        (-9223372036854775808, b"\xd3\x80\x00\x00\x00\x00\x00\x00\x00"),
        (9223372036854775807, b"\xcf\x7f\xff\xff\xff\xff\xff\xff\xff"),
    ],
)
def test_sint_limits(val, expected):
    buf = io.BytesIO()
    write_sint(buf, val)
    assert buf.getvalue() == expected


@pytest.mark.parametrize(
    "func, expected",
    [
        (write_pfix, b"\x2a"),
        (write_u8, b"\xcc\x2a"),
        (write_u16, b"\xcd\x00\x2a"),
        (write_u32, b"\xce\x00\x00\x00\x2a"),
        (write_u64, b"\xcf\x00\x00\x00\x00\x00\x00\x00\x2a"),
    ],
)
def test_fixed_width_forms_of_42(func, expected):
    buf = io.BytesIO()
    func(buf, 42)
    assert buf.getvalue() == expected


def test_write_sint_300():
    buf = io.BytesIO()
    write_sint(buf, 300)
    assert buf.getvalue() == b"\xcd\x01\x2c"


def test_write_u8_examples():
    buf = io.BytesIO()
    write_u8(buf, 146)
    assert buf.getvalue() == b"\xcc\x92"
    buf = io.BytesIO()
    write_u8(buf, 42)
    assert buf.getvalue() == b"\xcc\x2a"


def test_write_i8_examples():
    buf = io.BytesIO()
    write_i8(buf, 42)
    assert buf.getvalue() == b"\xd0\x2a"
    buf = io.BytesIO()
    write_i8(buf, -18)
    assert buf.getvalue() == b"\xd0\xee"


def test_signed_fixed_widths():
    buf = io.BytesIO()
    write_i16(buf, -2)
    assert buf.getvalue() == b"\xd1\xff\xfe"
    buf = io.BytesIO()
    write_i32(buf, 1)
    assert buf.getvalue() == b"\xd2\x00\x00\x00\x01"
    buf = io.BytesIO()
    write_i64(buf, -1)
    assert buf.getvalue() == b"\xd3" + b"\xff" * 8


def test_nfix():
    buf = io.BytesIO()
    write_nfix(buf, -1)
    write_nfix(buf, -32)
    assert buf.getvalue() == b"\xff\xe0"


@pytest.mark.parametrize(
    "val, marker, expected",
    [
        (-1, Marker(MarkerKind.FIX_NEG, -1), b"\xff"),
        (-32, Marker(MarkerKind.FIX_NEG, -32), b"\xe0"),
        (-33, Marker(MarkerKind.I8), b"\xd0\xdf"),
        (-129, Marker(MarkerKind.I16), b"\xd1\xff\x7f"),
        (-32769, Marker(MarkerKind.I32), b"\xd2\xff\xff\x7f\xff"),
        (0, Marker(MarkerKind.FIX_POS, 0), b"\x00"),
        (128, Marker(MarkerKind.U8), b"\xcc\x80"),
        (256, Marker(MarkerKind.U16), b"\xcd\x01\x00"),
        (65536, Marker(MarkerKind.U32), b"\xce\x00\x01\x00\x00"),
        (4294967296, Marker(MarkerKind.U64), b"\xcf\x00\x00\x00\x01\x00\x00\x00\x00"),
    ],
)
def test_sint_boundaries_and_markers(val, marker, expected):
    buf = io.BytesIO()
    assert write_sint(buf, val) == marker
    assert buf.getvalue() == expected


@pytest.mark.parametrize(
    "val, kind",
    [
        (127, MarkerKind.FIX_POS),
        (128, MarkerKind.U8),
        (255, MarkerKind.U8),
        (65535, MarkerKind.U16),
        (65536, MarkerKind.U32),
        (4294967296, MarkerKind.U64),
    ],
)
def test_uint_marker_kinds(val, kind):
    assert write_uint(io.BytesIO(), val).kind is kind


@pytest.mark.parametrize(
    "func, val",
    [
        (write_pfix, 128),
        (write_pfix, -1),
        (write_nfix, 0),
        (write_nfix, -33),
        (write_u8, 256),
        (write_u16, 65536),
        (write_u32, 1 << 32),
        (write_u64, 1 << 64),
        (write_u8, -1),
        (write_i8, 128),
        (write_i16, -32769),
        (write_i32, 1 << 31),
        (write_i64, 1 << 63),
        (write_uint, -1),
        (write_sint, 1 << 63),
    ],
)
def test_out_of_range_rejected_without_writing(func, val):
    buf = io.BytesIO()
    with pytest.raises(ValueError):
        func(buf, val)
    assert buf.getvalue() == b""


def test_bool_is_rejected():
    with pytest.raises(TypeError):
        write_uint(io.BytesIO(), True)


def test_marker_write_failure():
    with pytest.raises(InvalidMarkerWriteError):
        write_uint(_FailingWriter(0), 5)
    with pytest.raises(InvalidMarkerWriteError):
        write_sint(_FailingWriter(0), -5)


def test_data_write_failure():
    with pytest.raises(InvalidDataWriteError):
        write_u32(_FailingWriter(1), 7)
    with pytest.raises(InvalidDataWriteError):
        write_sint(_FailingWriter(1), -1000)