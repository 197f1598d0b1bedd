"""Writers for MessagePack integers, fixed-width and most-compact."""

from __future__ import annotations

from typing import BinaryIO

from packwire.encode import (
    write_data_i8,
    write_data_i16,
    write_data_i32,
    write_data_i64,
    write_data_u8,
    write_data_u16,
    write_data_u32,
    write_data_u64,
    write_marker,
)
from packwire.marker import Marker, MarkerKind

__all__ = [
    "write_pfix",
    "write_u8",
    "write_u16",
    "write_u32",
    "write_u64",
    "write_uint",
    "write_nfix",
    "write_i8",
    "write_i16",
    "write_i32",
    "write_i64",
    "write_sint",
]

_U64_MAX = 0xFFFFFFFFFFFFFFFF
_I64_MIN = -0x8000000000000000
_I64_MAX = 0x7FFFFFFFFFFFFFFF


def _check(val: int, low: int, high: int, name: str) -> None:
    if not isinstance(val, int) or isinstance(val, bool):
        raise TypeError(f"{name} value must be an integer, got {type(val).__name__}")
    if not low <= val <= high:
        raise ValueError(f"{name} value {val} out of range [{low}, {high}]")


def write_pfix(wr: BinaryIO, val: int) -> None:
    """Write ``val`` (0..127) as a single positive fixint byte.

    Raises ``ValueError`` if the value does not fit.
    """
    _check(val, 0, 0x7F, "positive fixint")
    write_marker(wr, Marker(MarkerKind.FIX_POS, val))


def write_u8(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a 2-byte u8 value, whatever its magnitude."""
    _check(val, 0, 0xFF, "u8")
    write_marker(wr, Marker(MarkerKind.U8))
    write_data_u8(wr, val)


def write_u16(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a 3-byte u16 value, whatever its magnitude."""
    _check(val, 0, 0xFFFF, "u16")
    write_marker(wr, Marker(MarkerKind.U16))
    write_data_u16(wr, val)


def write_u32(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a 5-byte u32 value, whatever its magnitude."""
    _check(val, 0, 0xFFFFFFFF, "u32")
    write_marker(wr, Marker(MarkerKind.U32))
    write_data_u32(wr, val)


def write_u64(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a 9-byte u64 value, whatever its magnitude."""
    _check(val, 0, _U64_MAX, "u64")
    write_marker(wr, Marker(MarkerKind.U64))
    write_data_u64(wr, val)


def write_uint(wr: BinaryIO, val: int) -> Marker:
    """Write an unsigned ``val`` in its most compact form and return the marker used."""
    _check(val, 0, _U64_MAX, "u64")
    if val < 128:
        write_pfix(wr, val)
        return Marker(MarkerKind.FIX_POS, val)
    if val < 256:
        write_u8(wr, val)
        return Marker(MarkerKind.U8)
    if val < 65536:
        write_u16(wr, val)
        return Marker(MarkerKind.U16)
    if val < 4294967296:
        write_u32(wr, val)
        return Marker(MarkerKind.U32)
    write_u64(wr, val)
    return Marker(MarkerKind.U64)


def write_nfix(wr: BinaryIO, val: int) -> None:
    """Write ``val`` (-32..-1) as a single negative fixint byte.

    Raises ``ValueError`` if the value does not fit.
    """
    _check(val, -32, -1, "negative fixint")
    write_marker(wr, Marker(MarkerKind.FIX_NEG, val))


def write_i8(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a 2-byte i8 value, whatever its magnitude."""
    _check(val, -0x80, 0x7F, "i8")
    write_marker(wr, Marker(MarkerKind.I8))
    write_data_i8(wr, val)


def write_i16(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a 3-byte i16 value, whatever its magnitude."""
    _check(val, -0x8000, 0x7FFF, "i16")
    write_marker(wr, Marker(MarkerKind.I16))
    write_data_i16(wr, val)


def write_i32(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a 5-byte i32 value, whatever its magnitude."""
    _check(val, -0x80000000, 0x7FFFFFFF, "i32")
    write_marker(wr, Marker(MarkerKind.I32))
    write_data_i32(wr, val)


def write_i64(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a 9-byte i64 value, whatever its magnitude."""
    _check(val, _I64_MIN, _I64_MAX, "i64")
    write_marker(wr, Marker(MarkerKind.I64))
    write_data_i64(wr, val)


def write_sint(wr: BinaryIO, val: int) -> Marker:
    """Write a signed 64-bit ``val`` in its most compact form and return the marker used.

    Non-negative values use the unsigned encodings, as the specification
    prefers the shortest representation.
    """
    _check(val, _I64_MIN, _I64_MAX, "i64")
    if -32 <= val < 0:
        write_nfix(wr, val)
        return Marker(MarkerKind.FIX_NEG, val)
    if -128 <= val < -32:
        write_i8(wr, val)
        return Marker(MarkerKind.I8)
    if -32768 <= val < -128:
        write_i16(wr, val)
        return Marker(MarkerKind.I16)
    if -2147483648 <= val < -32768:
        write_i32(wr, val)
        return Marker(MarkerKind.I32)
    if val < -2147483648:
        write_i64(wr, val)
        return Marker(MarkerKind.I64)
    return write_uint(wr, val)