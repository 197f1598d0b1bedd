"""Writers for MessagePack markers, lengths and non-integer scalar values."""

from __future__ import annotations

import struct
from typing import BinaryIO

from packwire.marker import Marker, MarkerKind

__all__ = [
    "ValueWriteError",
    "InvalidMarkerWriteError",
    "InvalidDataWriteError",
    "write_marker",
    "write_nil",
    "write_bool",
    "write_data_u8",
    "write_data_u16",
    "write_data_u32",
    "write_data_u64",
    "write_data_i8",
    "write_data_i16",
    "write_data_i32",
    "write_data_i64",
    "write_data_f32",
    "write_data_f64",
    "write_array_len",
    "write_map_len",
    "write_ext_meta",
    "write_f32",
    "write_f64",
    "write_str_len",
    "write_str",
    "write_bin_len",
    "write_bin",
]

_U32_MAX = 0xFFFFFFFF

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")
_I8 = struct.Struct(">b")
_I16 = struct.Struct(">h")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")


class ValueWriteError(OSError):
    """An I/O error while writing a MessagePack value."""

    description = "error while writing multi-byte MessagePack value"

    def __init__(self, error: OSError) -> None:
        super().__init__(f"{self.description}: {error}")
        self.error = error
        self.__cause__ = error


class InvalidMarkerWriteError(ValueWriteError):
    """Writing the marker byte failed."""


class InvalidDataWriteError(ValueWriteError):
    """Writing the bytes that follow the marker failed."""


def _write_all(wr: BinaryIO, data: bytes) -> None:
    view = memoryview(data)
    while view:
        written = wr.write(view)
        if written is None:
            return
        if written == 0:
            raise OSError("failed to write whole buffer")
        view = view[written:]


def _check_int(val: int, low: int, high: int, name: str) -> None:
    if not isinstance(val, int) or isinstance(val, bool):
        raise TypeError(f"{name} value must be an integer, got {type(val).__name__}")
    if not low <= val <= high:
        raise ValueError(f"{name} value {val} out of range [{low}, {high}]")


def _check_len(length: int) -> None:
    _check_int(length, 0, _U32_MAX, "length")


def write_marker(wr: BinaryIO, marker: Marker) -> None:
    """Write a single marker byte."""
    try:
        _write_all(wr, bytes((marker.to_u8(),)))
    except OSError as err:
        raise InvalidMarkerWriteError(err) from err


def _write_data(wr: BinaryIO, data: bytes) -> None:
    try:
        _write_all(wr, data)
    except OSError as err:
        raise InvalidDataWriteError(err) from err


def _write_int(
    wr: BinaryIO, packer: struct.Struct, val: int, low: int, high: int, name: str
) -> None:
    _check_int(val, low, high, name)
    _write_data(wr, packer.pack(val))


def write_data_u8(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as an unsigned byte with no marker."""
    _write_int(wr, _U8, val, 0, 0xFF, "u8")


def write_data_u16(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a big-endian u16 with no marker."""
    _write_int(wr, _U16, val, 0, 0xFFFF, "u16")


def write_data_u32(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a big-endian u32 with no marker."""
    _write_int(wr, _U32, val, 0, _U32_MAX, "u32")


def write_data_u64(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a big-endian u64 with no marker."""
    _write_int(wr, _U64, val, 0, 0xFFFFFFFFFFFFFFFF, "u64")


def write_data_i8(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a signed byte with no marker."""
    _write_int(wr, _I8, val, -0x80, 0x7F, "i8")


def write_data_i16(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a big-endian i16 with no marker."""
    _write_int(wr, _I16, val, -0x8000, 0x7FFF, "i16")


def write_data_i32(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a big-endian i32 with no marker."""
    _write_int(wr, _I32, val, -0x80000000, 0x7FFFFFFF, "i32")


def write_data_i64(wr: BinaryIO, val: int) -> None:
    """Write ``val`` as a big-endian i64 with no marker."""
    _write_int(wr, _I64, val, -0x8000000000000000, 0x7FFFFFFFFFFFFFFF, "i64")


def write_data_f32(wr: BinaryIO, val: float) -> None:
    """Write ``val`` as a big-endian IEEE 754 single with no marker."""
    _write_data(wr, struct.pack(">f", val))


def write_data_f64(wr: BinaryIO, val: float) -> None:
    """Write ``val`` as a big-endian IEEE 754 double with no marker."""
    _write_data(wr, struct.pack(">d", val))


def write_nil(wr: BinaryIO) -> None:
    """Write a nil value (``0xc0``)."""
    write_marker(wr, Marker(MarkerKind.NULL))


def write_bool(wr: BinaryIO, val: bool) -> None:
    """Write a boolean value as a single marker byte."""
    write_marker(wr, Marker(MarkerKind.TRUE if val else MarkerKind.FALSE))


def write_array_len(wr: BinaryIO, length: int) -> Marker:
    """Write the most compact array header for ``length`` and return its marker."""
    _check_len(length)
    if length < 16:
        marker = Marker(MarkerKind.FIX_ARRAY, length)
        write_marker(wr, marker)
    elif length < 65536:
        marker = Marker(MarkerKind.ARRAY16)
        write_marker(wr, marker)
        write_data_u16(wr, length)
    else:
        marker = Marker(MarkerKind.ARRAY32)
        write_marker(wr, marker)
        write_data_u32(wr, length)
    return marker


def write_map_len(wr: BinaryIO, length: int) -> Marker:
    """Write the most compact map header for ``length`` and return its marker."""
    _check_len(length)
    if length < 16:
        marker = Marker(MarkerKind.FIX_MAP, length)
        write_marker(wr, marker)
    elif length < 65536:
        marker = Marker(MarkerKind.MAP16)
        write_marker(wr, marker)
        write_data_u16(wr, length)
    else:
        marker = Marker(MarkerKind.MAP32)
        write_marker(wr, marker)
        write_data_u32(wr, length)
    return marker


_FIXEXT_KINDS = {
    1: MarkerKind.FIX_EXT1,
    2: MarkerKind.FIX_EXT2,
    4: MarkerKind.FIX_EXT4,
    8: MarkerKind.FIX_EXT8,
    16: MarkerKind.FIX_EXT16,
}


def write_ext_meta(wr: BinaryIO, length: int, ty: int) -> Marker:
    """Write the most compact ext header and type id, returning the marker used.

    Negative type ids are reserved by the specification and rejected.
    """
    _check_len(length)
    _check_int(ty, -0x80, 0x7F, "ext type")
    if ty < 0:
        raise ValueError(f"ext type {ty} is reserved; application types are 0..127")

    if length in _FIXEXT_KINDS:
        marker = Marker(_FIXEXT_KINDS[length])
        write_marker(wr, marker)
    elif length < 256:
        marker = Marker(MarkerKind.EXT8)
        write_marker(wr, marker)
        write_data_u8(wr, length)
    elif length < 65536:
        marker = Marker(MarkerKind.EXT16)
        write_marker(wr, marker)
        write_data_u16(wr, length)
    else:
        marker = Marker(MarkerKind.EXT32)
        write_marker(wr, marker)
        write_data_u32(wr, length)

    write_data_i8(wr, ty)
    return marker


def write_f32(wr: BinaryIO, val: float) -> None:
    """Write ``val`` as a 5-byte f32 value."""
    write_marker(wr, Marker(MarkerKind.F32))
    write_data_f32(wr, val)


def write_f64(wr: BinaryIO, val: float) -> None:
    """Write ``val`` as a 9-byte f64 value."""
    write_marker(wr, Marker(MarkerKind.F64))
    write_data_f64(wr, val)


def write_str_len(wr: BinaryIO, length: int) -> Marker:
    """Write the most compact string header for ``length`` and return its marker."""
    _check_len(length)
    if length < 32:
        marker = Marker(MarkerKind.FIX_STR, length)
        write_marker(wr, marker)
    elif length < 256:
        marker = Marker(MarkerKind.STR8)
        write_marker(wr, marker)
        write_data_u8(wr, length)
    elif length < 65536:
        marker = Marker(MarkerKind.STR16)
        write_marker(wr, marker)
        write_data_u16(wr, length)
    else:
        marker = Marker(MarkerKind.STR32)
        write_marker(wr, marker)
        write_data_u32(wr, length)
    return marker


def write_str(wr: BinaryIO, data: str) -> None:
    """Write ``data`` as a UTF-8 string value with the most compact header."""
    encoded = data.encode("utf-8")
    write_str_len(wr, len(encoded))
    _write_data(wr, encoded)


def write_bin_len(wr: BinaryIO, length: int) -> Marker:
    """Write the most compact binary header for ``length`` and return its marker."""
    _check_len(length)
    if length < 256:
        marker = Marker(MarkerKind.BIN8)
        write_marker(wr, marker)
        write_data_u8(wr, length)
    elif length < 65536:
        marker = Marker(MarkerKind.BIN16)
        write_marker(wr, marker)
        write_data_u16(wr, length)
    else:
        marker = Marker(MarkerKind.BIN32)
        write_marker(wr, marker)
        write_data_u32(wr, length)
    return marker


def write_bin(wr: BinaryIO, data: bytes) -> None:
    """Write ``data`` as a binary value with the most compact header."""
    payload = bytes(data)
    write_bin_len(wr, len(payload))
    _write_data(wr, payload)