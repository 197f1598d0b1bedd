"""Decoding of whole MessagePack values into plain Python objects.

Decoded values map onto Python types as follows:

* nil (and the reserved ``0xc1`` marker) -> ``None``
* booleans -> ``bool``
* integers -> ``int``
* f32 / f64 -> ``float``
* strings -> ``str``, or :class:`InvalidUtf8String` when the payload is not UTF-8
* binary -> ``bytes`` (``memoryview`` from :func:`read_value_ref`)
* arrays -> ``list``
* maps -> ``list`` of ``(key, value)`` tuples, in encoded order
* extensions -> :class:`Ext`
"""

from __future__ import annotations

import errno
import struct
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable, Union

from packwire.marker import Marker, MarkerKind

__all__ = [
    "ValueDecodeError",
    "Ext",
    "InvalidUtf8String",
    "BorrowReader",
    "read_value",
    "read_value_ref",
]

BytesLike = Union[bytes, bytearray, memoryview]


class ValueDecodeError(Exception):
    """Reading the bytes of a value failed.

    ``in_marker`` tells whether the failure happened while reading a marker
    byte or while reading the bytes that follow it; ``error`` holds the
    underlying exception.
    """

    def __init__(self, error: Exception, *, in_marker: bool) -> None:
        self.error = error
        self.in_marker = in_marker
        super().__init__(f"{self.description}: {error}")
        self.__cause__ = error

    @property
    def description(self) -> str:
        if self.in_marker:
            return "I/O error while reading marker byte"
        return "I/O error while reading non-marker bytes"

    def kind(self) -> str:
        """Classify the underlying failure.

        Returns one of ``"unexpected_eof"``, ``"would_block"``,
        ``"interrupted"`` or ``"other"``.
        """
        err = self.error
        if isinstance(err, EOFError):
            return "unexpected_eof"
        if isinstance(err, BlockingIOError):
            return "would_block"
        if isinstance(err, InterruptedError):
            return "interrupted"
        return "other"


@dataclass(frozen=True)
class Ext:
    """An extension value: an application type id and its raw payload."""

    typeid: int
    data: BytesLike


@dataclass(frozen=True)
class InvalidUtf8String:
    """A string value whose payload is not valid UTF-8."""

    data: bytes
    error: UnicodeDecodeError = field(compare=False)


class BorrowReader:
    """A reader over an in-memory buffer that can hand out views of it.

    ``position`` is the number of bytes consumed so far, which makes it
    possible to tell how many bytes a decoded value occupied.
    """

    def __init__(self, data: BytesLike, position: int = 0) -> None:
        view = memoryview(data)
        if view.format != "B" or view.ndim != 1:
            view = view.cast("B")
        self._view = view
        self.position = position

    def fill_buf(self) -> memoryview:
        """Return a view of the bytes not yet consumed; empty at end of buffer."""
        start = min(self.position, len(self._view))
        return self._view[start:]

    def consume(self, length: int) -> None:
        """Mark ``length`` bytes as consumed."""
        self.position += length

    def read(self, size: int | None = -1) -> bytes:
        """Read and consume up to ``size`` bytes (all remaining if negative or None)."""
        chunk = self.fill_buf()
        if size is None or size < 0:
            size = len(chunk)
        data = bytes(chunk[:size])
        self.consume(len(data))
        return data


def _read_exact(rd: BinaryIO, size: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        try:
            chunk = rd.read(size - len(buf))
        except InterruptedError:
            continue
        if chunk is None:
            raise BlockingIOError(errno.EAGAIN, "read would block")
        if not chunk:
            raise EOFError("unexpected end of file")
        buf += chunk
    return bytes(buf)


def _read_data(rd: BinaryIO, size: int) -> bytes:
    try:
        return _read_exact(rd, size)
    except (OSError, EOFError) as err:
        raise ValueDecodeError(err, in_marker=False) from err


def _read_marker(rd: BinaryIO) -> Marker:
    try:
        byte = _read_exact(rd, 1)
    except (OSError, EOFError) as err:
        raise ValueDecodeError(err, in_marker=True) from err
    return Marker.from_u8(byte[0])


def _unpack(rd: BinaryIO, packer: struct.Struct) -> Any:
    return packer.unpack(_read_data(rd, packer.size))[0]


_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_I8 = struct.Struct(">b")

_SCALARS = {
    MarkerKind.U8: _U8,
    MarkerKind.U16: _U16,
    MarkerKind.U32: _U32,
    MarkerKind.U64: struct.Struct(">Q"),
    MarkerKind.I8: _I8,
    MarkerKind.I16: struct.Struct(">h"),
    MarkerKind.I32: struct.Struct(">i"),
    MarkerKind.I64: struct.Struct(">q"),
    MarkerKind.F32: struct.Struct(">f"),
    MarkerKind.F64: struct.Struct(">d"),
}

_LENGTHS = {
    MarkerKind.STR8: _U8,
    MarkerKind.STR16: _U16,
    MarkerKind.STR32: _U32,
    MarkerKind.BIN8: _U8,
    MarkerKind.BIN16: _U16,
    MarkerKind.BIN32: _U32,
    MarkerKind.ARRAY16: _U16,
    MarkerKind.ARRAY32: _U32,
    MarkerKind.MAP16: _U16,
    MarkerKind.MAP32: _U32,
    MarkerKind.EXT8: _U8,
    MarkerKind.EXT16: _U16,
    MarkerKind.EXT32: _U32,
}

_FIXEXT_SIZES = {
    MarkerKind.FIX_EXT1: 1,
    MarkerKind.FIX_EXT2: 2,
    MarkerKind.FIX_EXT4: 4,
    MarkerKind.FIX_EXT8: 8,
    MarkerKind.FIX_EXT16: 16,
}

_STR_KINDS = frozenset({MarkerKind.FIX_STR, MarkerKind.STR8, MarkerKind.STR16, MarkerKind.STR32})
_BIN_KINDS = frozenset({MarkerKind.BIN8, MarkerKind.BIN16, MarkerKind.BIN32})
_ARRAY_KINDS = frozenset({MarkerKind.FIX_ARRAY, MarkerKind.ARRAY16, MarkerKind.ARRAY32})
_MAP_KINDS = frozenset({MarkerKind.FIX_MAP, MarkerKind.MAP16, MarkerKind.MAP32})
_EXT_KINDS = frozenset(_FIXEXT_SIZES) | {MarkerKind.EXT8, MarkerKind.EXT16, MarkerKind.EXT32}

_Take = Callable[[Any, int], BytesLike]


def _length(rd: BinaryIO, marker: Marker) -> int:
    if marker.kind.has_payload:
        return marker.value
    if marker.kind in _FIXEXT_SIZES:
        return _FIXEXT_SIZES[marker.kind]
    return _unpack(rd, _LENGTHS[marker.kind])


def _to_str(data: BytesLike) -> str | InvalidUtf8String:
    raw = bytes(data)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as err:
        return InvalidUtf8String(raw, err)


def _decode(rd: Any, take: _Take) -> Any:
    marker = _read_marker(rd)
    kind = marker.kind
    if kind is MarkerKind.NULL or kind is MarkerKind.RESERVED:
        return None
    if kind is MarkerKind.TRUE:
        return True
    if kind is MarkerKind.FALSE:
        return False
    if kind is MarkerKind.FIX_POS or kind is MarkerKind.FIX_NEG:
        return marker.value
    packer = _SCALARS.get(kind)
    if packer is not None:
        return _unpack(rd, packer)

    length = _length(rd, marker)
    if kind in _STR_KINDS:
        return _to_str(take(rd, length))
    if kind in _BIN_KINDS:
        return take(rd, length)
    if kind in _ARRAY_KINDS:
        return [_decode(rd, take) for _ in range(length)]
    if kind in _MAP_KINDS:
        return [(_decode(rd, take), _decode(rd, take)) for _ in range(length)]
    if kind in _EXT_KINDS:
        typeid = _unpack(rd, _I8)
        return Ext(typeid, take(rd, length))
    raise AssertionError(f"unhandled marker {kind.value}")


def _take_copy(rd: BinaryIO, length: int) -> bytes:
    return _read_data(rd, length)


def _take_borrowed(rd: BorrowReader, length: int) -> memoryview:
    buf = rd.fill_buf()
    if length > len(buf):
        raise ValueDecodeError(EOFError("unexpected EOF"), in_marker=False)
    view = buf[:length]
    rd.consume(length)
    return view


def read_value(rd: BinaryIO) -> Any:
    """Read one complete value from the binary reader ``rd``.

    Raises ``ValueDecodeError`` if the reader fails or runs out of bytes.
    Interrupted reads are retried.
    """
    return _decode(rd, _take_copy)


def read_value_ref(rd: BorrowReader | BytesLike) -> Any:
    """Read one complete value, borrowing string and binary payloads from the buffer.

    Binary and extension payloads come back as ``memoryview`` slices of the
    reader's buffer. A plain bytes-like object is wrapped in a
    :class:`BorrowReader`; pass one yourself to learn how many bytes the
    value consumed. A payload longer than the remaining buffer raises
    ``ValueDecodeError`` before anything of it is consumed.
    """
    if not isinstance(rd, BorrowReader):
        rd = BorrowReader(rd)
    return _decode(rd, _take_borrowed)