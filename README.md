# packwire

packwire is a low-level MessagePack library. It has one writer for each wire format, so you
choose exactly how each value is encoded. It also has "most compact" writers and a decoder
that reads one whole value at a time.

The writers take any binary file object with a `write` method, such as `io.BytesIO`. The
decoder takes any object with a `read` method. It can also take an in-memory buffer.

## Installing

```
pip install packwire
```

## Markers

Every MessagePack value starts with a marker byte. `packwire.marker.Marker` represents that
byte. It has a `kind` (a `MarkerKind`) and a `value`. The `value` holds the number packed
into the byte for the fix kinds: positive and negative fixint, and the fixstr, fixarray and
fixmap lengths. For every other kind it is `None`.

```python
from packwire.marker import Marker, MarkerKind

m = Marker.from_u8(0x93)
assert m == Marker(MarkerKind.FIX_ARRAY, 3)
assert m.to_u8() == 0x93
assert Marker.from_u8(0xFF) == Marker(MarkerKind.FIX_NEG, -1)
```

`packwire.marker.MSGPACK_VERSION` holds the version of the specification that is followed.

## Writing

`packwire.encode` writes markers, lengths, nil, booleans, floats, strings and binary data.
`packwire.encode_int` writes integers.

```python
import io
from packwire.encode import write_bool, write_str, write_array_len, write_f64, write_bin
from packwire.encode_int import write_pfix, write_u16, write_sint

buf = io.BytesIO()
write_bool(buf, True)          # c3
write_pfix(buf, 42)            # 2a
write_u16(buf, 42)             # cd 00 2a
write_sint(buf, 300)           # most compact: cd 01 2c
write_str(buf, "le message")   # aa 6c 65 20 ...
write_bin(buf, b"\xcc\x80")    # c4 02 cc 80
write_array_len(buf, 2)        # 92
write_f64(buf, 42.0)           # cb 40 45 00 00 00 00 00 00
```

These writers always use one fixed encoding:

- `write_pfix`, `write_u8`, `write_u16`, `write_u32` and `write_u64`
- `write_nfix`, `write_i8`, `write_i16`, `write_i32` and `write_i64`
- `write_f32` and `write_f64`

The following writers pick the shortest encoding and return the `Marker` they used:

- `write_uint` and `write_sint`
- `write_str_len`, `write_bin_len`, `write_array_len` and `write_map_len`
- `write_ext_meta(wr, length, ty)`

`write_sint` uses the unsigned encodings for non-negative values. `write_ext_meta` writes the
length and the type id. It rejects negative type ids, which are reserved by the
specification.

The `write_data_*` functions write the raw big-endian bytes of a number with no marker in
front.

Values that do not fit the chosen encoding raise `ValueError`, and non-integers raise
`TypeError`. This applies, for example, to `write_pfix(buf, 200)` and to
`write_nfix(buf, -33)`.

An I/O failure raises `InvalidMarkerWriteError` or `InvalidDataWriteError`. Both are
subclasses of `ValueWriteError`, which is an `OSError`.

## Reading whole values

`packwire.value.read_value` reads one complete value of any type. The result maps to Python
types like this:

| MessagePack | Python |
|---|---|
| nil (and the reserved `0xc1`) | `None` |
| boolean | `bool` |
| integer | `int` |
| f32 / f64 | `float` |
| string | `str`, or `InvalidUtf8String` if the bytes are not valid UTF-8 |
| binary | `bytes` |
| array | `list` |
| map | `list` of `(key, value)` tuples, in encoded order |
| extension | `Ext(typeid, data)` |

```python
import io
from packwire.value import read_value

assert read_value(io.BytesIO(b"\x92\xa2le\x01")) == ["le", 1]
assert read_value(io.BytesIO(b"\x82\x00\xa2le\x01\xa4shit")) == [(0, "le"), (1, "shit")]
```

`read_value_ref` decodes from an in-memory buffer without copying. Binary and extension
payloads come back as `memoryview` slices of that buffer. You can pass the buffer itself, or
wrap it in a `BorrowReader`. Its `position` then tells you how many bytes the value used:

```python
from packwire.value import read_value_ref, BorrowReader

rd = BorrowReader(b"\xc4\x02\xcc\x80\xc0")
value = read_value_ref(rd)
assert bytes(value) == b"\xcc\x80"
assert rd.position == 4
assert read_value_ref(rd) is None
```

A read that fails or runs out of bytes raises `ValueDecodeError`:

- `in_marker` tells whether the failure happened in a marker byte or in the bytes that
  follow it.
- `kind()` returns `"unexpected_eof"`, `"would_block"`, `"interrupted"` or `"other"`.

`read_value` retries interrupted reads.

## What packwire does not do

- There are no typed readers for single formats, such as a reader that accepts only a u16 or
  only a string header. Reading is done with the whole-value decoder only. To learn which
  encoding was used, check the first byte with `Marker.from_u8`.
- There is no writer for whole Python objects. You build values from the writers above, for
  example with `write_array_len` followed by each element.
- There is no command-line tool.