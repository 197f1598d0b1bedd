import pytest

from packwire.marker import Marker, MarkerKind


@pytest.mark.parametrize("n", range(256))
def test_every_byte_round_trips(n):
    assert Marker.from_u8(n).to_u8() == n


def test_fixed_bytes_from_source_table():
    assert Marker(MarkerKind.TRUE).to_u8() == 0xC3
    assert Marker(MarkerKind.NULL).to_u8() == 0xC0
    assert Marker(MarkerKind.F64).to_u8() == 0xCB
    assert Marker(MarkerKind.U8).to_u8() == 0xCC
    assert Marker(MarkerKind.RESERVED).to_u8() == 0xC1


@pytest.mark.parametrize(
    "byte, kind",
    [
        (0xC0, MarkerKind.NULL),
        (0xC1, MarkerKind.RESERVED),
        (0xC2, MarkerKind.FALSE),
        (0xC3, MarkerKind.TRUE),
        (0xC4, MarkerKind.BIN8),
        (0xCA, MarkerKind.F32),
        (0xCD, MarkerKind.U16),
        (0xD3, MarkerKind.I64),
        (0xD8, MarkerKind.FIX_EXT16),
        (0xDB, MarkerKind.STR32),
        (0xDD, MarkerKind.ARRAY32),
        (0xDF, MarkerKind.MAP32),
    ],
)
def test_from_u8_fixed_kinds(byte, kind):
    marker = Marker.from_u8(byte)
    assert marker.kind is kind
    assert marker.value is None


def test_from_u8_positive_fixint():
    assert Marker.from_u8(0x2A) == Marker(MarkerKind.FIX_POS, 42)


def test_from_u8_negative_fixint_is_signed():
    marker = Marker.from_u8(0xFF)
    assert marker.kind is MarkerKind.FIX_NEG
    assert marker.value == -1


def test_from_u8_fix_lengths():
    assert Marker.from_u8(0xAA) == Marker(MarkerKind.FIX_STR, 10)
    assert Marker.from_u8(0x92).kind is MarkerKind.FIX_ARRAY
    assert Marker.from_u8(0x92).value == 2
    assert Marker.from_u8(0x82).kind is MarkerKind.FIX_MAP
    assert Marker.from_u8(0x82).value == 2


def test_fix_lengths_are_masked():
    assert Marker(MarkerKind.FIX_STR, 0x25).to_u8() == Marker(MarkerKind.FIX_STR, 0x05).to_u8()
    assert Marker(MarkerKind.FIX_ARRAY, 0x13).to_u8() == Marker(MarkerKind.FIX_ARRAY, 0x03).to_u8()
    assert Marker(MarkerKind.FIX_MAP, 0x11).to_u8() == Marker(MarkerKind.FIX_MAP, 0x01).to_u8()


def test_negative_fixint_round_trip():
    marker = Marker(MarkerKind.FIX_NEG, -18)
    assert Marker.from_u8(marker.to_u8()) == marker


def test_int_conversion_matches_to_u8():
    marker = Marker(MarkerKind.FIX_STR, 3)
    assert int(marker) == marker.to_u8()


@pytest.mark.parametrize("n", [-1, 256, 1000])
def test_from_u8_rejects_non_byte(n):
    with pytest.raises(ValueError):
        Marker.from_u8(n)


def test_payload_rejected_for_fixed_kind():
    with pytest.raises(ValueError):
        Marker(MarkerKind.U8, 3)


def test_payload_required_for_fix_kind():
    with pytest.raises(ValueError):
        Marker(MarkerKind.FIX_POS)


def test_payload_range_checked():
    with pytest.raises(ValueError):
        Marker(MarkerKind.FIX_NEG, -129)
    with pytest.raises(ValueError):
        Marker(MarkerKind.FIX_POS, 256)


def test_has_payload_property():
    assert Marker.from_u8(0x82).kind.has_payload is True
    assert Marker.from_u8(0xDE).kind.has_payload is False


def test_markers_are_hashable_and_equal_by_value():
    markers = {Marker.from_u8(0x90), Marker(MarkerKind.FIX_ARRAY, 0)}
    assert len(markers) == 1