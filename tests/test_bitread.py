import io
import struct

import pytest

from csdemo.bitread import BitReader


def _pack_bits(fields):
    value = 0
    width_total = 0
    for field, width in fields:
        value |= field << width_total
        width_total += width
    return value.to_bytes((width_total + 7) // 8, "little")


def _varint(n):
    out = bytearray()
    while True:
        b = n & 0x7F
        n >>= 7
        if n:
            out.append(b | 0x80)
        else:
            out.append(b)
            return bytes(out)


def _zigzag32(n):
    return ((n << 1) ^ (n >> 31)) & 0xFFFFFFFF


def _zigzag64(n):
    return ((n << 1) ^ (n >> 63)) & ((1 << 64) - 1)


def test_read_single_bytes_return_input():
    data = b"\x00\x7f\x80\xff"
    reader = BitReader(data)
    assert bytes(reader.read_single_byte() for _ in data) == data


@pytest.mark.parametrize("widths", [[1, 3, 4], [5, 11, 16], [32, 7, 25]])
def test_read_int_round_trip(widths):
    values = [(1 << w) - 1 - (w % 3) for w in widths]
    reader = BitReader(_pack_bits(list(zip(values, widths))))
    assert [reader.read_int(w) for w in widths] == values


def test_read_bit_sequence():
    bits = [1, 0, 1, 1, 0, 0, 1, 0]
    reader = BitReader(_pack_bits([(b, 1) for b in bits]))
    assert [int(reader.read_bit()) for _ in bits] == bits


def test_read_bytes_unaligned():
    payload = b"hello"
    reader = BitReader(_pack_bits([(1, 3), (int.from_bytes(payload, "little"), 40)]))
    assert reader.read_int(3) == 1
    assert reader.read_bytes(len(payload)) == payload


def test_read_string_stops_at_zero():
    reader = BitReader(b"hello\x00world\x00")
    assert reader.read_string() == "hello"
    assert reader.read_string() == "world"


def test_read_string_limit():
    reader = BitReader(b"a" * 5000)
    assert len(reader.read_string()) == 4096


@pytest.mark.parametrize("value", [0.0, 1.5, -2.25, 1024.0])
def test_read_float(value):
    assert BitReader(struct.pack("<f", value)).read_float() == value


def test_read_var_int32_known_encoding():
    assert BitReader(b"\x96\x01").read_var_int32() == 150


@pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 2**31, 2**32 - 1])
def test_var_int32_round_trip(value):
    assert BitReader(_varint(value)).read_var_int32() == value


@pytest.mark.parametrize("value", [0, 1, 2**35, 2**63, 2**64 - 1])
def test_var_int64_round_trip(value):
    assert BitReader(_varint(value)).read_var_int64() == value


def test_var_int32_reads_at_most_five_bytes():
    reader = BitReader(b"\xff" * 6 + b"\x01")
    reader.read_var_int32()
    assert reader.read_single_byte() == 0xFF


@pytest.mark.parametrize("value", [0, -1, 1, -64, 12345, -(2**31), 2**31 - 1])
def test_signed_var_int32_round_trip(value):
    assert BitReader(_varint(_zigzag32(value))).read_signed_var_int32() == value


@pytest.mark.parametrize("value", [0, -1, 2**40, -(2**63), 2**63 - 1])
def test_signed_var_int64_round_trip(value):
    assert BitReader(_varint(_zigzag64(value))).read_signed_var_int64() == value


def test_read_ubit_int_small():
    reader = BitReader(_pack_bits([(15, 6)]))
    assert reader.read_ubit_int() == 15


def test_read_ubit_int_with_four_extra_bits():
    reader = BitReader(_pack_bits([(0b010011, 6), (0b0101, 4)]))
    assert reader.read_ubit_int() == 83


def test_stream_source_matches_bytes_source():
    data = bytes(range(256)) * 3
    from_bytes = BitReader(data)
    from_stream = BitReader(io.BytesIO(data))
    for width in (3, 13, 29, 64, 7):
        assert from_stream.read_int(width) == from_bytes.read_int(width)


def test_eof_raises():
    reader = BitReader(b"\x01")
    reader.read_single_byte()
    with pytest.raises(EOFError):
        reader.read_bit()


def test_eof_on_stream():
    reader = BitReader(io.BytesIO(b"\x01\x02"))
    with pytest.raises(EOFError):
        reader.read_int(17)


def test_closed_reader_raises():
    with BitReader(b"\x01\x02") as reader:
        assert reader.read_single_byte() == 1
    with pytest.raises(ValueError):
        reader.read_single_byte()