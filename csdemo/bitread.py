"""Little-endian bit reader with helpers for demo-file specific encodings."""

from __future__ import annotations

import struct
from typing import BinaryIO, Union

_CHUNK_SIZE = 128 * 1024
_MAX_VAR_INT32_BYTES = 5
_MAX_VAR_INT64_BYTES = 10
_MAX_STRING_LENGTH = 4096
_MASK32 = (1 << 32) - 1
_MASK64 = (1 << 64) - 1

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class BitReader:
    """Reads bits least-significant-first from bytes or a binary stream.

    Reading past the end of the data raises ``EOFError``. Closing the reader
    releases its buffer; the underlying stream is left open.
    """

    def __init__(self, source: Source) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._stream = None
            self._buffer = bytes(source)
        else:
            self._stream = source
            self._buffer = b""
        self._bit_pos = 0
        self._closed = False

    def _ensure(self, n: int) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed BitReader")
        while len(self._buffer) * 8 - self._bit_pos < n:
            if self._stream is None:
                raise EOFError("unexpected end of bit stream")
            data = self._stream.read(_CHUNK_SIZE)
            if not data:
                raise EOFError("unexpected end of bit stream")
            consumed = self._bit_pos >> 3
            self._buffer = self._buffer[consumed:] + bytes(data)
            self._bit_pos -= consumed * 8

    def read_int(self, n: int) -> int:
        """Read an unsigned integer of ``n`` bits."""
        if n < 0:
            raise ValueError("bit count must not be negative")
        if n == 0:
            return 0
        self._ensure(n)
        start = self._bit_pos >> 3
        offset = self._bit_pos & 7
        end = start + ((offset + n + 7) >> 3)
        chunk = int.from_bytes(self._buffer[start:end], "little")
        self._bit_pos += n
        return (chunk >> offset) & ((1 << n) - 1)

    def read_bit(self) -> bool:
        """Read a single bit."""
        return self.read_int(1) == 1

    def read_single_byte(self) -> int:
        """Read eight bits as one byte value."""
        return self.read_int(8)

    def read_bytes(self, n: int) -> bytes:
        """Read ``n`` bytes, regardless of bit alignment."""
        if n == 0:
            return b""
        return self.read_int(8 * n).to_bytes(n, "little")

    def read_string(self) -> str:
        """Read a zero-terminated string of at most 4096 bytes."""
        result = bytearray()
        for _ in range(_MAX_STRING_LENGTH):
            b = self.read_single_byte()
            if b == 0:
                break
            result.append(b)
        return result.decode("utf-8", errors="replace")

    def read_float(self) -> float:
        """Read a 32-bit IEEE 754 float."""
        return struct.unpack("<f", self.read_int(32).to_bytes(4, "little"))[0]

    def _read_var_int(self, max_bytes: int, mask: int) -> int:
        result = 0
        for count in range(max_bytes):
            b = self.read_single_byte()
            result |= (b & 0x7F) << (7 * count)
            if not b & 0x80:
                break
        return result & mask

    def read_var_int32(self) -> int:
        """Read a variable-length unsigned integer of at most 32 bits."""
        return self._read_var_int(_MAX_VAR_INT32_BYTES, _MASK32)

    def read_var_int64(self) -> int:
        """Read a variable-length unsigned integer of at most 64 bits."""
        return self._read_var_int(_MAX_VAR_INT64_BYTES, _MASK64)

    def read_signed_var_int32(self) -> int:
        """Read a zig-zag encoded variable-length signed 32-bit integer."""
        res = self.read_var_int32()
        return (res >> 1) ^ -(res & 1)

    def read_signed_var_int64(self) -> int:
        """Read a zig-zag encoded variable-length signed 64-bit integer."""
        res = self.read_var_int64()
        return (res >> 1) ^ -(res & 1)

    def read_ubit_int(self) -> int:
        """Read a 6-bit-prefixed variable size unsigned integer."""
        res = self.read_int(6)
        selector = res & (16 | 32)
        if selector == 16:
            res = (res & 15) | (self.read_int(4) << 4)
        elif selector == 32:
            res = (res & 15) | (self.read_int(8) << 4)
        elif selector == 48:
            res = (res & 15) | (self.read_int(32 - 4) << 4)
        return res

    def close(self) -> None:
        """Release the buffer; further reads raise ``ValueError``."""
        self._closed = True
        self._buffer = b""
        self._stream = None

    def __enter__(self) -> BitReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()