"""
BITS Bit Cursor

A read-only, bit-granular view over a byte buffer. Bits are numbered
big-endian: bit 0 is the most significant bit of byte 0.

The heavy lifting is done by Kaitai Struct's runtime stream, which already
knows how to pull unaligned big-endian bit fields out of a byte stream. The
cursor adds the pieces the packet grammar needs on top of that: an absolute
bit offset, bounds checking that fails before the stream is touched, and
checkpoints for measuring how many bits a sub-packet consumed.
"""

from __future__ import annotations

import io

from kaitaistruct import KaitaiStream

from bits.errors import OutOfBits


class BitCursor:
    """Sequential MSB-first bit reader.

    Usage:
        cursor = BitCursor(bytes.fromhex("D2FE28"))
        version = cursor.read_bits(3)      # 6
        mark = cursor.checkpoint()
        cursor.read_bits(3)
        cursor.bits_consumed_since(mark)   # 3
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._stream = KaitaiStream(io.BytesIO(data))
        self._total_bits = len(data) * 8

    @property
    def data(self) -> bytes:
        """The underlying buffer."""
        return self._data

    @property
    def total_bits(self) -> int:
        return self._total_bits

    @property
    def offset(self) -> int:
        """Absolute bit offset of the next bit to be read."""
        # Kaitai reads whole bytes and parks the unread low bits in bits_left
        return self._stream.pos() * 8 - self._stream.bits_left

    @property
    def remaining(self) -> int:
        """Number of bits not yet read."""
        return self._total_bits - self.offset

    def read_bits(self, n: int) -> int:
        """Read the next n bits as an unsigned integer, MSB first.

        Raises:
            OutOfBits: fewer than n bits remain; the offset is left untouched.
        """
        if n < 0:
            raise ValueError(f"Cannot read a negative number of bits ({n})")
        available = self.remaining
        if n > available:
            raise OutOfBits(n, available, self.offset)
        return self._stream.read_bits_int_be(n)

    def checkpoint(self) -> int:
        """Remember the current offset for a later bits_consumed_since()."""
        return self.offset

    def bits_consumed_since(self, checkpoint: int) -> int:
        """Bits read since checkpoint was taken."""
        return self.offset - checkpoint

    def __repr__(self) -> str:
        return f"<BitCursor: bit {self.offset}/{self._total_bits}>"
