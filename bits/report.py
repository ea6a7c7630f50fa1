"""
BITS Decode Report

What a decode claimed of its buffer, and what it left behind.

The outermost packet rarely ends on a byte boundary, so a transmission
usually carries a few trailing padding bits. Those bits are residue: the
grammar never looks at them and they do not affect the decoded tree. The
report keeps them visible so a caller can tell ordinary zero padding apart
from a buffer that carries something extra after its packet.
"""

from __future__ import annotations

from dataclasses import dataclass

from bits.packet import Packet


@dataclass(frozen=True)
class DecodeReport:
    """The result of decoding one transmission."""
    packet: Packet
    total_bits: int
    consumed_bits: int
    trailing_value: int = 0

    @property
    def trailing_bits(self) -> int:
        """Bits after the outermost packet that nothing claimed."""
        return self.total_bits - self.consumed_bits

    @property
    def coverage(self) -> float:
        """Fraction of the buffer's bits consumed by the packet tree."""
        if self.total_bits == 0:
            return 0.0
        return self.consumed_bits / self.total_bits

    @property
    def padding_is_zero(self) -> bool:
        return self.trailing_value == 0

    @property
    def packet_count(self) -> int:
        return sum(1 for _ in self.packet.walk())

    @property
    def depth(self) -> int:
        return self.packet.depth

    def __repr__(self) -> str:
        padding = "zero" if self.padding_is_zero else "NON-ZERO"
        return (
            f"<DecodeReport: {self.consumed_bits}/{self.total_bits} bits "
            f"({self.coverage:.1%}) in {self.packet_count} packet(s), "
            f"{self.trailing_bits} trailing bit(s) {padding}>"
        )
