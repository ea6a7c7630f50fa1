"""
BITS Packet Model

A decoded transmission is a tree of Packets. Every Packet has a 3-bit
version and a body, and the body is exactly one of two shapes:

- Literal: a single unsigned integer
- Operator: an operator code applied to an ordered tuple of child Packets

The two body shapes are independent frozen dataclasses joined by a Union,
so code that handles a body branches on isinstance() and never on an
inherited method.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from bits.errors import InvalidOperator

LITERAL_TYPE_ID = 4


class OperatorCode(Enum):
    """Operators addressable by a packet's 3-bit type id."""
    SUM = 0
    PRODUCT = 1
    MIN = 2
    MAX = 3
    GREATER_THAN = 5
    LESS_THAN = 6
    EQUAL = 7

    @classmethod
    def from_type_id(cls, type_id: int, bit_offset: Optional[int] = None) -> OperatorCode:
        """Map a header type id to its operator.

        Raises:
            InvalidOperator: type_id is the literal id or out of range.
        """
        try:
            return cls(type_id)
        except ValueError:
            raise InvalidOperator(type_id, bit_offset) from None

    @property
    def is_comparison(self) -> bool:
        return self in (OperatorCode.GREATER_THAN, OperatorCode.LESS_THAN, OperatorCode.EQUAL)

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    OperatorCode.SUM: "+",
    OperatorCode.PRODUCT: "*",
    OperatorCode.MIN: "min",
    OperatorCode.MAX: "max",
    OperatorCode.GREATER_THAN: ">",
    OperatorCode.LESS_THAN: "<",
    OperatorCode.EQUAL: "==",
}


@dataclass(frozen=True)
class BitRange:
    """Half-open range of bit offsets [start, end) occupied by a packet."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def __repr__(self) -> str:
        return f"<bits [{self.start}:{self.end}]>"


@dataclass(frozen=True)
class Literal:
    """A literal payload: one unsigned integer."""
    value: int


@dataclass(frozen=True)
class Operator:
    """An operator payload and the sub-packets it applies to."""
    code: OperatorCode
    children: tuple[Packet, ...]


PacketBody = Union[Literal, Operator]


@dataclass(frozen=True)
class Packet:
    """One node of a decoded BITS tree.

    Attributes:
        version: 3-bit version field (0-7)
        body: Literal or Operator
        span: bits this packet occupied in its transmission, when decoded
            from one. Not part of equality, so hand-built trees compare
            equal to decoded ones.
    """
    version: int
    body: PacketBody
    span: Optional[BitRange] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.version <= 7:
            raise ValueError(f"Packet version must fit in 3 bits, got {self.version}")

    @classmethod
    def literal(cls, version: int, value: int) -> Packet:
        return cls(version, Literal(value))

    @classmethod
    def operator(cls, version: int, code: OperatorCode, *children: Packet) -> Packet:
        return cls(version, Operator(code, tuple(children)))

    @property
    def is_literal(self) -> bool:
        return isinstance(self.body, Literal)

    @property
    def type_id(self) -> int:
        if isinstance(self.body, Literal):
            return LITERAL_TYPE_ID
        return self.body.code.value

    @property
    def children(self) -> tuple[Packet, ...]:
        """Sub-packets; empty for a literal."""
        if isinstance(self.body, Operator):
            return self.body.children
        return ()

    def walk(self) -> Iterator[Packet]:
        """Pre-order traversal of this packet and all of its descendants."""
        stack = [self]
        while stack:
            packet = stack.pop()
            yield packet
            stack.extend(reversed(packet.children))

    @property
    def depth(self) -> int:
        """Nesting depth; a lone literal has depth 1."""
        if not self.children:
            return 1
        return 1 + max(child.depth for child in self.children)

    def __repr__(self) -> str:
        if isinstance(self.body, Literal):
            return f"<Packet v{self.version} literal={self.body.value}>"
        return (
            f"<Packet v{self.version} {self.body.code.name} "
            f"children={len(self.body.children)}>"
        )
