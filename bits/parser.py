"""
BITS Packet Parser

Recursive descent over a BitCursor. The grammar, in bits:

    packet    := version:3 type_id:3 (literal | operator)
    literal   := (1 nibble:4)* 0 nibble:4                  (type_id == 4)
    operator  := 0 length:15 packet*  -- packets fill exactly `length` bits
               | 1 count:11 packet{count}

Children are parsed completely before their parent is built, so a Packet
tree is assembled bottom-up and is immutable once returned.

Usage:
    packet = decode(bytes.fromhex("38006F45291200"))
    report = decode_report(data, DecoderConfig(strict_padding=True))
"""

from __future__ import annotations

import logging
from typing import Optional

from bits.config import DEFAULT_CONFIG, DecoderConfig
from bits.cursor import BitCursor
from bits.errors import (
    FramingMismatch,
    InvalidArity,
    LiteralOverflow,
    NestingTooDeep,
    OutOfBits,
    TrailingData,
    TruncatedInput,
)
from bits.packet import (
    LITERAL_TYPE_ID,
    BitRange,
    Literal,
    Operator,
    OperatorCode,
    Packet,
)
from bits.report import DecodeReport

logger = logging.getLogger(__name__)

VERSION_BITS = 3
TYPE_ID_BITS = 3
HEADER_BITS = VERSION_BITS + TYPE_ID_BITS
GROUP_PAYLOAD_BITS = 4
TOTAL_BITS_FIELD = 15
PACKET_COUNT_FIELD = 11
# Header plus a single literal group
MIN_PACKET_BITS = HEADER_BITS + 1 + GROUP_PAYLOAD_BITS

TOTAL_BITS_FRAMING = 0
PACKET_COUNT_FRAMING = 1


class PacketParser:
    """Applies the BITS grammar to a cursor.

    One parser reads one transmission; the cursor is advanced in place and
    is left positioned just after the outermost packet.
    """

    def __init__(self, cursor: BitCursor, config: Optional[DecoderConfig] = None) -> None:
        self._cursor = cursor
        self._config = config or DEFAULT_CONFIG

    @property
    def cursor(self) -> BitCursor:
        return self._cursor

    def parse(self) -> Packet:
        """Parse the outermost packet.

        Raises:
            TruncatedInput: not even a header is left to read
            DecodeError: any other malformed input
        """
        remaining = self._cursor.remaining
        if remaining < HEADER_BITS:
            raise TruncatedInput(HEADER_BITS, remaining, self._cursor.offset)
        return self._packet(depth=1)

    def _packet(self, depth: int) -> Packet:
        start = self._cursor.checkpoint()
        if depth > self._config.max_depth:
            raise NestingTooDeep(self._config.max_depth, start)

        version = self._cursor.read_bits(VERSION_BITS)
        type_id = self._cursor.read_bits(TYPE_ID_BITS)

        if type_id == LITERAL_TYPE_ID:
            body = Literal(self._literal_value())
        else:
            code = OperatorCode.from_type_id(type_id, start + VERSION_BITS)
            body = Operator(code, self._children(code, depth))

        span = BitRange(start, self._cursor.offset)
        packet = Packet(version, body, span)
        logger.debug("packet at bits %d:%d: %r", span.start, span.end, packet)
        return packet

    def _literal_value(self) -> int:
        """Concatenate continuation-flagged nibble groups, most significant first."""
        limit = self._config.literal_bits
        value = 0
        more = 1
        while more:
            more = self._cursor.read_bits(1)
            value = (value << GROUP_PAYLOAD_BITS) | self._cursor.read_bits(GROUP_PAYLOAD_BITS)
            if value.bit_length() > limit:
                raise LiteralOverflow(value.bit_length(), limit, self._cursor.offset)
        return value

    def _children(self, code: OperatorCode, depth: int) -> tuple[Packet, ...]:
        framing = self._cursor.read_bits(1)
        if framing == TOTAL_BITS_FRAMING:
            children = self._children_by_length(depth)
        else:
            children = self._children_by_count(depth)

        if code.is_comparison and len(children) != 2:
            raise InvalidArity(code.name, len(children), self._cursor.offset)
        return children

    def _children_by_length(self, depth: int) -> tuple[Packet, ...]:
        declared = self._cursor.read_bits(TOTAL_BITS_FIELD)
        if declared > self._cursor.remaining:
            raise OutOfBits(declared, self._cursor.remaining, self._cursor.offset)

        start = self._cursor.checkpoint()
        children = []
        consumed = 0
        while consumed != declared:
            if declared - consumed < MIN_PACKET_BITS:
                # No packet fits in what is left of the budget
                raise FramingMismatch(declared, consumed, self._cursor.offset)
            children.append(self._packet(depth + 1))
            consumed = self._cursor.bits_consumed_since(start)
            if consumed > declared:
                raise FramingMismatch(declared, consumed, self._cursor.offset)
        return tuple(children)

    def _children_by_count(self, depth: int) -> tuple[Packet, ...]:
        count = self._cursor.read_bits(PACKET_COUNT_FIELD)
        children = []
        for _ in range(count):
            children.append(self._packet(depth + 1))
        return tuple(children)


def decode_report(buffer: bytes, config: Optional[DecoderConfig] = None) -> DecodeReport:
    """Decode a transmission and account for every bit of the buffer.

    Raises:
        TrailingData: config.strict_padding is set and the bits after the
            outermost packet are not all zero
        DecodeError: the buffer does not hold a well-formed packet
    """
    config = config or DEFAULT_CONFIG
    cursor = BitCursor(buffer)
    try:
        packet = PacketParser(cursor, config).parse()
    except RecursionError:
        # The recursion limit was lowered after config validated max_depth
        raise NestingTooDeep(config.max_depth, cursor.offset) from None

    consumed = cursor.offset
    trailing_bits = cursor.remaining
    trailing_value = cursor.read_bits(trailing_bits)
    if config.strict_padding and trailing_value:
        raise TrailingData(trailing_bits, consumed)

    report = DecodeReport(
        packet=packet,
        total_bits=cursor.total_bits,
        consumed_bits=consumed,
        trailing_value=trailing_value,
    )
    logger.info(
        "decoded %d packet(s) from %d/%d bits, %d trailing",
        report.packet_count, consumed, cursor.total_bits, trailing_bits,
    )
    return report


def decode(buffer: bytes, config: Optional[DecoderConfig] = None) -> Packet:
    """Decode a transmission into its Packet tree.

    Padding bits after the outermost packet are ignored unless
    config.strict_padding is set.

    Raises:
        TruncatedInput: the buffer is too short for a header
        InvalidOperator: an operator packet has an unknown type id
        OutOfBits: a nested read ran past the end of the buffer
        FramingMismatch: sub-packets overran their declared bit length
    """
    return decode_report(buffer, config).packet
