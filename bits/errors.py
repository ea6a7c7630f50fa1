"""
BITS Error Taxonomy

Every failure raised by the package derives from BitsError. Parse failures
are DecodeErrors and remember the bit offset where they were detected, so a
caller can point at the exact spot in a transmission that went wrong.

Nothing here is retryable: malformed input cannot be repaired locally, and
a decode either yields a complete Packet tree or raises.
"""

from __future__ import annotations

from typing import Optional


class BitsError(Exception):
    """Root of all BITS errors."""


class HexDecodeError(BitsError, ValueError):
    """Hex text could not be turned into bytes."""

    def __init__(self, message: str, position: Optional[int] = None):
        where = f" at character {position}" if position is not None else ""
        super().__init__(f"Bad hex input{where}: {message}")
        self.position = position


class DecodeError(BitsError):
    """A transmission could not be decoded into a Packet tree."""

    def __init__(self, message: str, bit_offset: Optional[int] = None):
        where = f" at bit {bit_offset}" if bit_offset is not None else ""
        super().__init__(f"Decode error{where}: {message}")
        self.bit_offset = bit_offset


class OutOfBits(DecodeError, EOFError):
    """A read asked for more bits than the buffer has left."""

    def __init__(self, requested: int, available: int, bit_offset: Optional[int] = None):
        super().__init__(
            f"requested {requested} bit(s), only {available} remain",
            bit_offset,
        )
        self.requested = requested
        self.available = available


class TruncatedInput(OutOfBits):
    """The header of the outermost packet is not even present."""


class InvalidOperator(DecodeError):
    """An operator packet carries a type id with no known operator."""

    def __init__(self, type_id: int, bit_offset: Optional[int] = None):
        super().__init__(f"type id {type_id} is not an operator", bit_offset)
        self.type_id = type_id


class FramingMismatch(DecodeError):
    """Sub-packets under total-bits framing do not fill the declared length."""

    def __init__(self, declared: int, consumed: int, bit_offset: Optional[int] = None):
        super().__init__(
            f"sub-packets declared {declared} bit(s) but consumed {consumed}",
            bit_offset,
        )
        self.declared = declared
        self.consumed = consumed


class InvalidArity(DecodeError):
    """A comparison operator does not have exactly two children."""

    def __init__(self, operator: str, count: int, bit_offset: Optional[int] = None):
        super().__init__(f"{operator} needs 2 sub-packets, got {count}", bit_offset)
        self.operator = operator
        self.count = count


class LiteralOverflow(DecodeError):
    """A literal's nibble groups add up to more bits than allowed."""

    def __init__(self, width: int, limit: int, bit_offset: Optional[int] = None):
        super().__init__(f"literal is {width} bits wide, limit is {limit}", bit_offset)
        self.width = width
        self.limit = limit


class NestingTooDeep(DecodeError):
    """Operator packets nest deeper than the configured maximum."""

    def __init__(self, limit: int, bit_offset: Optional[int] = None):
        super().__init__(f"packets nest deeper than {limit} levels", bit_offset)
        self.limit = limit


class TrailingData(DecodeError):
    """Padding after the outermost packet is not all zero bits."""

    def __init__(self, trailing_bits: int, bit_offset: Optional[int] = None):
        super().__init__(f"{trailing_bits} trailing bit(s) are not zero padding", bit_offset)
        self.trailing_bits = trailing_bits


class EvaluationOverflow(BitsError, OverflowError):
    """An operator result does not fit in an unsigned 64-bit integer."""

    def __init__(self, operator: str, value: int):
        super().__init__(f"{operator} result {value} exceeds 64 bits")
        self.operator = operator
        self.value = value
