"""
BITS Evaluator

Two read-only traversals over a decoded Packet tree:

- version_sum: the packet's own version plus that of every descendant
- evaluate: the numeric value of the operator tree

Both are pure. They share no state, so they can run in either order, or
concurrently, over the same tree.

Arithmetic is over unsigned 64-bit integers. A Sum or Product that leaves
that range is handled according to the evaluator's OverflowPolicy: CHECK
raises EvaluationOverflow, WRAP reduces the result modulo 2**64.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Sequence

from bits.config import OverflowPolicy
from bits.errors import EvaluationOverflow
from bits.packet import Literal, OperatorCode, Packet

logger = logging.getLogger(__name__)

U64_MAX = (1 << 64) - 1


def _minimum(values: Sequence[int]) -> int:
    return min(values, default=0)


def _maximum(values: Sequence[int]) -> int:
    return max(values, default=0)


def _greater_than(values: Sequence[int]) -> int:
    return int(values[0] > values[1])


def _less_than(values: Sequence[int]) -> int:
    return int(values[0] < values[1])


def _equal(values: Sequence[int]) -> int:
    return int(values[0] == values[1])


_REDUCERS: dict[OperatorCode, Callable[[Sequence[int]], int]] = {
    OperatorCode.SUM: sum,
    OperatorCode.PRODUCT: math.prod,
    OperatorCode.MIN: _minimum,
    OperatorCode.MAX: _maximum,
    OperatorCode.GREATER_THAN: _greater_than,
    OperatorCode.LESS_THAN: _less_than,
    OperatorCode.EQUAL: _equal,
}


class Evaluator:
    """Computes the value of a Packet tree under an overflow policy.

    Usage:
        Evaluator().evaluate(packet)
        Evaluator(OverflowPolicy.WRAP).evaluate(packet)
    """

    def __init__(self, overflow: OverflowPolicy = OverflowPolicy.CHECK) -> None:
        self.overflow = overflow

    def evaluate(self, packet: Packet) -> int:
        body = packet.body
        if isinstance(body, Literal):
            return body.value

        values = [self.evaluate(child) for child in body.children]
        result = _REDUCERS[body.code](values)
        if result > U64_MAX:
            if self.overflow is OverflowPolicy.WRAP:
                logger.debug("%s result %d wrapped modulo 2**64", body.code.name, result)
                return result & U64_MAX
            raise EvaluationOverflow(body.code.name, result)
        return result

    def version_sum(self, packet: Packet) -> int:
        return version_sum(packet)

    def __repr__(self) -> str:
        return f"<Evaluator overflow={self.overflow.value}>"


def version_sum(packet: Packet) -> int:
    """Sum of the version fields of packet and all of its descendants."""
    return packet.version + sum(version_sum(child) for child in packet.children)


def evaluate(packet: Packet, overflow: OverflowPolicy = OverflowPolicy.CHECK) -> int:
    """Evaluate a Packet tree to a single unsigned integer.

    Raises:
        EvaluationOverflow: a Sum or Product exceeds 64 bits under CHECK
    """
    return Evaluator(overflow).evaluate(packet)
