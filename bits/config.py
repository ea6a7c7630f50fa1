"""
BITS Decoder and Evaluator Settings
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum

# Python frames the parser spends per nesting level, and headroom for callers
FRAMES_PER_LEVEL = 3
STACK_MARGIN = 200


def max_supported_depth() -> int:
    """Deepest nesting the current recursion limit can decode."""
    return max(1, (sys.getrecursionlimit() - STACK_MARGIN) // FRAMES_PER_LEVEL)


class OverflowPolicy(Enum):
    """What the evaluator does when Sum or Product exceeds 64 bits."""
    CHECK = "check"   # raise EvaluationOverflow
    WRAP = "wrap"     # reduce modulo 2**64


@dataclass(frozen=True)
class DecoderConfig:
    """Limits applied while decoding a transmission.

    Attributes:
        max_depth: deepest operator nesting accepted before NestingTooDeep
        literal_bits: widest literal accepted before LiteralOverflow
        strict_padding: reject non-zero bits after the outermost packet
    """
    max_depth: int = 128
    literal_bits: int = 64
    strict_padding: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
        if self.max_depth > max_supported_depth():
            raise ValueError(
                f"max_depth {self.max_depth} exceeds the {max_supported_depth()} levels "
                f"the interpreter recursion limit allows"
            )
        if self.literal_bits < 4:
            raise ValueError(f"literal_bits must be at least 4, got {self.literal_bits}")


DEFAULT_CONFIG = DecoderConfig()
