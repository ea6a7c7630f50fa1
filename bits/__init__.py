"""
BITS - Packet Decoder
A decoder and evaluator for the BITS bit-packed packet format.

The Cursor: bit-granular reads over a byte buffer
The Parser: recursive descent into a Packet tree, with total-bits and
            packet-count framing of sub-packets
The Evaluator: version sums and operator-tree evaluation
"""

__version__ = "0.1.0"

from bits.cursor import BitCursor
from bits.packet import Packet, Literal, Operator, OperatorCode, BitRange
from bits.config import DecoderConfig, OverflowPolicy
from bits.errors import (
    BitsError,
    HexDecodeError,
    DecodeError,
    OutOfBits,
    TruncatedInput,
    InvalidOperator,
    FramingMismatch,
    InvalidArity,
    LiteralOverflow,
    NestingTooDeep,
    TrailingData,
    EvaluationOverflow,
)
from bits.parser import PacketParser, decode, decode_report
from bits.report import DecodeReport
from bits.evaluator import Evaluator, evaluate, version_sum
from bits.core import Transmission, decode_hex

__all__ = [
    "BitCursor",
    "Packet",
    "Literal",
    "Operator",
    "OperatorCode",
    "BitRange",
    "DecoderConfig",
    "OverflowPolicy",
    "BitsError",
    "HexDecodeError",
    "DecodeError",
    "OutOfBits",
    "TruncatedInput",
    "InvalidOperator",
    "FramingMismatch",
    "InvalidArity",
    "LiteralOverflow",
    "NestingTooDeep",
    "TrailingData",
    "EvaluationOverflow",
    "PacketParser",
    "decode",
    "decode_report",
    "DecodeReport",
    "Evaluator",
    "evaluate",
    "version_sum",
    "Transmission",
    "decode_hex",
]
