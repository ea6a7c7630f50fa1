"""
BITS Core: hex intake and Transmission

Transmissions usually arrive as hexadecimal text. decode_hex() turns that
text into bytes, and Transmission wraps the bytes with the decode and
evaluate operations so callers don't have to wire the pieces together:

    tx = Transmission.from_hex("9C0141080250320F1802104A08")
    tx.packet            # the decoded tree
    tx.version_sum()
    tx.evaluate()        # 1
    tx.report()          # DecodeReport with coverage and padding
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Optional, Union

from bits.config import DecoderConfig, OverflowPolicy
from bits.errors import HexDecodeError
from bits.evaluator import Evaluator, version_sum
from bits.packet import Packet
from bits.parser import decode_report
from bits.report import DecodeReport

logger = logging.getLogger(__name__)

HEX_DIGITS = frozenset("0123456789ABCDEFabcdef")


def decode_hex(text: str) -> bytes:
    """Convert hexadecimal text to bytes.

    Surrounding whitespace is ignored; anything else that is not a hex
    digit, or an odd number of digits, is rejected.

    Raises:
        HexDecodeError: odd length or a non-hex character
    """
    text = text.strip()
    for position, char in enumerate(text):
        if char not in HEX_DIGITS:
            raise HexDecodeError(f"{char!r} is not a hex digit", position)
    if len(text) % 2 != 0:
        raise HexDecodeError(f"odd number of hex digits ({len(text)})")
    return bytes.fromhex(text)


class Transmission:
    """A BITS transmission with decode and evaluate capabilities.

    Decoding happens once, on first use, and the report is cached.
    """

    def __init__(
        self,
        data: bytes,
        origin: str = "<bytes>",
        config: Optional[DecoderConfig] = None,
    ) -> None:
        self._data = bytes(data)
        self._origin = origin
        self._config = config
        self._report: Optional[DecodeReport] = None

    @classmethod
    def from_hex(cls, text: str, config: Optional[DecoderConfig] = None) -> Transmission:
        return cls(decode_hex(text), "<hex>", config)

    @classmethod
    def from_file(
        cls, path: Union[str, Path], config: Optional[DecoderConfig] = None
    ) -> Transmission:
        """Load a file holding a transmission as hex text."""
        path = Path(path)
        return cls(decode_hex(path.read_text()), str(path), config)

    @classmethod
    def load(
        cls,
        source: Union[str, bytes, Path],
        config: Optional[DecoderConfig] = None,
    ) -> Transmission:
        """Load raw bytes, or the hex text stored at a path."""
        if isinstance(source, (bytes, bytearray)):
            return cls(source, "<bytes>", config)
        if isinstance(source, (str, Path)):
            return cls.from_file(source, config)
        raise TypeError(f"Cannot load from {type(source)}")

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def hash(self) -> str:
        """SHA-256 of the raw bytes."""
        return hashlib.sha256(self._data).hexdigest()

    def report(self) -> DecodeReport:
        """Decode (once) and return the full DecodeReport."""
        if self._report is None:
            logger.debug("decoding %d byte(s) from %s", len(self._data), self._origin)
            self._report = decode_report(self._data, self._config)
        return self._report

    @property
    def packet(self) -> Packet:
        return self.report().packet

    def version_sum(self) -> int:
        return version_sum(self.packet)

    def evaluate(self, overflow: OverflowPolicy = OverflowPolicy.CHECK) -> int:
        return Evaluator(overflow).evaluate(self.packet)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<Transmission: {len(self._data)} bytes from {self._origin}>"
