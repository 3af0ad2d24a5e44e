"""
Hide a short text in the low-order bit of feature-record frequencies.

Each message byte contributes 8 bits, most significant first. Bit ``i``
replaces the lowest bit of ``floor(records[i].frequency)``; every other
field, and every record past the last bit, is left untouched. The layout
carries no length prefix, so :func:`extract` either needs the byte count
or stops at a NUL byte (written by ``embed(..., terminate=True)``).

This is an illustrative codec with no secrecy guarantees.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import List, Sequence

from ..core.models import FeatureRecord

logger = logging.getLogger(__name__)

TERMINATOR = b"\x00"


def message_bits(message: str, *, terminate: bool = False) -> str:
    """Binary string of the UTF-8 bytes of ``message`` (8 bits per byte)."""
    payload = message.encode("utf-8")
    if terminate:
        payload += TERMINATOR
    return "".join(f"{byte:08b}" for byte in payload)


def _with_low_bit(frequency: float, bit: int) -> float:
    return float((int(math.floor(frequency)) & ~1) | bit)


def _low_bit(frequency: float) -> int:
    return int(math.floor(frequency)) & 1


def embed(
    message: str,
    records: Sequence[FeatureRecord],
    *,
    terminate: bool = False,
) -> List[FeatureRecord]:
    """Return a copy of ``records`` carrying ``message`` in frequency low bits."""
    if not records:
        return list(records)
    bits = message_bits(message, terminate=terminate)
    if len(bits) > len(records):
        logger.warning(
            "Message needs %d records but only %d supplied; truncating",
            len(bits),
            len(records),
        )

    out: List[FeatureRecord] = []
    for index, record in enumerate(records):
        if index < len(bits):
            bit = 1 if bits[index] == "1" else 0
            record = replace(record, frequency=_with_low_bit(record.frequency, bit))
        out.append(record)
    return out


def extract(records: Sequence[FeatureRecord], length: int | None = None) -> str:
    """
    Recover the text hidden in ``records``.

    With ``length`` (in bytes), exactly that many bytes are read. Without
    it, every complete byte is read and decoding stops at the first NUL.
    Trailing bits that do not form a whole byte are dropped; bytes that are
    not valid UTF-8 are replaced rather than raised.
    """
    bits = "".join(str(_low_bit(r.frequency)) for r in records)
    if length is not None:
        bits = bits[: max(0, int(length)) * 8]
    usable = len(bits) - len(bits) % 8
    payload = bytes(int(bits[i : i + 8], 2) for i in range(0, usable, 8))
    if length is None:
        payload = payload.split(TERMINATOR, 1)[0]
    text = payload.decode("utf-8", errors="replace")
    if "�" in text:
        logger.warning("Extracted payload contained undecodable bytes")
    return text
