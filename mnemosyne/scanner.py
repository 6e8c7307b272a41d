"""Searching memory for byte signatures.

Two search strategies are provided. The normal scanner looks for the first
byte of the signature and checks each candidate in turn. The wide scanner
compiles the whole signature into one byte pattern and lets the regular
expression engine walk the buffer. Both give the same results. Modes that
have no implementation of their own fall back to the normal scanner.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import IntEnum
from functools import lru_cache

from .memory import MemorySpan
from .signature import Signature, parse_signature

__all__ = [
    "ScanMode",
    "ScanAlign",
    "Scanner",
    "detect_scan_mode",
    "do_scan",
]

# Below this many bytes the wide scanner is not worth setting up.
_WIDE_MIN_SIZE = 64
_ALIGNMENT = 16


class ScanMode(IntEnum):
    """Which scanning strategy to use."""

    NORMAL = 0
    """Plain search for the first byte, checking each candidate."""
    SSE4_2 = 1
    """Reserved; scans as NORMAL."""
    AVX2 = 2
    """Wide scanner matching the whole signature as one compiled pattern."""
    AVX512 = 3
    """Reserved; scans as NORMAL."""
    MAX = 4


class ScanAlign(IntEnum):
    """The alignment a signature result must have."""

    X1 = 0
    """Any address."""
    X16 = 1
    """Addresses that are multiples of 16, such as the start of functions."""


def detect_scan_mode() -> ScanMode:
    """Return the fastest scan mode this implementation provides."""
    return ScanMode.AVX2


def _as_buffer(data) -> bytes | bytearray:
    if isinstance(data, (bytes, bytearray)):
        return data
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return bytes(view)


def _matches_at(buf, pos: int, sig: Signature) -> bool:
    window = buf[pos:pos + len(sig)]
    if len(window) < len(sig):
        return False
    return all(element.matches(value) for element, value in zip(sig, window))


def _normal_x1(buf, begin: int, end: int, sig: Signature, base: int) -> int | None:
    first = sig[0]
    if first.mask == 0xFF:
        upper = end - (len(sig) - 1)
        needle = bytes([first.byte])
        pos = buf.find(needle, begin, upper)
        while pos != -1:
            if _matches_at(buf, pos, sig):
                return pos
            pos = buf.find(needle, pos + 1, upper)
        return None

    for pos in range(begin, end - len(sig) + 1):
        if _matches_at(buf, pos, sig):
            return pos
    return None


def _normal_x16(buf, begin: int, end: int, sig: Signature, base: int) -> int | None:
    # `end` becomes the upper bound for where the first byte may lie.
    end -= len(sig) - 1

    first = sig[0]
    if first.mask == 0xFF:
        needle = bytes([first.byte])
        pos = buf.find(needle, begin, end)
        while pos != -1:
            if (base + pos) % _ALIGNMENT == 0 and _matches_at(buf, pos, sig):
                return pos
            pos = buf.find(needle, pos + 1, end)
        return None

    for pos in range(begin, end, _ALIGNMENT):
        if _matches_at(buf, pos, sig):
            return pos
    return None


def _element_pattern(byte: int, mask: int) -> bytes:
    if mask == 0xFF:
        return re.escape(bytes([byte]))
    if mask == 0:
        return b"."
    choices = b"".join(
        re.escape(bytes([value])) for value in range(256) if value & mask == byte
    )
    return b"[" + choices + b"]"


@lru_cache(maxsize=256)
def _compile(sig: Signature) -> re.Pattern[bytes]:
    source = b"".join(_element_pattern(e.byte, e.mask) for e in sig)
    return re.compile(source, re.DOTALL)


def _wide_x1(buf, begin: int, end: int, sig: Signature, base: int) -> int | None:
    if end - begin < _WIDE_MIN_SIZE:
        return _normal_x1(buf, begin, end, sig, base)
    match = _compile(sig).search(buf, begin, end)
    return match.start() if match else None


def _wide_x16(buf, begin: int, end: int, sig: Signature, base: int) -> int | None:
    if end - begin < _WIDE_MIN_SIZE:
        return _normal_x16(buf, begin, end, sig, base)
    pattern = _compile(sig)
    for pos in range(begin, end - len(sig) + 1, _ALIGNMENT):
        if pattern.match(buf, pos, end):
            return pos
    return None


_IMPLS = {
    (ScanMode.AVX2, ScanAlign.X1): _wide_x1,
    (ScanMode.AVX2, ScanAlign.X16): _wide_x16,
}


def do_scan(
    data,
    base_address: int,
    sig: Signature,
    mode: ScanMode = ScanMode.NORMAL,
    align: ScanAlign = ScanAlign.X1,
) -> int | None:
    """Search ``data``, which starts at ``base_address``, for ``sig``.

    Return the address of the first match, or None. Leading and trailing
    fully wildcarded bytes are trimmed before searching but still count
    toward the match's position and extent.
    """
    mode = ScanMode(mode)
    align = ScanAlign(align)
    if not sig:
        return None

    buf = _as_buffer(data)
    begin, end = 0, len(buf)
    left_stripped = 0

    if align is ScanAlign.X1:
        while sig[0].mask == 0:
            left_stripped += 1
            sig = sig.subsig(1)
            begin += 1
            if not sig:
                return None if begin > end else base_address + begin - left_stripped
    else:
        begin = -base_address % _ALIGNMENT

    while sig and sig[-1].mask == 0:
        sig = sig.subsig(0, len(sig) - 1)
        end -= 1

    if not sig:
        # Entirely wildcard signature under alignment: the first aligned slot fits.
        return base_address + begin if begin <= end else None

    if begin >= end:
        return None

    if align is ScanAlign.X1:
        impl = _IMPLS.get((mode, align), _normal_x1)
    else:
        impl = _IMPLS.get((mode, align), _normal_x16)

    result = impl(buf, begin, end, sig, base_address)
    if result is None:
        return None
    return base_address + result - left_stripped


def _to_spans(ranges) -> tuple[MemorySpan, ...]:
    if isinstance(ranges, MemorySpan):
        return (ranges,)
    if isinstance(ranges, (bytes, bytearray, memoryview)):
        return (MemorySpan(ranges),)
    if not isinstance(ranges, Iterable):
        raise TypeError(f"cannot scan an object of type {type(ranges).__name__}")
    spans = tuple(ranges)
    for span in spans:
        if not isinstance(span, MemorySpan):
            raise TypeError(f"scan ranges must be MemorySpan, not {type(span).__name__}")
    return spans


class Scanner:
    """Searches one or more memory spans for signatures."""

    def __init__(self, ranges, mode: ScanMode | None = None) -> None:
        self.ranges = _to_spans(ranges)
        self.mode = detect_scan_mode() if mode is None else ScanMode(mode)

    def scan_signature(
        self, sig: Signature | str, align: ScanAlign = ScanAlign.X1
    ) -> int | None:
        """Return the address of the first match of ``sig``, or None.

        Spans are searched in order; spans shorter than the signature are
        skipped.
        """
        if isinstance(sig, str):
            sig = parse_signature(sig)
        if not sig:
            return None
        for span in self.ranges:
            if len(span) < len(sig):
                continue
            result = do_scan(span.data, span.address, sig, self.mode, align)
            if result is not None:
                return result
        return None