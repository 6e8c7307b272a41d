"""Byte signatures with per-nibble wildcards, and their text syntax.

A signature is written as space separated hex bytes, for example
``"48 8B ?? 4? ?5"``. A ``?`` stands for a wildcard nibble, and a lone
``?`` stands for a whole wildcard byte. A single hex digit such as ``F``
is read as the byte ``0x0F``. Several bytes may run together without
spaces (``"BCDE"`` is read as ``BC DE``).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import overload

__all__ = [
    "SigElement",
    "Signature",
    "parse_nibble",
    "parse_byte",
    "parse_signature",
]

_WILDCARD = "?"


def _check_byte(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, not {type(value).__name__}")
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in range 0..255, got {value}")


@dataclass(frozen=True)
class SigElement:
    """One byte of a signature, with a mask telling which bits must match.

    The stored byte always has the masked-out bits cleared.
    """

    byte: int
    mask: int = 0xFF

    def __post_init__(self) -> None:
        _check_byte("byte", self.byte)
        _check_byte("mask", self.mask)
        object.__setattr__(self, "byte", self.byte & self.mask)

    def matches(self, value: int) -> bool:
        """Return True if ``value`` agrees with this element on all masked bits."""
        return (value & self.mask) == self.byte

    def __str__(self) -> str:
        high = f"{self.byte >> 4:X}" if self.mask & 0xF0 == 0xF0 else _WILDCARD
        low = f"{self.byte & 0x0F:X}" if self.mask & 0x0F == 0x0F else _WILDCARD
        return high + low


class Signature(Sequence[SigElement]):
    """An immutable sequence of :class:`SigElement` values."""

    __slots__ = ("_elements",)

    def __init__(self, elements: Iterable[SigElement] = ()) -> None:
        items = tuple(elements)
        for item in items:
            if not isinstance(item, SigElement):
                raise TypeError(
                    f"signature elements must be SigElement, not {type(item).__name__}"
                )
        self._elements: tuple[SigElement, ...] = items

    @overload
    def __getitem__(self, index: int) -> SigElement: ...

    @overload
    def __getitem__(self, index: slice) -> Signature: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Signature(self._elements[index])
        return self._elements[index]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[SigElement]:
        return iter(self._elements)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Signature):
            return self._elements == other._elements
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._elements)

    def __repr__(self) -> str:
        return f"Signature({str(self)!r})"

    def __str__(self) -> str:
        return " ".join(str(element) for element in self._elements)

    def subsig(self, offset: int, count: int | None = None) -> Signature:
        """Return the part of the signature starting at ``offset``.

        With ``count`` given, exactly that many elements are taken;
        otherwise everything up to the end.
        """
        if offset < 0 or offset > len(self):
            raise IndexError(f"offset {offset} out of range for signature of size {len(self)}")
        if count is None:
            return Signature(self._elements[offset:])
        if count < 0 or offset + count > len(self):
            raise IndexError(
                f"count {count} at offset {offset} out of range for signature of size {len(self)}"
            )
        return Signature(self._elements[offset:offset + count])


def parse_nibble(char: str) -> int:
    """Return the value of one hex digit, or 0 for any other character."""
    if len(char) == 1 and char in "0123456789abcdefABCDEF":
        return int(char, 16)
    return 0


def parse_byte(token: str) -> SigElement:
    """Parse one or two characters into a signature element.

    A two-character token is read nibble by nibble, each of which may be
    ``?``. Any other token is read from its first character alone, as the
    low nibble of a full byte, or as a full wildcard when it is ``?``.
    """
    if not token:
        raise ValueError("cannot parse an empty signature byte")

    if len(token) == 2:
        high, low = token
        byte = mask = 0
        if high != _WILDCARD:
            byte |= parse_nibble(high) << 4
            mask |= 0xF0
        if low != _WILDCARD:
            byte |= parse_nibble(low)
            mask |= 0x0F
        return SigElement(byte, mask)

    first = token[0]
    if first == _WILDCARD:
        return SigElement(0, 0)
    return SigElement(parse_nibble(first), 0xFF)


def _tokens(text: str) -> Iterator[str]:
    for word in text.split(" "):
        for start in range(0, len(word), 2):
            yield word[start:start + 2]


def parse_signature(text: str) -> Signature:
    """Parse a signature from its text form."""
    return Signature(parse_byte(token) for token in _tokens(text))