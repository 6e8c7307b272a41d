"""Contiguous ranges of memory that can be scanned."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["MemorySpan"]


@dataclass(frozen=True)
class MemorySpan:
    """A block of bytes together with the address at which it starts.

    ``data`` may be any contiguous buffer; it is held as a flat byte view,
    so a writable buffer stays writable through the span.
    """

    data: memoryview = field(repr=False)
    address: int = 0

    def __post_init__(self) -> None:
        view = memoryview(self.data)
        if view.format != "B" or view.ndim != 1:
            view = view.cast("B")
        object.__setattr__(self, "data", view)
        if not isinstance(self.address, int) or isinstance(self.address, bool):
            raise TypeError("address must be an int")
        if self.address < 0:
            raise ValueError(f"address must not be negative, got {self.address}")

    def __len__(self) -> int:
        return self.data.nbytes

    @property
    def readonly(self) -> bool:
        """True if the underlying buffer cannot be written through this span."""
        return self.data.readonly

    def end_address(self) -> int:
        """Return the address one past the last byte of the span."""
        return self.address + len(self)