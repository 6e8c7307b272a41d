"""Throughput benchmark for the signature scanners.

Buffers of doubling size, filled with the same pseudo-random bytes on every
machine, are scanned repeatedly for a signature that is not expected to
occur. The time per scan and the resulting throughput are reported.
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .memory import MemorySpan
from .scanner import ScanAlign, ScanMode, Scanner, detect_scan_mode
from .signature import parse_signature

__all__ = [
    "BenchmarkResult",
    "mode_to_string",
    "run_benchmark",
    "main",
]

DEFAULT_MAX_SIZE = 0x40000000
_MIN_SIZE = 16
_MAX_ITERATIONS = 0x100000
# Several buffers, since allocation placement can make single runs vary widely.
_BUFFER_COUNT = 8
# Seed of the standard Mersenne Twister when none is given.
_SEED = 5489
_SIGNATURE = "01 02 03 04 05 06 07 08 09 10 11 12 13 14 15 16"

_MODE_NAMES = {
    ScanMode.NORMAL: "normal",
    ScanMode.SSE4_2: "SSE4.2",
    ScanMode.AVX2: "AVX2",
    ScanMode.AVX512: "AVX512",
}


@dataclass(frozen=True)
class BenchmarkResult:
    """Timing of one buffer size."""

    mode: ScanMode
    size: int
    iterations: int
    us_per_iter: float
    mbps: float

    @property
    def ms_per_scan(self) -> float:
        """Milliseconds taken by one scan."""
        return self.us_per_iter / 1000.0

    def __str__(self) -> str:
        return (
            f"{mode_to_string(self.mode)} scanner with {self.size} byte buffer... "
            f"~{self.ms_per_scan:g}ms per scan, {self.mbps:g} MB/s"
        )


def mode_to_string(mode) -> str:
    """Return the display name of a scan mode, or ``<unknown>``."""
    try:
        return _MODE_NAMES.get(ScanMode(mode), "<unknown>")
    except ValueError:
        return "<unknown>"


def _sizes(max_size: int) -> Iterator[int]:
    size = _MIN_SIZE
    while size <= max_size:
        yield size
        size <<= 1


def _random_buffer(size: int) -> bytearray:
    return bytearray(random.Random(_SEED).randbytes(size))


def run_benchmark(mode, align, max_size=DEFAULT_MAX_SIZE) -> Iterator[BenchmarkResult]:
    """Benchmark ``mode`` with alignment ``align`` on buffers up to ``max_size``.

    Yields one result per buffer size, smallest first.
    """
    mode = ScanMode(mode)
    align = ScanAlign(align)
    sig = parse_signature(_SIGNATURE)

    for size in _sizes(max_size):
        iterations = min(max_size * 40 // size, _MAX_ITERATIONS)
        iters_per_buffer = iterations // _BUFFER_COUNT

        total_ns = 0
        for _ in range(_BUFFER_COUNT):
            scanner = Scanner(MemorySpan(_random_buffer(size)), mode)
            start = time.perf_counter_ns()
            for _ in range(iters_per_buffer):
                scanner.scan_signature(sig, align)
            total_ns += time.perf_counter_ns() - start

        us_per_iter = (total_ns / 1000.0) / iterations
        # Bytes per microsecond equals megabytes per second.
        mbps = size / us_per_iter if us_per_iter > 0 else float("inf")
        yield BenchmarkResult(mode, size, iterations, us_per_iter, mbps)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mnemosyne-benchmark",
        description="Measure signature scanning throughput.",
    )
    parser.add_argument(
        "--mode",
        choices=[m.name.lower() for m in ScanMode if m is not ScanMode.MAX],
        default="avx2",
        help="scan mode to benchmark (default: avx2)",
    )
    parser.add_argument(
        "--align",
        choices=["x1", "x16"],
        default="x16",
        help="required result alignment (default: x16)",
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=DEFAULT_MAX_SIZE,
        help="largest buffer size in bytes",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the benchmark from the command line."""
    args = _parse_args(argv)
    mode = ScanMode[args.mode.upper()]
    align = ScanAlign[args.align.upper()]

    print(f"Highest supported mode: {mode_to_string(detect_scan_mode())}")
    for result in run_benchmark(mode, align, args.max_size):
        print(result)
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())