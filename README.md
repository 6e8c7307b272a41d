# mnemosyne

Find byte signatures in memory buffers. A signature is a space-separated string
of hex bytes in which any nibble may be a wildcard (`?`). The package parses
such strings and scans buffers for the first place where they match. A match
may start at any byte, or only at 16-byte aligned addresses.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Signature syntax

| Token      | Meaning                                        |
|------------|------------------------------------------------|
| `8B`       | the exact byte `0x8B`                          |
| `2?`       | high nibble `2`, low nibble can be anything    |
| `?4`       | low nibble `4`, high nibble can be anything    |
| `?` / `??` | any byte                                       |
| `F`        | a single digit is a whole byte (`0x0F`)        |

Tokens are separated by spaces. A run of more than two characters is split into
pairs, so `BCDE` is read as `BC DE`. Characters that are not hex digits or `?`
are read as the digit `0`.

```python
from mnemosyne.signature import parse_signature

sig = parse_signature("48 8B ?? 05")
sig[0].matches(0x48)   # True
sig[2].matches(0x13)   # True, wildcard
str(sig)               # '48 8B ?? 05'
```

`mnemosyne.signature` provides:

- `SigElement(byte, mask)`: one signature byte and the mask of bits that must
  match; `matches(value)` tests a byte against it.
- `Signature`: an immutable sequence of `SigElement`; slicing and
  `subsig(offset, count)` return smaller signatures.
- `parse_signature(text)`, `parse_byte(token)` and `parse_nibble(char)`.

## Memory spans

`mnemosyne.memory.MemorySpan(data, address=0)` pairs a buffer (anything that
supports the buffer protocol) with the address at which its first byte lies.
`len(span)` is its size and `span.end_address()` the address one past its end.

## Scanning

`mnemosyne.scanner` provides the scanner:

```python
from mnemosyne.memory import MemorySpan
from mnemosyne.scanner import ScanAlign, Scanner

data = bytes(100) + b"\x48\x8b\x01\x05" + bytes(100)
scanner = Scanner(MemorySpan(data, address=0x1000))
scanner.scan_signature("48 8B ?? 05")            # 0x1064
scanner.scan_signature("48 8B ?? 05", ScanAlign.X16)  # None
```

- `Scanner(ranges, mode=None)` takes a `MemorySpan`, a `bytes`, `bytearray` or
  `memoryview` (scanned as if at address 0), or an iterable of `MemorySpan`.
  Without a mode it uses `detect_scan_mode()`.
- `Scanner.scan_signature(sig, align=ScanAlign.X1)` accepts a `Signature` or
  its text form and returns the address of the first match, or `None`. Spans
  are searched in order, and spans shorter than the signature are skipped.
- `ScanAlign.X1` allows a match at any address; `ScanAlign.X16` only at
  addresses that are multiples of 16.
- `ScanMode.NORMAL` looks for the signature's first byte and checks each
  candidate. `ScanMode.AVX2` compiles the whole signature into one byte pattern;
  it falls back to the normal search for buffers under 64 bytes. `SSE4_2` and
  `AVX512` scan as `NORMAL`. `detect_scan_mode()` returns `ScanMode.AVX2`. All
  modes give the same results.
- `do_scan(data, base_address, sig, mode, align)` scans one buffer whose first
  byte is at `base_address`.

Leading and trailing wildcard bytes in a signature are trimmed before the search
but still count toward the match's position. An empty signature never matches.

## Benchmark

```
mnemosyne-bench
```

This scans buffers of pseudo-random data, the same on every machine, whose
sizes double from 16 bytes up to the maximum. For each size it prints the
average time per scan and the throughput in MB/s.

Options:

- `--mode {normal,sse4_2,avx2,avx512}`: scan mode (default `avx2`)
- `--align {x1,x16}`: result alignment (default `x16`)
- `--max-size N`: largest buffer in bytes (default 1 GiB; a smaller value
  finishes far sooner)

The same run is available from code as
`mnemosyne.benchmark.run_benchmark(mode, align, max_size)`, which yields one
`BenchmarkResult` per buffer size.

## What it does not do

The package scans only buffers you hand it. It does not open or read the memory
of running processes, look up loaded modules or their sections, or patch
memory.