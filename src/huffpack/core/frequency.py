from __future__ import annotations

from typing import BinaryIO

from huffpack.errors import IoError

ALPHABET_SIZE = 256
CHUNK_SIZE_DEFAULT = 256 * 1024


def count_frequencies(data: bytes) -> list[int]:
    """Return freq[s] = occurrences of byte s in data (len 256)."""
    freq = [0] * ALPHABET_SIZE
    for b in data:
        freq[b] += 1
    return freq


def count_stream_frequencies(fp: BinaryIO, *, chunk_size: int = CHUNK_SIZE_DEFAULT) -> list[int]:
    """Same as count_frequencies, but scans a binary stream chunk by chunk."""
    freq = [0] * ALPHABET_SIZE
    try:
        while True:
            chunk = fp.read(chunk_size)
            if not chunk:
                break
            for b in chunk:
                freq[b] += 1
    except OSError as e:
        raise IoError(f"read failed while counting frequencies: {e}") from e
    return freq


def total_symbols(freq: list[int]) -> int:
    return sum(freq)


def used_symbols(freq: list[int]) -> list[tuple[int, int]]:
    """[(sym, f), ...] for every nonzero entry, ascending sym."""
    return [(s, f) for s, f in enumerate(freq) if f > 0]

