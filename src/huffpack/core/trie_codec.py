"""Side artifact: persisted (symbol, frequency) table.

Layout (UTF-8 text, one record per line):

    <total symbol count>
    <symbol in binary, no padding>:<frequency>
    ...

Symbol lines are written in ascending symbol order; the reader accepts any
order. The trie itself is never stored: decode rebuilds it with build_trie,
which is deterministic for a given table, so codes match the encoder's.
"""

from __future__ import annotations

from typing import TextIO

from huffpack.core.frequency import ALPHABET_SIZE, total_symbols, used_symbols
from huffpack.core.trie import Node, build_trie
from huffpack.errors import IoError, MalformedTrieFileError

DELIMITER = ":"


def format_symbol(sym: int) -> str:
    return format(sym, "b")


def dump_trie(freq: list[int]) -> str:
    lines = [str(total_symbols(freq))]
    for sym, f in used_symbols(freq):
        lines.append(f"{format_symbol(sym)}{DELIMITER}{f}")
    return "\n".join(lines) + "\n"


def write_trie(fp: TextIO, freq: list[int]) -> None:
    try:
        fp.write(dump_trie(freq))
    except OSError as e:
        raise IoError(f"write failed on frequency file: {e}") from e


def _parse_total(line: str | None) -> int:
    if line is None:
        raise MalformedTrieFileError("frequency file: missing total count line")
    s = line.strip()
    if not (s.isascii() and s.isdigit()):
        raise MalformedTrieFileError(f"frequency file: total count is not a number: {s!r}")
    return int(s)


def _parse_symbol_line(line: str, lineno: int) -> tuple[int, int]:
    sym_s, sep, freq_s = line.partition(DELIMITER)
    if not sep or not sym_s or not freq_s:
        raise MalformedTrieFileError(f"frequency file line {lineno}: expected <binary>:<freq>, got {line!r}")
    if any(c not in "01" for c in sym_s):
        raise MalformedTrieFileError(f"frequency file line {lineno}: symbol is not binary: {sym_s!r}")
    if not (freq_s.isascii() and freq_s.isdigit()):
        raise MalformedTrieFileError(f"frequency file line {lineno}: frequency is not a number: {freq_s!r}")
    sym = int(sym_s, 2)
    f = int(freq_s)
    if sym >= ALPHABET_SIZE:
        raise MalformedTrieFileError(f"frequency file line {lineno}: symbol out of range: {sym}")
    if f <= 0:
        raise MalformedTrieFileError(f"frequency file line {lineno}: frequency must be > 0")
    return sym, f


def parse_trie_lines(lines: list[str]) -> tuple[int, list[int]]:
    """Parse artifact lines -> (total, freq[256])."""
    body = [ln.strip() for ln in lines]
    body = [ln for ln in body if ln]
    total = _parse_total(body[0] if body else None)

    freq = [0] * ALPHABET_SIZE
    seen: set[int] = set()
    for lineno, line in enumerate(body[1:], start=2):
        sym, f = _parse_symbol_line(line, lineno)
        if sym in seen:
            raise MalformedTrieFileError(f"frequency file line {lineno}: duplicate symbol {sym}")
        seen.add(sym)
        freq[sym] = f

    got = total_symbols(freq)
    if got != total:
        raise MalformedTrieFileError(
            f"frequency file: total count {total} != sum of frequencies {got}"
        )
    return total, freq


def load_trie(text: str) -> tuple[int, list[int], Node | None]:
    """Artifact text -> (total, freq, root). root is None for an empty input."""
    total, freq = parse_trie_lines(text.splitlines())
    if total == 0:
        return 0, freq, None
    return total, freq, build_trie(freq)


def read_trie(fp: TextIO) -> tuple[int, list[int], Node | None]:
    try:
        text = fp.read()
    except OSError as e:
        raise IoError(f"read failed on frequency file: {e}") from e
    except UnicodeDecodeError as e:
        raise MalformedTrieFileError(f"frequency file is not valid UTF-8: {e}") from e
    return load_trie(text)
