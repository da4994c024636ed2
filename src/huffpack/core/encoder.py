from __future__ import annotations

import io
from dataclasses import dataclass

from huffpack.core.bitio import BitWriter
from huffpack.core.frequency import count_frequencies
from huffpack.core.trie import CodeTable, Node, build_code_table, build_trie
from huffpack.errors import MissingCodeError


@dataclass(frozen=True)
class EncodeResult:
    freq: list[int]
    root: Node | None
    codes: CodeTable
    packed: bytes
    nbits: int  # valid bits in packed (the rest of the last byte is padding)


def encode_to_sink(data: bytes, codes: CodeTable, sink: BitWriter) -> int:
    """Write the code of every byte of data to sink. Returns bits written."""
    before = sink.bits_written
    for b in data:
        try:
            bits = codes[b]
        except KeyError:
            raise MissingCodeError(f"no code for byte 0x{b:02x}") from None
        sink.write_bits(bits)
    return sink.bits_written - before


def encode_bytes(data: bytes) -> EncodeResult:
    """In-memory pipeline: frequencies -> trie -> codes -> packed bits."""
    freq = count_frequencies(data)
    if not data:
        return EncodeResult(freq=freq, root=None, codes={}, packed=b"", nbits=0)

    root = build_trie(freq)
    codes = build_code_table(root)

    buf = io.BytesIO()
    w = BitWriter(buf)
    nbits = encode_to_sink(data, codes, w)
    w.close()
    return EncodeResult(freq=freq, root=root, codes=codes, packed=buf.getvalue(), nbits=nbits)
