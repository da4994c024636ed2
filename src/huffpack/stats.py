"""Compression report: how close the static Huffman code gets to the entropy,
and how it compares to general-purpose byte compressors."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from huffpack.core.baselines import have_zstd, make_baseline
from huffpack.core.encoder import encode_bytes
from huffpack.core.trie_codec import dump_trie
from huffpack.errors import UsageError


@dataclass(frozen=True)
class CompressionStats:
    total: int
    distinct: int
    entropy_bits: float  # Shannon entropy, bits per symbol
    avg_code_len: float  # Huffman bits per symbol
    packed_bits: int
    packed_bytes: int
    artifact_bytes: int
    baselines: dict[str, int] = field(default_factory=dict)

    @property
    def total_bytes(self) -> int:
        return self.packed_bytes + self.artifact_bytes

    def as_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "distinct": self.distinct,
            "entropy_bits": round(self.entropy_bits, 6),
            "avg_code_len": round(self.avg_code_len, 6),
            "packed_bits": self.packed_bits,
            "packed_bytes": self.packed_bytes,
            "artifact_bytes": self.artifact_bytes,
            "total_bytes": self.total_bytes,
            "baselines": dict(self.baselines),
        }


def shannon_entropy(freq: list[int]) -> float:
    n = sum(freq)
    if n == 0:
        return 0.0
    h = 0.0
    for f in freq:
        if f:
            p = f / n
            h -= p * math.log2(p)
    return h


def compute_stats(
    data: bytes, *, baselines: tuple[str, ...] = ("zlib",), zstd_level: int = 19
) -> CompressionStats:
    res = encode_bytes(data)
    total = len(data)

    sizes: dict[str, int] = {}
    for cid in baselines:
        if cid == "zstd" and not have_zstd():
            raise UsageError("baseline 'zstd' requested but the 'zstandard' package is not installed")
        sizes[cid] = len(make_baseline(cid, zstd_level=zstd_level).compress(data))

    return CompressionStats(
        total=total,
        distinct=sum(1 for f in res.freq if f),
        entropy_bits=shannon_entropy(res.freq),
        avg_code_len=(res.nbits / total) if total else 0.0,
        packed_bits=res.nbits,
        packed_bytes=len(res.packed),
        artifact_bytes=len(dump_trie(res.freq).encode("utf-8")),
        baselines=sizes,
    )


def render_stats(st: CompressionStats) -> str:
    lines = [
        f"symbols      : {st.total}",
        f"distinct     : {st.distinct}",
        f"entropy      : {st.entropy_bits:.4f} bits/symbol",
        f"huffman      : {st.avg_code_len:.4f} bits/symbol",
        f"packed       : {st.packed_bytes} bytes ({st.packed_bits} bits)",
        f"freq file    : {st.artifact_bytes} bytes",
        f"total        : {st.total_bytes} bytes",
    ]
    for cid, n in st.baselines.items():
        lines.append(f"{cid:<13}: {n} bytes")
    return "\n".join(lines)
