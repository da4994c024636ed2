"""Reference byte compressors, used only to put Huffman sizes in context.

Neither is part of the huffpack format: stats only needs the compressed size.
"""

from __future__ import annotations

import zlib
from dataclasses import dataclass

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None

BASELINE_IDS = ("zlib", "zstd")


def have_zstd() -> bool:
    return zstd is not None


@dataclass(frozen=True)
class CodecZlib:
    level: int = 9
    codec_id: str = "zlib"

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(bytes(data), self.level)


@dataclass(frozen=True)
class CodecZstd:
    """Minimal frame: no content size, no checksum."""

    level: int = 19
    codec_id: str = "zstd"

    def compress(self, data: bytes) -> bytes:
        if zstd is None:
            raise RuntimeError(
                "Module 'zstandard' not available. Install with: python3 -m pip install zstandard"
            )
        c = zstd.ZstdCompressor(
            level=int(self.level), write_content_size=False, write_checksum=False
        )
        return c.compress(data)


def make_baseline(codec_id: str, *, zstd_level: int = 19) -> CodecZlib | CodecZstd:
    cid = codec_id.strip().lower()
    if cid == "zlib":
        return CodecZlib()
    if cid == "zstd":
        return CodecZstd(level=zstd_level)
    raise ValueError(f"unknown baseline codec: {codec_id!r} (expected one of {BASELINE_IDS})")
