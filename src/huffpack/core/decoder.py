"""Trie-driven decoder.

Per symbol: start at the root, read one bit at a time (1 = right, 0 = left)
until a leaf is reached, emit its symbol, go back to the root. Exactly
`total` symbols are decoded; trailing padding bits are never looked at.
"""

from __future__ import annotations

import io
from collections.abc import Callable

from huffpack.core.bitio import BitReader
from huffpack.core.trie import Internal, Leaf, Node
from huffpack.errors import TruncatedStreamError


def _decode_one(source: BitReader, root: Node) -> int:
    if isinstance(root, Leaf):
        # one-symbol trie: each occurrence was written as a single bit
        source.read_bit()
        return root.symbol

    node: Node = root
    while isinstance(node, Internal):
        node = node.right if source.read_bit() else node.left
    return node.symbol


def decode_from_source(
    source: BitReader, root: Node | None, total: int, emit: Callable[[int], object]
) -> int:
    """Decode `total` symbols from source, passing each to emit. Returns total."""
    if total < 0:
        raise ValueError(f"total must be >= 0, got {total}")
    if total == 0:
        return 0
    if root is None:
        raise ValueError("root is required when total > 0")

    for i in range(total):
        try:
            sym = _decode_one(source, root)
        except TruncatedStreamError as e:
            raise TruncatedStreamError(
                f"packed stream truncated: decoded {i} of {total} symbols ({e})"
            ) from e
        emit(sym)
    return total


def decode_bytes(packed: bytes, root: Node | None, total: int) -> bytes:
    out = bytearray()
    decode_from_source(BitReader(io.BytesIO(packed)), root, total, out.append)
    return bytes(out)
