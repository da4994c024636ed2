"""Huffman trie: node types, builder, code table.

Conventions:
  - left edge = bit 0, right edge = bit 1
  - Internal.weight == left.weight + right.weight
  - a trie with a single distinct symbol is a bare Leaf (root is the leaf);
    that leaf gets the one-bit code (0,) so every occurrence still costs a bit
    and the decoder has something to consume.

All walks use an explicit stack: depth is bounded by 255 but skewed
distributions produce near-linear tries.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from huffpack.core.frequency import ALPHABET_SIZE
from huffpack.core.pqueue import MinPriorityQueue
from huffpack.errors import EmptyTableError, MalformedTrieError

Code = tuple[int, ...]
CodeTable = dict[int, Code]

SINGLE_LEAF_CODE: Code = (0,)


@dataclass(frozen=True)
class Leaf:
    symbol: int
    weight: int


@dataclass(frozen=True)
class Internal:
    weight: int
    left: Node
    right: Node


Node = Union[Leaf, Internal]


def build_trie(freq: list[int]) -> Node:
    """Greedy Huffman construction over the nonzero entries of freq.

    Leaves are inserted in ascending symbol order and the queue breaks weight
    ties by insertion order, so the same table always yields the same trie.
    """
    if len(freq) > ALPHABET_SIZE:
        raise ValueError(f"frequency table too large: {len(freq)} > {ALPHABET_SIZE}")

    pq: MinPriorityQueue[Node] = MinPriorityQueue(ALPHABET_SIZE, key=lambda n: n.weight)
    for sym, f in enumerate(freq):
        if f < 0:
            raise ValueError(f"negative frequency for symbol {sym}: {f}")
        if f > 0:
            pq.insert(Leaf(symbol=sym, weight=int(f)))

    if pq.is_empty():
        raise EmptyTableError("cannot build a trie: no symbol has a nonzero frequency")

    while len(pq) > 1:
        x = pq.extract_min()
        y = pq.extract_min()
        pq.insert(Internal(weight=x.weight + y.weight, left=x, right=y))

    return pq.extract_min()


def _check_internal(node: Internal) -> None:
    if node.left is None or node.right is None:
        raise MalformedTrieError("internal node without two children")


def build_code_table(root: Node) -> CodeTable:
    """Symbol -> bit tuple, from a depth-first walk (left first)."""
    if isinstance(root, Leaf):
        return {root.symbol: SINGLE_LEAF_CODE}

    codes: CodeTable = {}
    stack: list[tuple[Node, Code]] = [(root, ())]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Leaf):
            codes[node.symbol] = path
            continue
        _check_internal(node)
        stack.append((node.right, path + (1,)))
        stack.append((node.left, path + (0,)))
    return codes


def iter_leaves(root: Node) -> Iterator[Leaf]:
    """Leaves in left-to-right order."""
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            yield node
            continue
        _check_internal(node)
        stack.append(node.right)
        stack.append(node.left)


def count_leaves(root: Node) -> int:
    return sum(1 for _ in iter_leaves(root))


def trie_depth(root: Node) -> int:
    """Longest root-to-leaf edge count (0 for a bare leaf)."""
    best = 0
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, d = stack.pop()
        if isinstance(node, Leaf):
            best = max(best, d)
            continue
        _check_internal(node)
        stack.append((node.left, d + 1))
        stack.append((node.right, d + 1))
    return best


def code_lengths(codes: CodeTable) -> dict[int, int]:
    return {sym: len(bits) for sym, bits in codes.items()}


def weighted_length(freq: list[int], codes: CodeTable) -> int:
    """Total packed size in bits: sum(freq[s] * len(code[s]))."""
    return sum(freq[sym] * len(bits) for sym, bits in codes.items())


def code_to_str(bits: Code) -> str:
    return "".join("1" if b else "0" for b in bits)
