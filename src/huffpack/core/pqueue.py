"""Min-priority queue (binary heap) used to build the Huffman trie.

Array-backed, 1-indexed: slot 0 is unused so that parent(k) == k // 2 and
children(k) == 2k, 2k + 1.

Each item is stamped with an insertion sequence number and ordered by
(key(item), seq): equal weights come out in insertion order, which makes the
trie a deterministic function of the frequency table.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from huffpack.errors import EmptyQueueError, QueueFullError

T = TypeVar("T")

# 256 symbols: the queue never holds more than one entry per distinct byte.
DEFAULT_CAPACITY = 256


class MinPriorityQueue(Generic[T]):
    def __init__(self, capacity: int = DEFAULT_CAPACITY, key: Callable[[T], int] | None = None):
        if capacity <= 0:
            raise ValueError(f"capacity must be > 0, got {capacity}")
        self._capacity = int(capacity)
        self._key = key if key is not None else (lambda item: item)  # type: ignore[assignment,return-value]
        self._heap: list[tuple[int, int, T] | None] = [None] * (self._capacity + 1)
        self._n = 0
        self._seq = 0

    def __len__(self) -> int:
        return self._n

    def is_empty(self) -> bool:
        return self._n == 0

    def insert(self, item: T) -> None:
        if self._n >= self._capacity:
            raise QueueFullError(f"priority queue full (capacity={self._capacity})")
        self._n += 1
        self._heap[self._n] = (int(self._key(item)), self._seq, item)
        self._seq += 1
        self._swim(self._n)

    def peek_min(self) -> T:
        if self._n == 0:
            raise EmptyQueueError("peek_min on empty priority queue")
        entry = self._heap[1]
        assert entry is not None
        return entry[2]

    def extract_min(self) -> T:
        if self._n == 0:
            raise EmptyQueueError("extract_min on empty priority queue")
        entry = self._heap[1]
        assert entry is not None
        self._exchange(1, self._n)
        self._heap[self._n] = None
        self._n -= 1
        self._sink(1)
        return entry[2]

    # -------------------
    # heap internals
    # -------------------

    def _greater(self, i: int, j: int) -> bool:
        a = self._heap[i]
        b = self._heap[j]
        assert a is not None and b is not None
        return (a[0], a[1]) > (b[0], b[1])

    def _exchange(self, i: int, j: int) -> None:
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    def _swim(self, k: int) -> None:
        while k > 1 and self._greater(k // 2, k):
            self._exchange(k // 2, k)
            k //= 2

    def _sink(self, k: int) -> None:
        n = self._n
        while 2 * k <= n:
            j = 2 * k
            if j < n and self._greater(j, j + 1):
                j += 1
            if not self._greater(k, j):
                break
            self._exchange(k, j)
            k = j
