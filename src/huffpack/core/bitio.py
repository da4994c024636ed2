"""Bit-level stream primitives.

Packing is MSB-first: the first bit written lands in bit 7 of the first byte.
On close the last partial byte is zero-padded; the reader cannot tell padding
from data, so the decoder relies on the symbol count to stop.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import BinaryIO

from huffpack.errors import IoError, TruncatedStreamError

_FLUSH_EVERY = 64 * 1024


class BitWriter:
    def __init__(self, fp: BinaryIO):
        self._fp = fp
        self._buf = bytearray()
        self._cur = 0
        self._nbits = 0  # bits pending in _cur (0..7)
        self.bits_written = 0
        self._closed = False

    def write_bit(self, bit: bool | int) -> None:
        self._cur = (self._cur << 1) | (1 if bit else 0)
        self._nbits += 1
        self.bits_written += 1
        if self._nbits == 8:
            self._buf.append(self._cur)
            self._cur = 0
            self._nbits = 0
            if len(self._buf) >= _FLUSH_EVERY:
                self._flush()

    def write_bits(self, bits: Iterable[int]) -> None:
        for b in bits:
            self.write_bit(b)

    def _flush(self) -> None:
        if not self._buf:
            return
        try:
            self._fp.write(bytes(self._buf))
        except OSError as e:
            raise IoError(f"write failed on packed stream: {e}") from e
        self._buf.clear()

    def close(self) -> None:
        """Pad and flush. Does not close the underlying file object."""
        if self._closed:
            return
        if self._nbits > 0:
            self._buf.append(self._cur << (8 - self._nbits))
            self._cur = 0
            self._nbits = 0
        self._flush()
        self._closed = True

    def __enter__(self) -> BitWriter:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # on error the output is discarded by the caller; just don't mask exc
        if exc_type is None:
            self.close()


class BitReader:
    def __init__(self, fp: BinaryIO, *, chunk_size: int = _FLUSH_EVERY):
        self._fp = fp
        self._chunk_size = int(chunk_size)
        self._chunk = b""
        self._pos = 0
        self._mask = 0  # 0 => need next byte
        self._byte = 0
        self.bits_read = 0

    def _next_byte(self) -> None:
        if self._pos >= len(self._chunk):
            try:
                self._chunk = self._fp.read(self._chunk_size)
            except OSError as e:
                raise IoError(f"read failed on packed stream: {e}") from e
            self._pos = 0
            if not self._chunk:
                raise TruncatedStreamError(
                    f"packed stream exhausted after {self.bits_read} bits"
                )
        self._byte = self._chunk[self._pos]
        self._pos += 1
        self._mask = 0x80

    def read_bit(self) -> bool:
        if self._mask == 0:
            self._next_byte()
        bit = (self._byte & self._mask) != 0
        self._mask >>= 1
        self.bits_read += 1
        return bit

    def __enter__(self) -> BitReader:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None
