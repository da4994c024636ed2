"""File-level encode/decode.

encode: input file -> packed bit stream file + frequency file (side artifact)
decode: packed bit stream file + frequency file -> restored file

Every stream is scoped with `with`. Outputs are written to sibling `.part`
files and renamed over the final paths only after every write succeeded;
on failure the `.part` files are removed and whatever was already at the
final paths is left untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from huffpack.core.bitio import BitReader, BitWriter
from huffpack.core.decoder import decode_from_source
from huffpack.core.encoder import encode_to_sink
from huffpack.core.frequency import count_stream_frequencies, total_symbols
from huffpack.core.trie import build_code_table, build_trie, trie_depth
from huffpack.core.trie_codec import read_trie, write_trie
from huffpack.errors import IoError

ARTIFACT_SUFFIX_DEFAULT = ".freq"
_WRITE_CHUNK = 64 * 1024
_PART_SUFFIX = ".part"


@dataclass(frozen=True)
class EncodeSummary:
    total: int
    distinct: int
    max_code_len: int
    packed_bits: int
    packed_bytes: int
    artifact: Path

    @property
    def ratio(self) -> float:
        return (self.packed_bytes / self.total) if self.total else 0.0


@dataclass(frozen=True)
class DecodeSummary:
    total: int
    distinct: int
    bits_read: int


def default_artifact_path(output: Path, suffix: str = ARTIFACT_SUFFIX_DEFAULT) -> Path:
    output = Path(output)
    return output.with_name(output.name + suffix)


@dataclass
class _Staged:
    """Sibling `.part` files, moved over their final paths only on commit."""

    pairs: list[tuple[Path, Path]] = field(default_factory=list)

    def path(self, final: Path) -> Path:
        tmp = final.with_name(final.name + _PART_SUFFIX)
        self.pairs.append((tmp, final))
        return tmp

    def commit(self) -> None:
        try:
            for tmp, final in self.pairs:
                tmp.replace(final)
        except OSError as e:
            raise IoError(f"cannot move output into place: {e}") from e

    def discard(self) -> None:
        for tmp, _final in self.pairs:
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                pass


@contextmanager
def _staged_outputs() -> Iterator[_Staged]:
    # existing files at the final paths are left alone unless the whole call succeeds
    st = _Staged()
    try:
        yield st
        st.commit()
    except BaseException:
        st.discard()
        raise


def encode_file(input_path: Path, output_path: Path, artifact_path: Path | None = None) -> EncodeSummary:
    inp = Path(input_path)
    out = Path(output_path)
    art = Path(artifact_path) if artifact_path is not None else default_artifact_path(out)

    with _staged_outputs() as staged:
        try:
            # pass 1: frequencies
            with inp.open("rb") as fp:
                freq = count_stream_frequencies(fp)

            total = total_symbols(freq)
            distinct = sum(1 for f in freq if f)
            bits = 0
            max_len = 0

            # pass 2: packed stream
            with inp.open("rb") as fp, staged.path(out).open("wb") as fo:
                w = BitWriter(fo)
                if total:
                    root = build_trie(freq)
                    codes = build_code_table(root)
                    max_len = max(1, trie_depth(root))
                    while True:
                        chunk = fp.read(_WRITE_CHUNK)
                        if not chunk:
                            break
                        bits += encode_to_sink(chunk, codes, w)
                w.close()

            with staged.path(art).open("w", encoding="utf-8", newline="\n") as ft:
                write_trie(ft, freq)
        except OSError as e:
            raise IoError(f"encode failed: {e}") from e

    return EncodeSummary(
        total=total,
        distinct=distinct,
        max_code_len=max_len,
        packed_bits=bits,
        packed_bytes=(bits + 7) // 8,
        artifact=art,
    )


def decode_file(input_path: Path, output_path: Path, artifact_path: Path | None = None) -> DecodeSummary:
    inp = Path(input_path)
    out = Path(output_path)
    art = Path(artifact_path) if artifact_path is not None else default_artifact_path(inp)

    try:
        with art.open("r", encoding="utf-8") as ft:
            total, freq, root = read_trie(ft)
    except OSError as e:
        raise IoError(f"cannot read frequency file {art}: {e}") from e

    with _staged_outputs() as staged:
        try:
            with inp.open("rb") as fi, staged.path(out).open("wb") as fo:
                reader = BitReader(fi)
                buf = bytearray()

                def emit(sym: int) -> None:
                    buf.append(sym)
                    if len(buf) >= _WRITE_CHUNK:
                        fo.write(buf)
                        buf.clear()

                decode_from_source(reader, root, total, emit)
                fo.write(buf)
        except OSError as e:
            raise IoError(f"decode failed: {e}") from e

    return DecodeSummary(
        total=total, distinct=sum(1 for f in freq if f), bits_read=reader.bits_read
    )
