from __future__ import annotations

from pathlib import Path

import pytest

from huffpack.engine.huffman_file import decode_file, default_artifact_path, encode_file
from huffpack.errors import IoError, MalformedTrieFileError, TruncatedStreamError


def test_encode_decode_file(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    packed = tmp_path / "in.huf"
    back = tmp_path / "back.txt"
    data = ("RIGA ARTICOLO: vite M3 qty=10 prezzo=1.20\n" * 50).encode("utf-8")
    inp.write_bytes(data)

    summary = encode_file(inp, packed)
    art = default_artifact_path(packed)
    assert summary.artifact == art
    assert art.name == "in.huf.freq"
    assert art.read_text(encoding="utf-8").splitlines()[0] == str(len(data))
    assert summary.total == len(data)
    assert packed.stat().st_size == summary.packed_bytes < len(data)

    d = decode_file(packed, back)
    assert d.total == len(data)
    assert back.read_bytes() == data


def test_scenario_file(tmp_path: Path) -> None:
    inp = tmp_path / "abcd.txt"
    inp.write_bytes(b"AAAAABBBCCD")
    art = tmp_path / "freqFile.txt"
    encode_file(inp, tmp_path / "enc.txt", art)
    assert art.read_text(encoding="utf-8").splitlines()[0] == "11"

    decode_file(tmp_path / "enc.txt", tmp_path / "out.txt", art)
    assert (tmp_path / "out.txt").read_bytes() == b"AAAAABBBCCD"


def test_large_file_crosses_chunk_boundaries(tmp_path: Path) -> None:
    inp = tmp_path / "big.bin"
    data = bytes((i * 7 + (i >> 9)) & 0xFF for i in range(150_000))
    inp.write_bytes(data)
    encode_file(inp, tmp_path / "big.huf")
    decode_file(tmp_path / "big.huf", tmp_path / "big.out")
    assert (tmp_path / "big.out").read_bytes() == data


def test_single_symbol_and_empty_files(tmp_path: Path) -> None:
    for name, data in (("one", b"aaaa"), ("empty", b"")):
        inp = tmp_path / name
        inp.write_bytes(data)
        encode_file(inp, tmp_path / f"{name}.huf")
        decode_file(tmp_path / f"{name}.huf", tmp_path / f"{name}.out")
        assert (tmp_path / f"{name}.out").read_bytes() == data

    assert (tmp_path / "empty.huf.freq").read_text(encoding="utf-8") == "0\n"


def test_missing_input_is_io_error_and_leaves_no_output(tmp_path: Path) -> None:
    out = tmp_path / "x.huf"
    with pytest.raises(IoError):
        encode_file(tmp_path / "nope.bin", out)
    assert not out.exists()
    assert not default_artifact_path(out).exists()


def test_truncated_packed_file_removes_output(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    inp.write_bytes(b"hello huffman world " * 40)
    packed = tmp_path / "in.huf"
    encode_file(inp, packed)
    packed.write_bytes(packed.read_bytes()[:5])

    back = tmp_path / "back.txt"
    with pytest.raises(TruncatedStreamError):
        decode_file(packed, back)
    assert not back.exists()


def test_malformed_artifact(tmp_path: Path) -> None:
    packed = tmp_path / "p.huf"
    packed.write_bytes(b"\x00")
    default_artifact_path(packed).write_text("eleven\n", encoding="utf-8")
    with pytest.raises(MalformedTrieFileError):
        decode_file(packed, tmp_path / "out")


def test_missing_artifact_is_io_error(tmp_path: Path) -> None:
    packed = tmp_path / "p.huf"
    packed.write_bytes(b"\x00")
    with pytest.raises(IoError):
        decode_file(packed, tmp_path / "out")


def test_failed_encode_keeps_existing_outputs(tmp_path: Path) -> None:
    out = tmp_path / "keep.huf"
    art = default_artifact_path(out)
    out.write_bytes(b"previous packed")
    art.write_text("previous freq\n", encoding="utf-8")

    with pytest.raises(IoError):
        encode_file(tmp_path / "missing.bin", out)

    assert out.read_bytes() == b"previous packed"
    assert art.read_text(encoding="utf-8") == "previous freq\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["keep.huf", "keep.huf.freq"]


def test_failed_decode_keeps_existing_output(tmp_path: Path) -> None:
    packed = tmp_path / "p.huf"
    default_artifact_path(packed).write_text("3\n1:3\n", encoding="utf-8")
    back = tmp_path / "keep.txt"
    back.write_bytes(b"previous restore")

    # packed file missing
    with pytest.raises(IoError):
        decode_file(packed, back)
    assert back.read_bytes() == b"previous restore"

    # packed file too short for the claimed count
    packed.write_bytes(b"")
    with pytest.raises(TruncatedStreamError):
        decode_file(packed, back)
    assert back.read_bytes() == b"previous restore"
    assert not (tmp_path / "keep.txt.part").exists()


def test_successful_encode_replaces_existing_outputs(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    inp.write_bytes(b"AAAAABBBCCD")
    out = tmp_path / "o.huf"
    out.write_bytes(b"stale")
    default_artifact_path(out).write_text("stale\n", encoding="utf-8")

    encode_file(inp, out)
    assert default_artifact_path(out).read_text(encoding="utf-8").splitlines()[0] == "11"
    assert not (tmp_path / "o.huf.part").exists()
    decode_file(out, tmp_path / "back.txt")
    assert (tmp_path / "back.txt").read_bytes() == b"AAAAABBBCCD"
