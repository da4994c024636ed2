"""Round-trip verification of an encoded pair (packed stream + frequency file)."""

from __future__ import annotations

from pathlib import Path

from huffpack.core.decoder import decode_bytes
from huffpack.core.trie_codec import load_trie
from huffpack.engine.huffman_file import default_artifact_path
from huffpack.errors import IoError, MalformedTrieFileError, VerifyMismatch


def _read_bytes(p: Path) -> bytes:
    try:
        return p.read_bytes()
    except OSError as e:
        raise IoError(f"cannot read {p}: {e}") from e


def verify_encoded(
    original_path: Path, packed_path: Path, artifact_path: Path | None = None
) -> int:
    """Decode packed_path in memory and compare with original_path.

    Returns the number of verified bytes; raises VerifyMismatch on difference.
    """
    orig = Path(original_path)
    packed = Path(packed_path)
    art = Path(artifact_path) if artifact_path is not None else default_artifact_path(packed)

    try:
        text = _read_bytes(art).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedTrieFileError(f"frequency file is not valid UTF-8: {art}") from e

    total, _freq, root = load_trie(text)
    restored = decode_bytes(_read_bytes(packed), root, total)
    expected = _read_bytes(orig)

    if restored != expected:
        first = next(
            (i for i, (a, b) in enumerate(zip(restored, expected)) if a != b),
            min(len(restored), len(expected)),
        )
        raise VerifyMismatch(
            f"verify: mismatch at byte {first} (restored={len(restored)} bytes, original={len(expected)} bytes)"
        )
    return total
