from __future__ import annotations

import io

import pytest

from huffpack.core.frequency import count_frequencies
from huffpack.core.trie import build_code_table, build_trie, code_lengths
from huffpack.core.trie_codec import dump_trie, load_trie, read_trie, write_trie
from huffpack.errors import MalformedTrieFileError


def test_dump_scenario_format() -> None:
    text = dump_trie(count_frequencies(b"AAAAABBBCCD"))
    assert text == "11\n1000001:5\n1000010:3\n1000011:2\n1000100:1\n"
    assert text.splitlines()[0] == "11"


def test_artifact_roundtrip_gives_same_codes() -> None:
    data = b"she sells sea shells by the sea shore\n" * 3 + bytes([0, 255, 0])
    freq = count_frequencies(data)
    codes = build_code_table(build_trie(freq))

    buf = io.StringIO()
    write_trie(buf, freq)
    buf.seek(0)
    total, freq2, root2 = read_trie(buf)

    assert total == len(data)
    assert freq2 == freq
    assert root2 is not None
    codes2 = build_code_table(root2)
    assert code_lengths(codes2) == code_lengths(codes)
    assert codes2 == codes


def test_reader_does_not_depend_on_line_order() -> None:
    freq = count_frequencies(b"AAAAABBBCCD")
    lines = dump_trie(freq).splitlines()
    shuffled = "\n".join([lines[0], *reversed(lines[1:])]) + "\n"
    _, freq2, root2 = load_trie(shuffled)
    assert freq2 == freq
    assert build_code_table(root2) == build_code_table(build_trie(freq))


def test_symbol_zero_and_blank_lines() -> None:
    total, freq, root = load_trie("3\n\n0:2\n11111111:1\n\n")
    assert total == 3
    assert freq[0] == 2 and freq[255] == 1
    assert root is not None and root.weight == 3


def test_empty_input_artifact() -> None:
    total, freq, root = load_trie("0\n")
    assert total == 0
    assert root is None
    assert sum(freq) == 0


@pytest.mark.parametrize(
    "text",
    [
        "",
        "\n\n",
        "abc\n1:1\n",
        "-1\n",
        "2\n1-2\n",
        "2\n12:2\n",
        "2\n1:\n",
        "2\n:2\n",
        "2\n1:x\n",
        "2\n1:1:1\n",
        "1\n100000000:1\n",
        "0\n1:0\n",
        "2\n1:1\n1:1\n",
        "5\n1:2\n",
        "3\n",
    ],
)
def test_malformed_artifacts_are_rejected(text: str) -> None:
    with pytest.raises(MalformedTrieFileError):
        load_trie(text)
