"""huffpack CLI.

This is the stable CLI entrypoint (console-script: ``huffpack``).

  huffpack encode INPUT OUTPUT        packed stream + OUTPUT.freq
  huffpack decode INPUT OUTPUT        uses INPUT.freq unless --artifact
  huffpack roundtrip INPUT RESTORED   encode then decode (scratch files in --workdir)
  huffpack verify ORIGINAL PACKED     decode in memory and compare
  huffpack stats INPUT                entropy / Huffman / baseline sizes
"""

from __future__ import annotations

import argparse
import json
import sys
import tempfile
from pathlib import Path

from huffpack.errors import EXIT_USAGE, HuffpackError
from huffpack.options import OptionsError, RunOptions, load_options

PROG = "huffpack"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _note(msg: str) -> None:
    print(f"[{PROG}] {msg}", file=sys.stderr)


def _artifact_for(output: Path, artifact: Path | None, opts: RunOptions) -> Path:
    from huffpack.engine.huffman_file import default_artifact_path

    if artifact is not None:
        return artifact
    return default_artifact_path(output, opts.artifact_suffix)


def _cmd_encode(
    input_path: Path, output_path: Path, artifact: Path | None, opts: RunOptions, *, verbose: bool
) -> int:
    from huffpack.engine.huffman_file import encode_file
    from huffpack.verify import verify_encoded

    art = _artifact_for(output_path, artifact, opts)
    summary = encode_file(input_path, output_path, art)
    if opts.verify:
        try:
            verify_encoded(input_path, output_path, art)
        except HuffpackError:
            # a pair that does not decode back must not be left looking valid
            for p in (output_path, art):
                p.unlink(missing_ok=True)
            raise
    if verbose:
        _note(
            f"encoded {summary.total} symbols ({summary.distinct} distinct, max code {summary.max_code_len} bits)"
            f" -> {summary.packed_bytes} bytes, ratio {summary.ratio:.3f}; freq file {summary.artifact}"
        )
    return 0


def _cmd_decode(
    input_path: Path, output_path: Path, artifact: Path | None, opts: RunOptions, *, verbose: bool
) -> int:
    from huffpack.engine.huffman_file import decode_file

    art = _artifact_for(input_path, artifact, opts)
    summary = decode_file(input_path, output_path, art)
    if verbose:
        _note(f"decoded {summary.total} symbols ({summary.distinct} distinct) from {summary.bits_read} bits")
    return 0


def _cmd_roundtrip(input_path: Path, restored_path: Path, workdir: Path | None, *, verbose: bool) -> int:
    from huffpack.engine.huffman_file import decode_file, encode_file

    def _run(wd: Path) -> None:
        packed = wd / (input_path.name + ".huf")
        art = wd / (input_path.name + ".huf.freq")
        enc = encode_file(input_path, packed, art)
        decode_file(packed, restored_path, art)
        if verbose:
            _note(f"roundtrip: {enc.total} symbols via {packed} ({enc.packed_bytes} bytes)")

    if workdir is not None:
        workdir.mkdir(parents=True, exist_ok=True)
        _run(workdir)
    else:
        with tempfile.TemporaryDirectory(prefix="huffpack-") as td:
            _run(Path(td))
    return 0


def _cmd_verify(original: Path, packed: Path, artifact: Path | None, opts: RunOptions) -> int:
    from huffpack.verify import verify_encoded

    verify_encoded(original, packed, _artifact_for(packed, artifact, opts))
    print("OK")
    return 0


def _cmd_stats(input_path: Path, opts: RunOptions, *, as_json: bool) -> int:
    from huffpack.errors import IoError
    from huffpack.stats import compute_stats, render_stats

    try:
        data = input_path.read_bytes()
    except OSError as e:
        raise IoError(f"cannot read {input_path}: {e}") from e

    st = compute_stats(data, baselines=opts.baselines, zstd_level=opts.zstd_level)
    if as_json:
        print(json.dumps(st.as_dict(), sort_keys=True))
    else:
        print(render_stats(st))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=PROG, description="Static Huffman file compressor")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_e = sub.add_parser("encode", help="Compress INPUT into OUTPUT (+ frequency file)")
    p_e.add_argument("input", type=Path)
    p_e.add_argument("output", type=Path)
    p_e.add_argument("--artifact", type=Path, default=None, help="Frequency file path (default: OUTPUT.freq)")
    p_e.add_argument(
        "--options",
        default=None,
        help="Run options JSON ('@file.json' or inline). Schema: huffpack.options.v1",
    )
    p_e.add_argument("--verbose", action="store_true", help="Print a summary line to stderr")
    _add_common_args(p_e)

    p_d = sub.add_parser("decode", help="Restore OUTPUT from packed INPUT (+ frequency file)")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    p_d.add_argument("--artifact", type=Path, default=None, help="Frequency file path (default: INPUT.freq)")
    p_d.add_argument("--options", default=None, help="Run options JSON (only artifact_suffix is used)")
    p_d.add_argument("--verbose", action="store_true", help="Print a summary line to stderr")
    _add_common_args(p_d)

    p_r = sub.add_parser("roundtrip", help="Encode INPUT then decode it into RESTORED")
    p_r.add_argument("input", type=Path)
    p_r.add_argument("restored", type=Path)
    p_r.add_argument("--workdir", type=Path, default=None, help="Keep packed + frequency file here")
    p_r.add_argument("--verbose", action="store_true", help="Print a summary line to stderr")
    _add_common_args(p_r)

    p_v = sub.add_parser("verify", help="Check that PACKED decodes back to ORIGINAL")
    p_v.add_argument("original", type=Path)
    p_v.add_argument("packed", type=Path)
    p_v.add_argument("--artifact", type=Path, default=None, help="Frequency file path (default: PACKED.freq)")
    p_v.add_argument("--options", default=None, help="Run options JSON (only artifact_suffix is used)")
    _add_common_args(p_v)

    p_s = sub.add_parser("stats", help="Entropy, Huffman size and baseline sizes for INPUT")
    p_s.add_argument("input", type=Path)
    p_s.add_argument("--options", default=None, help="Run options JSON (baselines, zstd_level)")
    p_s.add_argument("--json", action="store_true", help="Print a JSON object instead of text")
    _add_common_args(p_s)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        opts = load_options(getattr(ns, "options", None))

        if ns.cmd == "encode":
            return _cmd_encode(ns.input, ns.output, ns.artifact, opts, verbose=bool(ns.verbose))
        if ns.cmd == "decode":
            return _cmd_decode(ns.input, ns.output, ns.artifact, opts, verbose=bool(ns.verbose))
        if ns.cmd == "roundtrip":
            return _cmd_roundtrip(ns.input, ns.restored, ns.workdir, verbose=bool(ns.verbose))
        if ns.cmd == "verify":
            return _cmd_verify(ns.original, ns.packed, ns.artifact, opts)
        if ns.cmd == "stats":
            return _cmd_stats(ns.input, opts, as_json=bool(ns.json))
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except OptionsError as e:
        if getattr(ns, "debug", False):
            raise
        _note(str(e))
        return EXIT_USAGE
    except HuffpackError as e:
        if getattr(ns, "debug", False):
            raise
        _note(str(e))
        return int(getattr(e, "exit_code", 10) or 10)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        _note(f"error: {e}")
        return 10


if __name__ == "__main__":
    raise SystemExit(main())
