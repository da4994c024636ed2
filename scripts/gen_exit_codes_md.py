#!/usr/bin/env python3
"""Write (or --check) docs/exit_codes.md from src/huffpack/errors.py."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="gen_exit_codes_md.py")
    ap.add_argument("--check", action="store_true", help="Fail if the docs file is stale")
    ns = ap.parse_args(argv)

    repo = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo / "src"))

    from huffpack.errors import render_exit_codes_markdown  # noqa: E402

    out = repo / "docs" / "exit_codes.md"
    want = render_exit_codes_markdown()

    if ns.check:
        have = out.read_text(encoding="utf-8") if out.is_file() else ""
        if have != want:
            print(f"[huffpack] {out} is stale, run scripts/gen_exit_codes_md.py", file=sys.stderr)
            return 1
        print("OK")
        return 0

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(want, encoding="utf-8")
    print(f"[huffpack] wrote {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
