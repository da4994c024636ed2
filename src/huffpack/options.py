"""Run options (v1) for huffpack.

Small and strict, like any config contract:
  - JSON only ('@file.json' or inline)
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from huffpack.core.baselines import BASELINE_IDS
from huffpack.engine.huffman_file import ARTIFACT_SUFFIX_DEFAULT

OPTIONS_ID_V1 = "huffpack.options.v1"


class OptionsError(ValueError):
    pass


def _load_json_arg(arg: str) -> dict[str, Any]:
    s = arg.strip()
    if not s:
        raise OptionsError("options: empty argument")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.is_file():
            raise OptionsError(f"options: file not found: {p}")
        raw = p.read_text(encoding="utf-8")
        where = str(p)
    else:
        raw = s
        where = "inline JSON"

    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise OptionsError(f"options: invalid JSON in {where}: {e}") from e
    if not isinstance(obj, dict):
        raise OptionsError(f"options: {where} must be a JSON object")
    return obj


def _optional_bool(obj: dict[str, Any], key: str, default: bool) -> bool:
    if key not in obj:
        return default
    v = obj[key]
    if isinstance(v, bool):
        return v
    raise OptionsError(f"options: '{key}' must be a boolean")


def _optional_suffix(obj: dict[str, Any]) -> str:
    v = obj.get("artifact_suffix", ARTIFACT_SUFFIX_DEFAULT)
    if not isinstance(v, str) or len(v) < 2 or not v.startswith(".") or "/" in v or "\\" in v:
        raise OptionsError("options: 'artifact_suffix' must look like '.freq'")
    return v


def _optional_baselines(obj: dict[str, Any]) -> tuple[str, ...]:
    if "baselines" not in obj:
        return ("zlib",)
    v = obj["baselines"]
    if not isinstance(v, list) or not all(isinstance(x, str) for x in v):
        raise OptionsError("options: 'baselines' must be a list of strings")
    out: list[str] = []
    for x in v:
        cid = x.strip().lower()
        if cid not in BASELINE_IDS:
            raise OptionsError(f"options: unknown baseline {x!r} (allowed: {', '.join(BASELINE_IDS)})")
        if cid not in out:
            out.append(cid)
    return tuple(out)


def _optional_level(obj: dict[str, Any]) -> int:
    v = obj.get("zstd_level", 19)
    if isinstance(v, bool) or not isinstance(v, int) or not (1 <= v <= 22):
        raise OptionsError("options: 'zstd_level' must be an integer in 1..22")
    return v


@dataclass(frozen=True)
class RunOptions:
    artifact_suffix: str = ARTIFACT_SUFFIX_DEFAULT
    verify: bool = False
    baselines: tuple[str, ...] = ("zlib",)
    zstd_level: int = 19


DEFAULT_OPTIONS = RunOptions()


def load_options(arg: str | None) -> RunOptions:
    """Load and validate run options; None -> defaults."""
    if arg is None:
        return DEFAULT_OPTIONS

    obj = _load_json_arg(arg)

    allowed = {"spec", "artifact_suffix", "verify", "baselines", "zstd_level"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise OptionsError(f"options: unsupported keys: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != OPTIONS_ID_V1:
        raise OptionsError(f"options: unsupported spec {spec_id!r} (expected {OPTIONS_ID_V1!r})")

    return RunOptions(
        artifact_suffix=_optional_suffix(obj),
        verify=_optional_bool(obj, "verify", False),
        baselines=_optional_baselines(obj),
        zstd_level=_optional_level(obj),
    )
