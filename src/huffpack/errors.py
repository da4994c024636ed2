"""Typed errors for huffpack.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_IO = 12
EXIT_MALFORMED_TRIE = 13
EXIT_TRUNCATED = 14
EXIT_VERIFY_MISMATCH = 15


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid options JSON)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (internal invariant, unexpected error)"),
    ExitCodeInfo(EXIT_IO, "IO", "Read/write failure on an input, output or artifact stream"),
    ExitCodeInfo(EXIT_MALFORMED_TRIE, "MALFORMED_TRIE", "Side artifact (frequency file) does not parse"),
    ExitCodeInfo(EXIT_TRUNCATED, "TRUNCATED", "Packed stream ended before all symbols were decoded"),
    ExitCodeInfo(EXIT_VERIFY_MISMATCH, "VERIFY_MISMATCH", "Decoded bytes differ from the original"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/huffpack/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- All internal errors extend `HuffpackError` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append("- On failure, partially written outputs are removed and must not be trusted.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffpackError(Exception):
    """Base error for huffpack."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffpackError):
    exit_code = EXIT_USAGE


class IoError(HuffpackError):
    """Read/write failure on an underlying stream (wraps OSError)."""

    exit_code = EXIT_IO


class MalformedTrieFileError(HuffpackError):
    exit_code = EXIT_MALFORMED_TRIE


class TruncatedStreamError(HuffpackError):
    exit_code = EXIT_TRUNCATED


class VerifyMismatch(HuffpackError):
    exit_code = EXIT_VERIFY_MISMATCH


# Internal invariant violations: callers that respect size checks never see these.


class EmptyQueueError(HuffpackError):
    pass


class QueueFullError(HuffpackError):
    pass


class EmptyTableError(HuffpackError):
    """Trie requested from a frequency table with no nonzero entry."""


class MalformedTrieError(HuffpackError):
    """Internal node without both children (never built by build_trie)."""


class MissingCodeError(HuffpackError, KeyError):
    """Byte to encode has no entry in the code table."""

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""
