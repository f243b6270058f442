# v4a/diff/lines.py
"""Terminator tables and the line-level cursor helpers shared by the parsers."""
from __future__ import annotations

import re

from ..models.chunk import ParserState

__all__ = [
    "END_PATCH",
    "END_FILE",
    "SECTION_TERMINATORS",
    "END_SECTION_MARKERS",
    "normalize_diff_lines",
    "is_done",
    "read_str",
]

END_PATCH = "*** End Patch"
END_FILE = "*** End of File"

SECTION_TERMINATORS: tuple[str, ...] = (
    END_PATCH,
    "*** Update File:",
    "*** Delete File:",
    "*** Add File:",
)

END_SECTION_MARKERS: tuple[str, ...] = SECTION_TERMINATORS + (END_FILE,)

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def normalize_diff_lines(diff: str) -> list[str]:
    """
    Split patch text into lines, dropping line-ending noise and the single
    phantom empty line left behind by a trailing terminator.
    """
    lines = [ln.rstrip("\r") for ln in _LINE_SPLIT_RE.split(diff)]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_done(state: ParserState, prefixes: tuple[str, ...] | list[str]) -> bool:
    """True once the cursor is past the end or sits on a line with one of `prefixes`."""
    if state.index >= len(state.lines):
        return True
    return state.lines[state.index].startswith(tuple(prefixes))


def read_str(state: ParserState, prefix: str) -> str:
    """Consume the current line if it starts with `prefix` and return the remainder."""
    if state.index >= len(state.lines):
        return ""
    current = state.lines[state.index]
    if current.startswith(prefix):
        state.index += 1
        return current[len(prefix):]
    return ""
