# v4a/diff/locate.py
"""
Fuzzy context location.

The same left-to-right scan is run once per precision tier; the first tier
that finds the context anywhere at or after `start` wins and reports its fuzz:

    tier 0  exact equality              fuzz 0
    tier 1  trailing whitespace ignored fuzz 1
    tier 2  surrounding whitespace ign. fuzz 100

EOF-anchored contexts are first tried flush against the end of the document;
a match elsewhere is still accepted but carries EOF_FUZZ on top.
"""
from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from ..models.chunk import ContextMatch

__all__ = ["EOF_FUZZ", "MATCH_TIERS", "find_context", "find_context_core", "equals_slice"]

EOF_FUZZ = 10_000


def _exact(s: str) -> str:
    return s


def _rstrip(s: str) -> str:
    return s.rstrip()


def _strip(s: str) -> str:
    return s.strip()


MATCH_TIERS: Tuple[Tuple[Callable[[str], str], int], ...] = (
    (_exact, 0),
    (_rstrip, 1),
    (_strip, 100),
)


def equals_slice(
    source: Sequence[str],
    target: Sequence[str],
    start: int,
    normalize: Callable[[str], str],
) -> bool:
    """True if `target` lines up with `source[start:]` under `normalize`."""
    if start + len(target) > len(source):
        return False
    return all(
        normalize(source[start + offset]) == normalize(line)
        for offset, line in enumerate(target)
    )


def find_context_core(lines: List[str], context: List[str], start: int) -> ContextMatch:
    """Scan from `start` for `context`, trying each tier in turn."""
    if not context:
        return ContextMatch(start, 0)
    for normalize, penalty in MATCH_TIERS:
        for i in range(start, len(lines)):
            if equals_slice(lines, context, i, normalize):
                return ContextMatch(i, penalty)
    return ContextMatch(-1, 0)


def find_context(lines: List[str], context: List[str], start: int, eof: bool) -> ContextMatch:
    if eof:
        end_start = max(0, len(lines) - len(context))
        end_match = find_context_core(lines, context, end_start)
        if end_match.new_index != -1:
            return end_match
        fallback = find_context_core(lines, context, start)
        return ContextMatch(fallback.new_index, fallback.fuzz + EOF_FUZZ)
    return find_context_core(lines, context, start)
