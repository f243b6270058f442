"""
The patch engine: parse a V4A-style patch body and apply it to one document.

Public API:
  - apply_diff(input, diff, mode=ApplyDiffMode.DEFAULT, *, logger=None, log=False) -> str
  - apply_diff_with_fuzz(...) -> tuple[str, int]
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Tuple

from .._logging import resolve_logger
from .apply import apply_chunks
from .lines import normalize_diff_lines
from .locate import find_context, find_context_core
from .parser import parse_create_diff, parse_update_diff, read_section

__all__ = [
    "ApplyDiffMode",
    "apply_diff",
    "apply_diff_with_fuzz",
    "apply_chunks",
    "normalize_diff_lines",
    "find_context",
    "find_context_core",
    "parse_create_diff",
    "parse_update_diff",
    "read_section",
]


class ApplyDiffMode(str, Enum):
    DEFAULT = "default"
    CREATE = "create"


def apply_diff_with_fuzz(
    input: str,
    diff: str,
    mode: ApplyDiffMode | str = ApplyDiffMode.DEFAULT,
    *,
    logger=None,
    log: bool = False,
) -> Tuple[str, int]:
    """
    Apply `diff` to `input` and also return the total fuzz of the context matches.

    In create mode `input` is ignored and the fuzz is always 0.

    Raises:
        PatchFailedError: on a malformed patch or context that cannot be found.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    mode = ApplyDiffMode(mode)
    diff_lines = normalize_diff_lines(diff)

    if mode is ApplyDiffMode.CREATE:
        log.debug(f"create mode: {len(diff_lines)} lines")
        return parse_create_diff(diff_lines), 0

    parsed = parse_update_diff(diff_lines, input, log=log)
    log.debug(f"parsed {len(parsed.chunks)} chunks, total fuzz {parsed.fuzz}")
    return apply_chunks(input, parsed.chunks), parsed.fuzz


def apply_diff(
    input: str,
    diff: str,
    mode: ApplyDiffMode | str = ApplyDiffMode.DEFAULT,
    *,
    logger=None,
    log: bool = False,
) -> str:
    """Apply a patch body to `input` and return the patched text."""
    text, _fuzz = apply_diff_with_fuzz(input, diff, mode, logger=logger, log=log)
    return text
