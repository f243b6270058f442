# v4a/commit/files.py
from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

import pathspec

from .._logging import resolve_logger
from ..diff import ApplyDiffMode, apply_diff, apply_diff_with_fuzz
from ..errors.commit import CommitError
from ..errors.patch import DuplicatePathError
from ..errors.path import PathViolation
from ..utils.gitignore import get_gitignore, is_ignored
from .core import Change, CommitSummary, _normalized_path, commit_changes
from .envelope import split_patch

__all__ = ["apply_patch"]


def _detect_eol(s: str) -> str:
    if "\r\n" in s:
        return "\r\n"
    if "\r" in s:
        return "\r"
    return "\n"


def _guard(base_real: str, rel_path: str, ignore: Optional[pathspec.PathSpec]) -> str:
    resolved = _normalized_path(base_real, rel_path)
    if ignore is not None:
        rel = os.path.relpath(resolved, base_real)
        if is_ignored(ignore, rel):
            raise PathViolation(f"Path '{rel_path}' is excluded by .gitignore")
    return resolved


def _read_text(resolved: str, rel_path: str, *, strict: bool = True) -> Optional[str]:
    """
    Read a patch target as UTF-8. Undecodable content raises CommitError, or
    yields None when `strict` is False (deletes only need the text for rollback).
    """
    if not os.path.isfile(resolved):
        raise CommitError(f"File not found: '{rel_path}'")
    try:
        # newline="" keeps CRLF intact so the original line endings can be restored.
        with open(resolved, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        if strict:
            raise CommitError(f"File is not valid UTF-8 text: '{rel_path}'") from e
        return None


def _claim(targets: Dict[str, str], resolved: str, rel_path: str) -> None:
    """Each filesystem path may be touched by only one operation of a patch."""
    if resolved in targets:
        raise DuplicatePathError(rel_path)
    targets[resolved] = rel_path


def _patch_document(original: str, diff: str, log) -> tuple[str, int]:
    """Run the engine on LF-normalized text and restore the file's own line endings."""
    eol = _detect_eol(original)
    text = original.replace(eol, "\n") if eol != "\n" else original
    new_text, fuzz = apply_diff_with_fuzz(text, diff, logger=log)
    if eol != "\n":
        new_text = new_text.replace("\n", eol)
    return new_text, fuzz


def apply_patch(
    base_path: str,
    patch: str,
    *,
    mode: str = "fail_fast",
    atomic: bool = True,
    dry_run: bool = False,
    backup_ext: str | None = None,
    respect_gitignore: bool = False,
    logger=None,
    log: bool = False,
) -> CommitSummary:
    """
    Apply a multi-file `*** Begin Patch` envelope to the tree under `base_path`.

    Every file section is parsed and applied in memory first; nothing touches
    the filesystem unless all of them succeed. The resulting changes are then
    written through `commit_changes` with the given `mode`, `atomic`,
    `dry_run` and `backup_ext`.

    Raises:
        PatchFailedError: on a malformed envelope, a section that does not apply,
            or two operations touching the same path (DuplicatePathError).
        PathViolation: if a path escapes `base_path` or (with respect_gitignore)
            is matched by the nearest .gitignore.
        CommitError: if an updated/deleted file is missing or a created one exists.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    base_real = os.path.realpath(base_path)
    ignore = get_gitignore(base_real) if respect_gitignore else None

    ops = split_patch(patch)
    log.debug(f"patch envelope holds {len(ops)} file operations")

    changes: List[Change] = []
    fuzz: dict[str, int] = {}
    # resolved path -> patch path, across sources, additions and move destinations
    targets: Dict[str, str] = {}
    for op in ops:
        resolved = _guard(base_real, op.path, ignore)
        _claim(targets, resolved, op.path)

        if op.action == "create":
            if os.path.exists(resolved):
                raise CommitError(f"Add File Error - file already exists: '{op.path}'")
            content = apply_diff("", op.diff, ApplyDiffMode.CREATE, logger=log)
            changes.append(Change("create", op.path, new_content=content))
            continue

        if op.action == "delete":
            original = _read_text(resolved, op.path, strict=False)
            changes.append(Change("delete", op.path, original_content=original))
            continue

        original = _read_text(resolved, op.path)
        new_text, fuzz[op.path] = _patch_document(original, op.diff, log)
        log.debug(f"{op.path}: updated with fuzz {fuzz[op.path]}")

        if op.move_to:
            dest = _guard(base_real, op.move_to, ignore)
            _claim(targets, dest, op.move_to)
            if os.path.exists(dest):
                raise CommitError(f"Move Error - destination already exists: '{op.move_to}'")
            changes.append(Change("create", op.move_to, new_content=new_text))
            changes.append(Change("delete", op.path, original_content=original))
        else:
            changes.append(Change("modify", op.path, new_content=new_text, original_content=original))

    summary = commit_changes(
        base_real, changes, mode=mode, atomic=atomic, dry_run=dry_run, backup_ext=backup_ext
    )
    summary.fuzz.update(fuzz)
    return summary
