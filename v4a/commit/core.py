# v4a/commit/core.py
from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..errors.path import PathViolation


log = logging.getLogger(__name__)

_ACTIONS = ("create", "modify", "delete")


@dataclass
class Change:
    """A single filesystem operation produced from a patch."""
    action: str  # "create", "modify", "delete"
    path: str
    new_content: Optional[str] = None
    original_content: Optional[str] = None


@dataclass
class CommitSummary:
    """Outcome of a commit operation."""

    success: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    dry_run: bool = False
    # relative path -> error string (when failed)
    errors: Dict[str, str] = field(default_factory=dict)
    # relative path -> total context fuzz of the applied update
    fuzz: Dict[str, int] = field(default_factory=dict)

    def record_failure(self, path: str, exc: BaseException) -> None:
        self.failed.append(path)
        self.errors[path] = str(exc)


def _normalized_path(base_real: str, rel_path: str, check_exists: bool = False) -> str:
    """
    Join a repository-relative path onto base_real and enforce containment.
    Raises PathViolation if the resolved path escapes base_real.
    """
    target_path = os.path.join(base_real, *rel_path.split("/"))
    resolved = os.path.realpath(target_path) if check_exists else os.path.abspath(target_path)
    if os.path.commonpath([base_real, resolved]) != base_real:
        raise PathViolation(f"Path traversal attempt detected for '{rel_path}'")
    return resolved


def _backup_path(dest: str, backup_ext: str) -> str:
    ext = backup_ext if backup_ext.startswith(".") else "." + backup_ext
    return dest + ext


def _write_text(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def _plan(ch: Change, resolved: str) -> str:
    if ch.action == "delete":
        if not os.path.exists(resolved):
            raise FileNotFoundError(f"File to delete not found: '{ch.path}'")
        return f"DRY RUN: Would delete file {ch.path}"
    dirpath = os.path.dirname(resolved)
    if os.path.exists(dirpath) and not os.access(dirpath, os.W_OK):
        raise PermissionError(f"No write permission for directory '{dirpath}'")
    return f"DRY RUN: Would {ch.action} file {ch.path} ({len(ch.new_content or '')} bytes)"


def _write_backup(ch: Change, dest: str, backup_ext: Optional[str]) -> None:
    if not backup_ext or ch.action != "modify" or not os.path.exists(dest):
        return
    if ch.original_content is None:
        shutil.copy2(dest, _backup_path(dest, backup_ext))
    else:
        _write_text(_backup_path(dest, backup_ext), ch.original_content)


def _stage(normalized: List[Tuple[Change, str]], summary: CommitSummary, fail_fast: bool) -> Tuple[Dict[str, str], bool]:
    """Write create/modify contents to tempfiles next to their destinations."""
    staged: Dict[str, str] = {}
    for ch, resolved in normalized:
        if ch.action == "delete":
            continue
        try:
            if resolved in staged:
                raise FileExistsError(f"More than one change writes '{ch.path}'")
            dirpath = os.path.dirname(resolved)
            os.makedirs(dirpath, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".v4a-", suffix=".tmp", dir=dirpath)
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(ch.new_content or "")
            staged[resolved] = tmp
        except OSError as e:
            summary.record_failure(ch.path, e)
            if fail_fast:
                return staged, False
    return staged, True


def _discard(staged: Dict[str, str]) -> None:
    for tmp in staged.values():
        with contextlib.suppress(OSError):
            if os.path.exists(tmp):
                os.remove(tmp)


def _set_aside(path: str) -> str:
    """Move a file to a tempfile beside it so a delete can be undone byte for byte."""
    fd, tmp = tempfile.mkstemp(prefix=".v4a-", suffix=".del", dir=os.path.dirname(path))
    os.close(fd)
    os.replace(path, tmp)
    return tmp


def _rollback(promoted: List[Tuple[str, Change]], trash: Dict[str, str]) -> None:
    """Undo promoted changes in reverse order, restoring original contents where known."""
    for pth, ch in reversed(promoted):
        try:
            if ch.action == "create":
                if os.path.exists(pth):
                    os.remove(pth)
            elif pth in trash:
                os.replace(trash.pop(pth), pth)
            elif ch.original_content is not None:
                _write_text(pth, ch.original_content)
        except OSError as e:
            log.warning(f"rollback of {ch.path} failed: {e}")


def _commit_atomic(
    normalized: List[Tuple[Change, str]],
    summary: CommitSummary,
    fail_fast: bool,
    backup_ext: Optional[str],
) -> CommitSummary:
    staged, ok = _stage(normalized, summary, fail_fast)
    if not ok:
        # Nothing promoted yet; the filesystem is unchanged.
        _discard(staged)
        return summary

    promoted: List[Tuple[str, Change]] = []
    # deleted path -> set-aside tempfile, for deletes without original_content
    trash: Dict[str, str] = {}
    for ch, resolved in normalized:
        if ch.path in summary.failed:
            continue
        try:
            if ch.action == "delete":
                if os.path.exists(resolved):
                    if ch.original_content is None:
                        trash[resolved] = _set_aside(resolved)
                    else:
                        os.remove(resolved)
            else:
                if ch.action == "modify" and not os.path.exists(resolved):
                    raise FileNotFoundError(f"File expected for modification not found: '{ch.path}'")
                tmp = staged.pop(resolved, None)
                if tmp is None:
                    raise FileNotFoundError(f"Missing staged content for {ch.action} '{ch.path}'")
                _write_backup(ch, resolved, backup_ext)
                os.replace(tmp, resolved)
            summary.success.append(ch.path)
            promoted.append((resolved, ch))
        except OSError as e:
            summary.record_failure(ch.path, e)
            if fail_fast:
                _rollback(promoted, trash)
                _discard(staged)
                _discard(trash)
                summary.success.clear()
                return summary
    _discard(staged)
    _discard(trash)
    return summary


def _commit_direct(
    normalized: List[Tuple[Change, str]],
    summary: CommitSummary,
    fail_fast: bool,
    backup_ext: Optional[str],
) -> CommitSummary:
    # No rollback here: only the atomic path guarantees a clean tree on failure.
    for ch, resolved in normalized:
        try:
            if ch.action == "delete":
                if os.path.exists(resolved):
                    os.remove(resolved)
            else:
                os.makedirs(os.path.dirname(resolved), exist_ok=True)
                _write_backup(ch, resolved, backup_ext)
                _write_text(resolved, ch.new_content or "")
            summary.success.append(ch.path)
        except OSError as e:
            summary.record_failure(ch.path, e)
            if fail_fast:
                return summary
    return summary


def commit_changes(
    base_path: str,
    changes: List[Change],
    *,
    mode: str = "best_effort",
    atomic: bool = False,
    dry_run: bool = False,
    backup_ext: str | None = None,
) -> CommitSummary:
    """
    Write a batch of file changes under `base_path`.

    Args:
        base_path: Root directory for operations.
        changes: Change instances, applied in order.
        mode: "best_effort" (default) writes what it can and records failures;
              "fail_fast" stops at the first error.
        atomic: Stage contents to same-directory tempfiles and promote them with
                os.replace(). Combined with "fail_fast", promoted changes are
                rolled back when a later one fails.
        dry_run: Validate and report the plan without writing.
        backup_ext: Extension (".bak" or "bak") for copies of modified files.

    Returns:
        CommitSummary describing successes and failures.
    """
    if mode not in {"best_effort", "fail_fast"}:
        raise ValueError("mode must be one of {'best_effort','fail_fast'}")
    fail_fast = mode == "fail_fast"

    summary = CommitSummary(dry_run=dry_run)
    base_real = os.path.realpath(base_path)

    normalized: List[Tuple[Change, str]] = []
    for ch in changes:
        try:
            if ch.action not in _ACTIONS:
                raise ValueError(f"Unknown change action '{ch.action}' for '{ch.path}'")
            resolved = _normalized_path(base_real, ch.path, check_exists=ch.action != "create")
            normalized.append((ch, resolved))
        except ValueError as e:
            summary.record_failure(ch.path, e)
            if fail_fast:
                return summary

    if dry_run:
        for ch, resolved in normalized:
            try:
                summary.success.append(_plan(ch, resolved))
            except OSError as e:
                summary.record_failure(ch.path, e)
                if fail_fast:
                    return summary
        return summary

    log.debug(f"committing {len(normalized)} changes under {base_real} (atomic={atomic}, mode={mode})")
    if atomic:
        return _commit_atomic(normalized, summary, fail_fast, backup_ext)
    return _commit_direct(normalized, summary, fail_fast, backup_ext)
