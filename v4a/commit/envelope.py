# v4a/commit/envelope.py
"""
Split a multi-file patch into per-file operations.

    *** Begin Patch
    *** Add File: path/new.py
    +print("hi")
    *** Update File: path/old.py
    *** Move to: path/renamed.py
    @@ def main():
    -    old()
    +    new()
    *** Delete File: path/gone.py
    *** End Patch

File paths are not interpreted here beyond duplicate detection; the bodies are
handed to `v4a.diff.apply_diff` unchanged.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..diff.lines import END_PATCH, SECTION_TERMINATORS, normalize_diff_lines, read_str
from ..errors.patch import DuplicatePathError, InvalidEnvelopeError, MalformedLineError
from ..models.chunk import ParserState
from ..models.operation import FileOperation

__all__ = ["BEGIN_PATCH", "MOVE_TO", "split_patch", "identify_files_needed", "identify_files_added"]

BEGIN_PATCH = "*** Begin Patch"
MOVE_TO = "*** Move to: "

_HEADERS: Tuple[Tuple[str, str], ...] = (
    ("*** Add File:", "create"),
    ("*** Update File:", "update"),
    ("*** Delete File:", "delete"),
)


def _parse_header(line: str) -> Optional[Tuple[str, str]]:
    for prefix, action in _HEADERS:
        if line.startswith(prefix):
            return action, line[len(prefix):].strip()
    return None


def _read_body(state: ParserState) -> str:
    body: List[str] = []
    while state.index < len(state.lines) and not state.lines[state.index].startswith(SECTION_TERMINATORS):
        body.append(state.lines[state.index])
        state.index += 1
    return "\n".join(body)


def split_patch(text: str) -> List[FileOperation]:
    """
    Parse a `*** Begin Patch` ... `*** End Patch` envelope.

    Raises:
        InvalidEnvelopeError: if the Begin/End markers are missing or misplaced.
        MalformedLineError: on an unknown line between file sections or an empty path.
        DuplicatePathError: if a path is named by more than one section.
    """
    lines = normalize_diff_lines(text.strip())
    if not lines or lines[0].strip() != BEGIN_PATCH:
        raise InvalidEnvelopeError(f"Invalid patch text - must start with '{BEGIN_PATCH}'")

    state = ParserState(lines, index=1)
    ops: List[FileOperation] = []
    seen: set[str] = set()

    while state.index < len(lines) and lines[state.index].strip() != END_PATCH:
        line = lines[state.index]
        if not line.strip():
            state.index += 1
            continue

        header = _parse_header(line)
        if header is None:
            raise MalformedLineError(f"Unknown Line: {line}", line)
        action, path = header
        if not path:
            raise MalformedLineError(f"Missing path: {line}", line)
        if path in seen:
            raise DuplicatePathError(path)
        seen.add(path)
        state.index += 1

        if action == "delete":
            ops.append(FileOperation(action, path))
            continue

        move_to = None
        if action == "update":
            move_to = read_str(state, MOVE_TO).strip() or None
        ops.append(FileOperation(action, path, diff=_read_body(state), move_to=move_to))

    if state.index != len(lines) - 1:
        raise InvalidEnvelopeError(f"Invalid patch text - must end with '{END_PATCH}'")
    return ops


def identify_files_needed(text: str) -> List[str]:
    """Paths whose current contents are required to apply the patch."""
    return [op.path for op in split_patch(text) if op.action in ("update", "delete")]


def identify_files_added(text: str) -> List[str]:
    return [op.path for op in split_patch(text) if op.action == "create"]
