# v4a/diff/parser.py
"""
Patch body parsing.

Update bodies are read section by section (`@@` anchor, then context / `-` /
`+` lines); each section is located in the document and its chunks are
shifted to absolute line indices. Add File bodies are plain `+` lines.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Tuple

from .._logging import NoopLogger
from ..errors.patch import ContextNotFoundError, EmptySectionError, MalformedLineError
from ..models.chunk import Chunk, ParsedUpdateDiff, ParserState, Section
from .lines import END_FILE, END_PATCH, END_SECTION_MARKERS, SECTION_TERMINATORS, is_done, read_str
from .locate import find_context

__all__ = [
    "LineMode",
    "classify_line",
    "should_flush",
    "read_section",
    "advance_cursor_to_anchor",
    "parse_create_diff",
    "parse_update_diff",
]

# Lines that end a section without being consumed by it.
_SECTION_STOPS: Tuple[str, ...] = ("@@",) + END_SECTION_MARKERS


class LineMode(str, Enum):
    KEEP = "keep"
    ADD = "add"
    DELETE = "delete"


_PREFIX_MODES = {
    "+": LineMode.ADD,
    "-": LineMode.DELETE,
    " ": LineMode.KEEP,
}


# ---------- section state machine ----------


def classify_line(raw: str) -> Tuple[LineMode, str]:
    """
    Map a section body line to its mode and content (prefix removed).
    A raw empty line counts as an empty context line.
    """
    line = raw if raw else " "
    mode = _PREFIX_MODES.get(line[0])
    if mode is None:
        raise MalformedLineError(f"Invalid Line: {line}", line)
    return mode, line[1:]


def should_flush(previous: LineMode, current: LineMode, has_pending: bool) -> bool:
    """Pending edits become a chunk when a run of +/- lines is followed by context."""
    return current is LineMode.KEEP and previous is not LineMode.KEEP and has_pending


def _pending_chunk(context: List[str], del_lines: List[str], ins_lines: List[str]) -> Chunk:
    return Chunk(
        orig_index=len(context) - len(del_lines),
        del_lines=list(del_lines),
        ins_lines=list(ins_lines),
    )


def read_section(lines: List[str], start_index: int) -> Section:
    """
    Read one section body starting at `start_index`.

    Deleted lines are part of the context (they must exist in the document);
    inserted lines are not. Chunk indices are relative to the section context.
    """
    context: List[str] = []
    del_lines: List[str] = []
    ins_lines: List[str] = []
    chunks: List[Chunk] = []

    mode = LineMode.KEEP
    index = start_index

    while index < len(lines):
        raw = lines[index]
        if raw.startswith(_SECTION_STOPS) or raw == "***":
            break
        if raw.startswith("***"):
            raise MalformedLineError(f"Invalid Line: {raw}", raw)

        index += 1
        last_mode = mode
        mode, content = classify_line(raw)

        if should_flush(last_mode, mode, bool(del_lines or ins_lines)):
            chunks.append(_pending_chunk(context, del_lines, ins_lines))
            del_lines.clear()
            ins_lines.clear()

        if mode is LineMode.DELETE:
            del_lines.append(content)
            context.append(content)
        elif mode is LineMode.ADD:
            ins_lines.append(content)
        else:
            context.append(content)

    if del_lines or ins_lines:
        chunks.append(_pending_chunk(context, del_lines, ins_lines))

    if index < len(lines) and lines[index] == END_FILE:
        return Section(context, chunks, index + 1, eof=True)

    if index == start_index:
        next_line = lines[index] if index < len(lines) else ""
        raise EmptySectionError(index, next_line)

    return Section(context, chunks, index, eof=False)


# ---------- anchors ----------


def _first_match(input_lines: List[str], target: str, cursor: int, normalize) -> int:
    if any(normalize(ln) == target for ln in input_lines[:cursor]):
        return -1
    for i in range(cursor, len(input_lines)):
        if normalize(input_lines[i]) == target:
            return i
    return -1


def advance_cursor_to_anchor(
    anchor: str,
    input_lines: List[str],
    cursor: int,
    state: ParserState,
) -> int:
    """
    Move the document cursor just past the line named by an `@@ <anchor>` header.

    An exact hit is preferred; a whitespace-trimmed hit costs one fuzz point.
    Neither search runs when an equivalent line was already passed, and the
    cursor is left alone when nothing matches.
    """
    i = _first_match(input_lines, anchor, cursor, lambda s: s)
    if i != -1:
        return i + 1
    i = _first_match(input_lines, anchor.strip(), cursor, str.strip)
    if i != -1:
        state.fuzz += 1
        return i + 1
    return cursor


# ---------- create / update ----------


def parse_create_diff(lines: List[str]) -> str:
    """Every line of an Add File body must start with '+'; the rest is the content."""
    state = ParserState(lines + [END_PATCH])
    output: List[str] = []

    while not is_done(state, SECTION_TERMINATORS):
        line = state.lines[state.index]
        state.index += 1
        if not line.startswith("+"):
            raise MalformedLineError(f"Invalid Add File Line: {line}", line)
        output.append(line[1:])

    return "\n".join(output)


def parse_update_diff(lines: List[str], input: str, *, log=None) -> ParsedUpdateDiff:
    """
    Turn an Update File body into absolute-indexed chunks against `input`.

    Each section is located independently, starting at the document position
    where the previous section's context ended.
    """
    log = log or NoopLogger()
    state = ParserState(lines + [END_PATCH])
    input_lines = input.split("\n")
    chunks: List[Chunk] = []
    cursor = 0

    while not is_done(state, END_SECTION_MARKERS):
        anchor = read_str(state, "@@ ")
        has_bare_anchor = (
            anchor == ""
            and state.index < len(state.lines)
            and state.lines[state.index] == "@@"
        )
        if has_bare_anchor:
            state.index += 1

        if not (anchor or has_bare_anchor or cursor == 0):
            current = state.lines[state.index] if state.index < len(state.lines) else ""
            raise MalformedLineError(f"Invalid Line:\n{current}", current)

        if anchor.strip():
            before = cursor
            cursor = advance_cursor_to_anchor(anchor, input_lines, cursor, state)
            log.debug(f"anchor {anchor!r}: cursor {before} -> {cursor}")

        section = read_section(state.lines, state.index)
        match = find_context(input_lines, section.next_context, cursor, section.eof)

        if match.new_index == -1:
            raise ContextNotFoundError(cursor, section.next_context, eof=section.eof)

        log.debug(
            f"section at patch line {state.index}: context found at {match.new_index} "
            f"(fuzz={match.fuzz}, eof={section.eof}, chunks={len(section.section_chunks)})"
        )

        cursor = match.new_index + len(section.next_context)
        state.fuzz += match.fuzz
        state.index = section.end_index

        for ch in section.section_chunks:
            chunks.append(
                Chunk(
                    orig_index=ch.orig_index + match.new_index,
                    del_lines=list(ch.del_lines),
                    ins_lines=list(ch.ins_lines),
                )
            )

    return ParsedUpdateDiff(chunks=chunks, fuzz=state.fuzz)
