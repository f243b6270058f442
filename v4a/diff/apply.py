# v4a/diff/apply.py
from __future__ import annotations

from typing import Iterable, List

from ..errors.patch import ChunkOutOfRangeError, OverlappingChunkError
from ..models.chunk import Chunk

__all__ = ["apply_chunks"]


def apply_chunks(input: str, chunks: Iterable[Chunk]) -> str:
    """
    Splice located chunks into `input`.

    Chunks must arrive in document order and must not overlap: each one starts
    at or after the point where the previous one stopped consuming lines.
    """
    orig_lines = input.split("\n")
    dest_lines: List[str] = []
    cursor = 0

    for chunk in chunks:
        if chunk.orig_index > len(orig_lines):
            raise ChunkOutOfRangeError(chunk.orig_index, len(orig_lines))
        if cursor > chunk.orig_index:
            raise OverlappingChunkError(chunk.orig_index, cursor)

        dest_lines.extend(orig_lines[cursor:chunk.orig_index])
        cursor = chunk.orig_index
        dest_lines.extend(chunk.ins_lines)
        cursor += len(chunk.del_lines)

    dest_lines.extend(orig_lines[cursor:])
    return "\n".join(dest_lines)
