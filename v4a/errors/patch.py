# v4a/errors/patch.py
from __future__ import annotations


class PatchFailedError(ValueError):
    """Base class for every malformed-patch or mismatched-context failure."""


class MalformedLineError(PatchFailedError):
    """A line whose prefix is not valid where it appears."""

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


class EmptySectionError(PatchFailedError):
    """A section began but no body line was consumed before a terminator."""

    def __init__(self, index: int, line: str = ""):
        super().__init__(f"Nothing in this section - index={index} {line}")
        self.index = index
        self.line = line


class ContextNotFoundError(PatchFailedError):
    """The section's context lines could not be located in the document."""

    def __init__(self, cursor: int, context: list[str], eof: bool = False):
        text = "\n".join(context)
        label = "Invalid EOF Context" if eof else "Invalid Context"
        super().__init__(f"{label} {cursor}:\n{text}")
        self.cursor = cursor
        self.context = list(context)
        self.eof = eof


class ChunkOutOfRangeError(PatchFailedError):
    def __init__(self, orig_index: int, length: int):
        super().__init__(f"applyDiff: chunk.origIndex {orig_index} > input length {length}")
        self.orig_index = orig_index
        self.length = length


class OverlappingChunkError(PatchFailedError):
    def __init__(self, orig_index: int, cursor: int):
        super().__init__(f"applyDiff: overlapping chunk at {orig_index} (cursor {cursor})")
        self.orig_index = orig_index
        self.cursor = cursor


class InvalidEnvelopeError(PatchFailedError):
    """The multi-file patch is missing its Begin/End Patch markers."""


class DuplicatePathError(PatchFailedError):
    def __init__(self, path: str):
        super().__init__(f"Duplicate Path: {path}")
        self.path = path
