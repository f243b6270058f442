from .commit import CommitError
from .patch import (
    ChunkOutOfRangeError,
    ContextNotFoundError,
    DuplicatePathError,
    EmptySectionError,
    InvalidEnvelopeError,
    MalformedLineError,
    OverlappingChunkError,
    PatchFailedError,
)
from .path import PathViolation

__all__ = [
    "PatchFailedError",
    "MalformedLineError",
    "EmptySectionError",
    "ContextNotFoundError",
    "ChunkOutOfRangeError",
    "OverlappingChunkError",
    "InvalidEnvelopeError",
    "DuplicatePathError",
    "CommitError",
    "PathViolation",
]
