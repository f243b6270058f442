from .commit import apply_patch, commit_changes, identify_files_added, identify_files_needed, split_patch
from .diff import ApplyDiffMode, apply_diff, apply_diff_with_fuzz
from .errors import (
    ChunkOutOfRangeError,
    CommitError,
    ContextNotFoundError,
    DuplicatePathError,
    EmptySectionError,
    InvalidEnvelopeError,
    MalformedLineError,
    OverlappingChunkError,
    PatchFailedError,
    PathViolation,
)
from .models import Chunk, FileOperation

__all__ = [
    "apply_diff",
    "apply_diff_with_fuzz",
    "ApplyDiffMode",
    "apply_patch",
    "split_patch",
    "identify_files_needed",
    "identify_files_added",
    "commit_changes",
    "Chunk",
    "FileOperation",
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
