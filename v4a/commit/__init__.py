from .core import Change, CommitSummary, commit_changes
from .envelope import identify_files_added, identify_files_needed, split_patch
from .files import apply_patch

__all__ = [
    "apply_patch",
    "commit_changes",
    "split_patch",
    "identify_files_needed",
    "identify_files_added",
    "Change",
    "CommitSummary",
]
