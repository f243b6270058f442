from dataclasses import dataclass
from typing import Optional


@dataclass
class FileOperation:
    """A single file section of a multi-file patch envelope."""

    action: str             # "create", "update", "delete"
    path: str
    diff: str = ""          # body lines handed to apply_diff (empty for deletes)
    move_to: Optional[str] = None
