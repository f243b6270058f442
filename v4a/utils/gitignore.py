# v4a/utils/gitignore.py
import os
from typing import List

import pathspec


def get_gitignore(path: str) -> pathspec.PathSpec:
    """
    Return a PathSpec compiled from the nearest .gitignore found by walking
    upward from `path` (file or directory). '.git/' is always ignored, even
    when no .gitignore exists or it cannot be read.
    """
    defaults: List[str] = [".git/"]
    lines: List[str] = list(defaults)

    base = os.path.abspath(path or ".")
    if os.path.isfile(base):
        base = os.path.dirname(base)

    cur = base
    while True:
        gi = os.path.join(cur, ".gitignore")
        try:
            if os.path.exists(gi):
                with open(gi, "r", encoding="utf-8", errors="ignore") as f:
                    lines.extend(f.read().splitlines())
                break
        except OSError:
            # Unreadable; keep walking upward.
            pass
        parent = os.path.dirname(cur)
        if parent == cur:
            break
        cur = parent

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except ValueError:
        # Malformed pattern (GitWildMatchPatternError); keep the defaults.
        return pathspec.PathSpec.from_lines("gitwildmatch", defaults)


def is_ignored(spec: pathspec.PathSpec, rel_path: str) -> bool:
    """True if the forward-slash relative path is matched by `spec`."""
    return spec.match_file(rel_path.replace(os.sep, "/"))
