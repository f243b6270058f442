from .gitignore import get_gitignore, is_ignored

__all__ = ["get_gitignore", "is_ignored"]
