class CommitError(RuntimeError):
    """Raised when a patch cannot be turned into filesystem changes."""
