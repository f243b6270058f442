class PathViolation(ValueError):
    """Raised when a patch targets a path outside the base directory or an ignored path."""
