"""
Opt-in logging for the patch engine.

Usage in library code:
    from v4a._logging import resolve_logger

    def apply_something(..., logger=None, log: bool = False):
        log = resolve_logger(logger=logger, enabled=log, name=__name__)
        log.debug("located section at %d", idx)  # no-op unless opted in

The engine never prints; callers opt in by passing a logger or `log=True`.
"""
from __future__ import annotations

import logging


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Pick the logger a call should write to.

    - An explicit `logger` always wins (anything with a `.debug(...)` works).
    - Otherwise `enabled=True` yields a named stdlib logger that propagates to root.
    - Otherwise a NoopLogger.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "v4a")
        lg.setLevel(level)
        # Bubble up to the root so pytest's caplog and app handlers see records.
        lg.propagate = True
        return lg
    return NoopLogger()
