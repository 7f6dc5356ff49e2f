"""
Exceptions raised by fsignore
"""

from typing import Optional


class FsIgnoreError(Exception):
    """Base class for fsignore errors."""
    pass


class PatternCompileError(FsIgnoreError, ValueError):
    """Raised when an ignore-file line cannot be compiled into a pattern."""

    def __init__(self, pattern: str, reason: str, source: Optional[str] = None):
        self.pattern = pattern
        self.reason = reason
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Invalid ignore pattern '{pattern}'{where}: {reason}")


class TraversalStateError(FsIgnoreError, RuntimeError):
    """Raised when the walker is driven out of order (e.g. advanced while paused)."""
    pass
