"""
fsignore: gitignore-style exclusion over a directory walk

Ignore files are read as the walk reaches each directory; their rules
apply to that directory's subtree and override the rules above it.
"""

__version__ = "1.0.0"

from .config import WalkerConfig
from .constants import IGNORE_FILENAME
from .errors import FsIgnoreError, PatternCompileError, TraversalStateError
from .ignore import IgnoreNode, CompiledPattern, compile_pattern
from .walk import IgnoreWalker
from .walker import DirectoryLister, Entry, LocalDirectoryLister, ReadHandle

__all__ = [
    '__version__',
    'WalkerConfig',
    'IGNORE_FILENAME',
    'FsIgnoreError',
    'PatternCompileError',
    'TraversalStateError',
    'IgnoreNode',
    'CompiledPattern',
    'compile_pattern',
    'IgnoreWalker',
    'DirectoryLister',
    'Entry',
    'LocalDirectoryLister',
    'ReadHandle',
]
