"""
Construction options for the ignore-aware walker
"""

import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from .constants import ALPHA_SORT, DEFAULT_IGNORE_FILES, READ_CHUNK_SIZE
from .utils import get_logger

logger = get_logger(__name__)

IGNORE_FILES_ENV = 'FSIGNORE_IGNORE_FILES'
SORT_ENV = 'FSIGNORE_SORT'


@dataclass
class WalkerConfig:
    """Options for an IgnoreWalker"""
    path: str
    ignore_files: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_FILES))
    sort: Union[None, str, Callable[[str, str], int]] = None
    filter: Optional[Callable] = None
    prune_excluded: bool = True
    chunk_size: int = READ_CHUNK_SIZE

    def __post_init__(self):
        """Validate configuration values"""
        self.path = os.path.abspath(os.fspath(self.path))
        self.ignore_files = [name for name in self.ignore_files if name]
        if not self.ignore_files:
            raise ValueError("At least one ignore file name is required")
        if isinstance(self.sort, str) and self.sort != ALPHA_SORT:
            raise ValueError(f"Unknown sort policy: {self.sort!r}")
        self.chunk_size = max(1, self.chunk_size)

    @classmethod
    def from_env(cls, path: str, **overrides) -> 'WalkerConfig':
        """
        Build a config with environment overrides.

        FSIGNORE_IGNORE_FILES: comma separated ignore file names
        FSIGNORE_SORT: 'alpha' for case-insensitive alphabetical order

        Explicit keyword overrides win over the environment.
        """
        options = {}

        names = os.environ.get(IGNORE_FILES_ENV)
        if names:
            options['ignore_files'] = [n.strip() for n in names.split(',') if n.strip()]

        sort = os.environ.get(SORT_ENV, '').strip().lower()
        if sort:
            options['sort'] = sort

        options.update(overrides)
        logger.debug(f"Walker config for {path}: {options}")
        return cls(path=path, **options)
