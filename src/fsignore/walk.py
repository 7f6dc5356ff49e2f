"""
Ignore-aware directory tree walker
"""

import os
from typing import Callable, Iterator, Optional, Union

from .config import WalkerConfig
from .ignore.node import IgnoreFileListener, IgnoreNode
from .utils import get_logger
from .walker.lister import DirectoryLister, Entry, LocalDirectoryLister

logger = get_logger(__name__)

EntryCallback = Callable[[Entry, bool], None]


class IgnoreWalker:
    """
    Walks a tree depth-first, hiding entries excluded by ignore files.

    One IgnoreNode is opened per directory as its enumeration begins and
    dropped when the subtree is done. Ignore files sort first in every
    directory, so their rules are loaded before any sibling is filtered.
    """

    def __init__(self,
                 config: Union[WalkerConfig, str],
                 lister: Optional[DirectoryLister] = None,
                 on_ignore_file: Optional[IgnoreFileListener] = None,
                 on_entry: Optional[EntryCallback] = None,
                 **options):
        """
        Args:
            config: WalkerConfig, or a root path combined with ``options``
            lister: Filesystem capabilities (defaults to the local filesystem)
            on_ignore_file: Called before each ignore file is read; may abort it
            on_entry: Called with every filtered entry and its decision
            **options: WalkerConfig fields when ``config`` is a path
        """
        if not isinstance(config, WalkerConfig):
            config = WalkerConfig(path=config, **options)
        elif options:
            raise TypeError("Pass options either in WalkerConfig or as keywords, not both")

        self.config = config
        self.lister = lister or LocalDirectoryLister(chunk_size=config.chunk_size)
        self.on_entry = on_entry
        self._listeners = [on_ignore_file] if on_ignore_file else []

    @property
    def path(self) -> str:
        return self.config.path

    def root_node(self) -> IgnoreNode:
        return IgnoreNode(
            self.config.path,
            self.lister,
            ignore_files=self.config.ignore_files,
            sort=self.config.sort,
            filter=self.config.filter,
            on_ignore_file=self._listeners,
        )

    def walk(self) -> Iterator[Entry]:
        """Yield every included entry below the root, parents before children"""
        logger.info(f"Walking {self.path} with ignore files {self.config.ignore_files}")
        yield from self._walk(self.root_node())

    def paths(self) -> Iterator[str]:
        """Yield root-relative POSIX paths (``/a/b``) of included entries"""
        for entry in self.walk():
            rel = entry.path[len(self.path):].replace(os.sep, '/')
            yield rel if rel.startswith('/') else '/' + rel

    def _walk(self, node: IgnoreNode) -> Iterator[Entry]:
        try:
            entries = node.entries()
        except OSError as e:
            logger.warning(f"Cannot list {node.path}: {e}")
            return

        for entry in entries:
            included = node.filter(entry)
            if self.on_entry is not None:
                self.on_entry(entry, included)

            if included:
                yield entry
            if entry.is_directory and (included or not self.config.prune_excluded):
                yield from self._walk(node.child(entry))
