"""
Generic per-directory traversal node
"""

from typing import Callable, Iterator, Optional

from ..errors import TraversalStateError
from ..utils import get_logger
from .lister import DirectoryLister, Entry, ReadHandle, join_path

logger = get_logger(__name__)


class DirReader:
    """
    Enumerates one directory's children for the walker.

    Holds a pause depth: while paused, advancing enumeration is an error.
    Callers that redirect an entry's content stream pause the reader first
    and resume it once the stream settles.
    """

    def __init__(self, path: str, lister: DirectoryLister):
        self.path = path
        self.lister = lister
        self._pause_depth = 0

    @property
    def paused(self) -> bool:
        return self._pause_depth > 0

    def pause(self):
        self._pause_depth += 1

    def resume(self):
        if self._pause_depth == 0:
            raise TraversalStateError(f"resume() without pause() on {self.path}")
        self._pause_depth -= 1

    def entries(self, key: Optional[Callable[[str], object]] = None) -> Iterator[Entry]:
        """
        Enumerate child entries in sorted order.

        The directory is listed before this returns, so listing errors
        surface here rather than on the first ``next()``.

        Args:
            key: Sort key applied to child basenames (None keeps listing order)

        Raises:
            OSError: If the directory cannot be listed
        """
        names = self.lister.list_names(self.path)
        if key is not None:
            names = sorted(names, key=key)
        return self._iter_entries(names)

    def _iter_entries(self, names) -> Iterator[Entry]:
        for name in names:
            if self.paused:
                raise TraversalStateError(f"Enumeration of {self.path} advanced while paused")
            child = join_path(self.path, name)
            try:
                entry = self.lister.stat(child)
            except OSError as e:
                logger.warning(f"Cannot stat {child}: {e}")
                continue
            yield entry

    def begin_read(self, entry: Entry) -> ReadHandle:
        return self.lister.begin_read(entry)
