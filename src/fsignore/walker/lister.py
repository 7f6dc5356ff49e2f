"""
Directory listing, stat and content streaming for the walker
"""

import os
from stat import S_ISDIR
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Protocol

from ..errors import TraversalStateError
from ..constants import READ_CHUNK_SIZE


@dataclass
class Entry:
    """A file or directory discovered during a walk"""
    path: str
    basename: str
    is_directory: bool
    size: int = 0
    excluded: bool = False
    aborted: bool = False

    def abort(self):
        """Veto further processing of this entry's content"""
        self.aborted = True


class ReadHandle:
    """
    Lazy, finite, non-restartable stream of an entry's content.

    Iterate to receive ``bytes`` chunks. ``abort()`` stops the stream at the
    next chunk boundary; ``completed`` is set once the source is exhausted
    without an abort.
    """

    def __init__(self, chunks: Iterable[bytes]):
        self._chunks = chunks
        self._started = False
        self.aborted = False
        self.completed = False

    def abort(self):
        self.aborted = True

    def __iter__(self) -> Iterator[bytes]:
        if self._started:
            raise TraversalStateError("Content stream can only be read once")
        self._started = True
        return self._stream()

    def _stream(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            if self.aborted:
                return
            yield chunk
        if not self.aborted:
            self.completed = True


class DirectoryLister(Protocol):
    """Capabilities the walker needs from a filesystem"""

    def list_names(self, path: str) -> List[str]:
        ...

    def stat(self, path: str) -> Entry:
        ...

    def begin_read(self, entry: Entry) -> ReadHandle:
        ...


class LocalDirectoryLister:
    """DirectoryLister over the local filesystem"""

    def __init__(self, chunk_size: int = READ_CHUNK_SIZE, follow_symlinks: bool = False):
        self.chunk_size = chunk_size
        self.follow_symlinks = follow_symlinks

    def list_names(self, path: str) -> List[str]:
        with os.scandir(path) as it:
            return [e.name for e in it]

    def stat(self, path: str) -> Entry:
        st = os.stat(path, follow_symlinks=self.follow_symlinks)
        return Entry(
            path=path,
            basename=os.path.basename(path),
            is_directory=S_ISDIR(st.st_mode),
            size=st.st_size,
        )

    def begin_read(self, entry: Entry) -> ReadHandle:
        return ReadHandle(self._read_chunks(entry.path))

    def _read_chunks(self, path: str) -> Iterator[bytes]:
        with open(path, 'rb') as f:
            while True:
                chunk = f.read(self.chunk_size)
                if not chunk:
                    break
                yield chunk


def join_path(directory: str, name: str, sep: Optional[str] = None) -> str:
    """Join a child name onto a directory path without normalizing it"""
    sep = sep or os.sep
    if directory.endswith(sep):
        return directory + name
    return directory + sep + name
