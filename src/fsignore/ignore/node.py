"""
Per-directory ignore node: rule loading and cascading exclusion
"""

import logging
import os
import weakref
from functools import cmp_to_key
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Union

from ..errors import PatternCompileError, TraversalStateError
from ..utils import get_logger, log_with_context
from ..walker.lister import DirectoryLister, Entry
from ..walker.reader import DirReader
from ..constants import ALPHA_SORT, DEFAULT_IGNORE_FILES
from .patterns import CompiledPattern, compile_pattern
from .rules import alphasort, is_rule_line, nosort, split_rules

logger = get_logger(__name__)

Comparator = Callable[[str, str], int]
EntryFilter = Callable[[Entry], bool]
IgnoreFileListener = Callable[[Entry], None]


def resolve_sort(sort: Union[None, str, Comparator]) -> Comparator:
    """Map a sort option ('alpha', a comparator or None) to a comparator"""
    if sort is None:
        return nosort
    if sort == ALPHA_SORT:
        return alphasort
    if callable(sort):
        return sort
    raise ValueError(f"Unknown sort policy: {sort!r}")


class IgnoreNode:
    """
    Ignore-aware traversal node for one directory.

    Wraps a DirReader for enumeration and adds the rules read from this
    directory's ignore files. Each node sees its ancestors through a weak
    parent reference; the walk keeps parents alive for as long as any child
    is open.
    """

    def __init__(self,
                 path: str,
                 lister: DirectoryLister,
                 parent: Optional['IgnoreNode'] = None,
                 ignore_files: Optional[Sequence[str]] = None,
                 sort: Union[None, str, Comparator] = None,
                 filter: Optional[EntryFilter] = None,
                 on_ignore_file: Optional[Iterable[IgnoreFileListener]] = None):
        """
        Args:
            path: Absolute path of the directory
            lister: Filesystem capabilities used for enumeration and reads
            parent: Node of the enclosing directory, None at the root
            ignore_files: Basenames treated as ignore files
            sort: 'alpha', a comparator, or None for listing order
            filter: Predicate consulted for entries the rules leave included
            on_ignore_file: Callbacks fired before an ignore file is read;
                calling ``entry.abort()`` vetoes its rules
        """
        self.path = path
        self._parent = weakref.ref(parent) if parent is not None else None
        self.ignore_files = tuple(ignore_files) if ignore_files else DEFAULT_IGNORE_FILES
        self.ignore_rules: Optional[List[CompiledPattern]] = None
        self._sort = resolve_sort(sort)
        self._filter = filter
        self.on_ignore_file = list(on_ignore_file or [])
        self.reader = DirReader(path, lister)

    @property
    def parent(self) -> Optional['IgnoreNode']:
        if self._parent is None:
            return None
        parent = self._parent()
        if parent is None:
            # Ancestor rules are gone; matching without them would be wrong
            raise TraversalStateError(f"Parent of {self.path} was released mid-walk")
        return parent

    @property
    def root(self) -> 'IgnoreNode':
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def child(self, entry: Entry) -> 'IgnoreNode':
        """Create the node for a child directory, inheriting this node's options"""
        return IgnoreNode(
            entry.path,
            self.reader.lister,
            parent=self,
            ignore_files=self.ignore_files,
            sort=self._sort,
            filter=self._filter,
            on_ignore_file=self.on_ignore_file,
        )

    def entries(self) -> Iterator[Entry]:
        """Enumerate children with ignore files first"""
        return self.reader.entries(key=cmp_to_key(self.sort))

    def is_ignore_file(self, name: str) -> bool:
        return name in self.ignore_files

    # Rule loading

    def add_ignore_file(self, entry: Entry):
        """
        Read an ignore file and add its rules to this node.

        Listeners run first and may abort the entry. Enumeration of this
        directory is paused while the content is read, so no sibling is
        filtered before the rules are in place. Aborted, unreadable or empty
        files add nothing.
        """
        for listener in self.on_ignore_file:
            listener(entry)
        if entry.aborted:
            logger.debug(f"Ignore file vetoed: {entry.path}")
            return

        self.reader.pause()
        try:
            data = self._read_content(entry)
        finally:
            self.reader.resume()

        if not data:
            logger.debug(f"No rules read from {entry.path}")
            return

        rules = self.read_rules(data, entry)
        self.add_ignore_rules(rules, entry)

    def _read_content(self, entry: Entry) -> bytes:
        # These files are small; buffer the whole thing.
        buf = bytearray()
        try:
            handle = self.reader.begin_read(entry)
            for chunk in handle:
                if entry.aborted:
                    handle.abort()
                    break
                buf.extend(chunk)
        except OSError as e:
            logger.warning(f"Cannot read ignore file {entry.path}: {e}")
            return b''

        if entry.aborted or handle.aborted or not handle.completed:
            logger.debug(f"Read of {entry.path} aborted")
            return b''
        return bytes(buf)

    def read_rules(self, data: bytes, entry: Entry) -> List[str]:
        """Split ignore-file content into raw rule lines"""
        return split_rules(data)

    def add_ignore_rules(self, lines: List[str], entry: Entry):
        """
        Compile rule lines and append them to this node's rules.

        A line the matcher rejects discards the whole file's batch and
        raises PatternCompileError.
        """
        lines = [line for line in lines if is_rule_line(line)]
        if not lines:
            return

        try:
            compiled = [compile_pattern(line, source=entry.basename) for line in lines]
        except PatternCompileError as e:
            log_with_context(logger, logging.ERROR, f"{entry.path}: {e}",
                             ignore_file=entry.path, pattern=e.pattern, reason=e.reason)
            raise

        if self.ignore_rules is None:
            self.ignore_rules = []
        self.ignore_rules.extend(compiled)

        logger.debug(f"Added {len(compiled)} rules from {entry.path}: {[str(r) for r in compiled]}")

    # Exclusion decision

    def filter(self, entry: Entry) -> bool:
        """
        Decide whether an entry is included in the walk results.

        Ignore files contribute their rules before the decision, even when
        they end up excluded themselves.
        """
        if not entry.is_directory and self.is_ignore_file(entry.basename):
            self.add_ignore_file(entry)

        self.apply_ignores(entry)
        if entry.excluded:
            return False

        if self._filter is not None:
            return bool(self._filter(entry))
        return True

    def apply_ignores(self, entry: Entry):
        """
        Set ``entry.excluded`` from the rules of every node, root first.

        At each level the entry is tested as if rooted there: for a/b/c,
        a's rules see /b/c and b's rules see /c. Negated rules only matter
        when the entry is currently excluded, and plain rules only when it
        is not. The last hit wins.
        """
        parent = self.parent
        if parent is not None:
            parent.apply_ignores(entry)

        if not self.ignore_rules:
            return

        test = entry.path[len(self.path):].replace(os.sep, '/')
        if not test.startswith('/'):
            test = '/' + test

        for rule in self.ignore_rules:
            if rule.negated != entry.excluded:
                continue

            if self._match(rule, test, entry.is_directory):
                entry.excluded = not rule.negated
                logger.trace(f"{self.path}: {test} hit {rule}, excluded={entry.excluded}")

    @staticmethod
    def _match(rule: CompiledPattern, test: str, is_directory: bool) -> bool:
        bare = test[1:]
        if rule.matches(test) or rule.matches(bare):
            return True
        if not is_directory:
            return False

        if rule.matches(test + '/') or rule.matches(bare + '/'):
            return True

        # Ignoring /a but re-including /a/b/c has to keep a and a/b reachable.
        if rule.negated:
            return any(rule.matches(candidate, partial=True)
                       for candidate in (test, bare, test + '/', bare + '/'))
        return False

    # Sibling ordering

    def sort(self, a: str, b: str) -> int:
        """Comparator that puts ignore files ahead of everything else"""
        a_ignore = self.is_ignore_file(a)
        b_ignore = self.is_ignore_file(b)
        if a_ignore and not b_ignore:
            return -1
        if b_ignore and not a_ignore:
            return 1
        return self._sort(a, b)
