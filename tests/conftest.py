"""
Shared fixtures for fsignore tests
"""

import itertools
import os
from pathlib import Path
from typing import Dict, Union

import pytest

from fsignore.walker.lister import Entry, ReadHandle

Tree = Dict[str, Union[bytes, 'Tree']]


class MemoryLister:
    """In-memory DirectoryLister; directories are dicts, files are bytes"""

    def __init__(self, tree: Tree, chunk_size: int = 4):
        self.tree = tree
        self.chunk_size = chunk_size
        self.reads = []

    def _lookup(self, path: str):
        node = self.tree
        for part in [p for p in path.split('/') if p]:
            try:
                node = node[part]
            except (KeyError, TypeError):
                raise FileNotFoundError(path)
        return node

    def list_names(self, path):
        node = self._lookup(path)
        if not isinstance(node, dict):
            raise NotADirectoryError(path)
        return list(node)

    def stat(self, path):
        node = self._lookup(path)
        is_dir = isinstance(node, dict)
        return Entry(
            path=path,
            basename=path.rsplit('/', 1)[-1],
            is_directory=is_dir,
            size=0 if is_dir else len(node),
        )

    def begin_read(self, entry):
        data = self._lookup(entry.path)
        self.reads.append(entry.path)
        chunks = [data[i:i + self.chunk_size] for i in range(0, len(data), self.chunk_size)]
        return ReadHandle(iter(chunks))


def ignore_entry(directory: str, name: str = '.ignore') -> Entry:
    return Entry(path=f"{directory}/{name}", basename=name, is_directory=False)


def make_tree(root: Path, tree: Tree):
    """Materialize a nested dict of dirs (dict) and files (bytes or str) under root"""
    for name, content in tree.items():
        target = root / name
        if isinstance(content, dict):
            target.mkdir()
            make_tree(target, content)
        elif isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content)


@pytest.fixture
def permutation_tree(tmp_path):
    """
    Three levels of directories named after every ordering of 'abc'.

    Each leaf directory x/y/z holds the files 'xyz' and '.xyz'.
    """
    for perm in itertools.permutations('abc'):
        leaf = tmp_path.joinpath(*perm)
        leaf.mkdir(parents=True, exist_ok=True)
        name = ''.join(perm)
        (leaf / name).write_text(name + '\n')
        (leaf / ('.' + name)).write_text(name + '\n')
    return tmp_path


def rel_paths(root: Path, entries) -> set:
    prefix = len(str(root))
    return {e.path[prefix:].replace(os.sep, '/') for e in entries}
