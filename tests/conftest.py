"""Shared fixtures for treecheck tests."""

import pytest
from redis.exceptions import ResponseError

from treecheck import DiagnosticCollector, Node, Path, TreeChecker


def make_node(pathname, parent=None):
    """Node at ``pathname`` appended (unsorted, unchecked) under ``parent``."""
    node = Node(Path.from_string(pathname))
    if parent is not None:
        node.parent = parent
        parent.children.append(node)
    return node


def build_tree(*pathnames):
    """Root node plus descendants, linked through add_child.

    The first pathname is the root; each later one goes under the
    deepest node already built whose path is its parent path.
    """
    nodes = {}
    root = None
    for pathname in pathnames:
        path = Path.from_string(pathname)
        node = Node(path)
        if root is None:
            root = node
        else:
            nodes[path.prefix(path.depth - 1)].add_child(node)
        nodes[path] = node
    return root


class FakeRedisFS:
    """Just enough of a Redis server with the fs module for snapshots.

    ``entries`` maps pathnames to "file" or "dir". ``listings`` can
    override what FS.LS returns for a directory.
    """

    def __init__(self, key, entries=None):
        self.key = key
        self.entries = {"/": "dir"}
        self.entries.update(entries or {})
        self.listings = {}
        self.commands = []

    def exists(self, key):
        return 1 if key == self.key else 0

    def _children(self, pathname):
        prefix = "" if pathname == "/" else pathname
        names = []
        for path in self.entries:
            if path == "/" or not path.startswith(prefix + "/"):
                continue
            rest = path[len(prefix) + 1:]
            if "/" not in rest:
                names.append(rest)
        return names

    def execute_command(self, cmd, key, *args):
        self.commands.append((cmd, key) + args)
        if key != self.key:
            raise ResponseError("ERR no such filesystem key")
        if cmd == "FS.FIND":
            paths = [p for p in self.entries if p != "/"]
            if len(args) > 2 and args[2] == "TYPE":
                paths = [p for p in paths if self.entries[p] == args[3]]
            return [p.encode() for p in paths]
        if cmd == "FS.LS":
            pathname = args[0]
            if self.entries.get(pathname) != "dir":
                raise ResponseError("ERR not a directory")
            names = self.listings.get(pathname, self._children(pathname))
            return [n.encode() for n in names]
        raise ResponseError(f"ERR unknown command {cmd}")


@pytest.fixture
def collector():
    return DiagnosticCollector()


@pytest.fixture
def checker(collector):
    return TreeChecker(collector)


@pytest.fixture
def fake_redis():
    return FakeRedisFS("test-vol", {
        "/notes": "dir",
        "/notes/todo.md": "file",
        "/notes/done.md": "file",
        "/readme.md": "file",
        "/src": "dir",
        "/src/deep": "dir",
        "/src/deep/main.py": "file",
    })
