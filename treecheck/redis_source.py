"""Snapshots of Redis-FS volumes as Node trees."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from redis import Redis
from redis.exceptions import ResponseError

from treecheck.checker import TreeChecker
from treecheck.exceptions import InvalidPathError, PathNotFoundError
from treecheck.node import Node
from treecheck.path import Path


@dataclass
class Snapshot:
    """A tree read from a volume, with the node count the volume reports."""

    root: Optional[Node]
    count: int
    is_initialized: bool

    def is_valid(self, checker: Optional[TreeChecker] = None) -> bool:
        checker = checker if checker is not None else TreeChecker()
        return checker.is_valid(self.is_initialized, self.root, self.count)


def _decode(value: Any) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else value


class RedisFSSource:
    """Reads the directory structure of a Redis-FS volume.

    Every path reported by ``FS.FIND`` becomes a node. Each directory is
    listed with ``FS.LS`` and its entries become its children, so a
    listing that names a missing path, or a path no directory lists,
    shows up as a broken invariant when the snapshot is checked.

    Args:
        redis: Redis client instance.
        key: Redis key name of the filesystem volume.

    Example:
        >>> import redis
        >>> source = RedisFSSource(redis.Redis(), "myproject")
        >>> source.load().is_valid()
        True
    """

    def __init__(self, redis: Redis, key: str):
        self._redis = redis
        self._key = key

    def _execute(self, cmd: str, *args) -> Any:
        """Execute a FS.* command."""
        try:
            return self._redis.execute_command(f"FS.{cmd}", self._key, *args)
        except ResponseError as e:
            err_msg = str(e).lower()
            if "no such filesystem" in err_msg or "not found" in err_msg:
                return None
            if "not a directory" in err_msg:
                raise PathNotFoundError(str(e))
            raise

    def _find(self, *args) -> List[Path]:
        result = self._execute("FIND", "/", "*", *args)
        if not isinstance(result, list):
            return []
        return [Path.from_string(_decode(p)) for p in result]

    def _ls(self, path: Path) -> List[str]:
        result = self._execute("LS", path.pathname)
        if not isinstance(result, list):
            return []
        return [_decode(name) for name in result]

    def load(self) -> Snapshot:
        """Read the volume into a Snapshot.

        A volume that does not exist is an uninitialized, empty tree.
        """
        if not self._redis.exists(self._key):
            return Snapshot(root=None, count=0, is_initialized=False)

        root = Node(Path.from_string("/"))
        nodes: Dict[Path, Node] = {root.path: root}
        for path in self._find():
            if path.depth > 0:
                nodes[path] = Node(path)

        directories = [root.path]
        directories.extend(p for p in self._find("TYPE", "dir") if p.depth > 0)
        for dir_path in directories:
            parent = nodes.get(dir_path)
            if parent is None:
                continue
            # Listing order is not meaningful; children are stored sorted.
            for name in sorted(self._ls(dir_path)):
                try:
                    child = nodes.get(dir_path.child(name))
                except InvalidPathError:
                    child = None
                if child is not None and child.parent is None and child is not root:
                    child.parent = parent
                parent.children.append(child)

        return Snapshot(root=root, count=len(nodes), is_initialized=True)


def load_snapshot(redis: Redis, key: str) -> Snapshot:
    return RedisFSSource(redis, key).load()
