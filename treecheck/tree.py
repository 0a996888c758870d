"""In-memory directory tree that verifies itself after every mutation."""

from typing import Iterator, Optional

from treecheck.checker import DiagnosticCollector, TreeChecker
from treecheck.exceptions import (
    AlreadyInitializedError,
    AlreadyInTreeError,
    ConflictingPathError,
    NotInitializedError,
    PathNotFoundError,
    TreeCorruptedError,
)
from treecheck.node import Node, walk
from treecheck.path import Path


class DirectoryTree:
    """A tree of paths sharing one root component.

    Args:
        check: Verify the tree with TreeChecker before and after each
            mutation and raise TreeCorruptedError on a broken invariant.

    Example:
        >>> dt = DirectoryTree()
        >>> dt.init()
        >>> dt.insert("a/b/c")
        3
        >>> dt.contains("/a/b")
        True
        >>> print(dt.to_string())
        /a
        /a/b
        /a/b/c
    """

    def __init__(self, check: bool = True):
        self._check = check
        self._initialized = False
        self._root: Optional[Node] = None
        self._count = 0

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def root(self) -> Optional[Node]:
        return self._root

    @property
    def count(self) -> int:
        return self._count

    def _verify(self) -> None:
        if not self._check:
            return
        collector = DiagnosticCollector()
        if not TreeChecker(collector).is_valid(
                self._initialized, self._root, self._count):
            raise TreeCorruptedError(collector.last)

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError("Tree is not initialized")

    # === Lifecycle ===

    def init(self) -> None:
        if self._initialized:
            raise AlreadyInitializedError("Tree is already initialized")
        self._verify()
        self._initialized = True
        self._root = None
        self._count = 0
        self._verify()

    def destroy(self) -> None:
        self._require_initialized()
        self._verify()
        self._root = None
        self._count = 0
        self._initialized = False
        self._verify()

    # === Lookup ===

    def _closest(self, path: Path) -> Optional[Node]:
        """Deepest existing node whose path is a prefix of ``path``."""
        node = self._root
        if node is None or path.shared_prefix_depth(node.path) == 0:
            return None
        while node.path.depth < path.depth:
            child = node.find_child(path.prefix(node.path.depth + 1))
            if child is None:
                break
            node = child
        return node

    def find(self, pathname: str) -> Node:
        """Return the node at ``pathname``.

        Raises PathNotFoundError if it does not exist.
        """
        self._require_initialized()
        path = Path.from_string(pathname)
        node = self._closest(path)
        if node is None or node.path != path:
            raise PathNotFoundError(f"No such path: {path}")
        return node

    def contains(self, pathname: str) -> bool:
        try:
            self.find(pathname)
        except PathNotFoundError:
            return False
        return True

    # === Mutation ===

    def insert(self, pathname: str) -> int:
        """Insert ``pathname`` and any missing ancestors.

        Returns the number of nodes created.
        """
        self._require_initialized()
        self._verify()
        path = Path.from_string(pathname)
        if path.depth == 0:
            raise ConflictingPathError("The root path / cannot be inserted")
        if self._root is not None and path.shared_prefix_depth(self._root.path) == 0:
            raise ConflictingPathError(
                f"{path} does not share the root {self._root.path}")

        parent = self._closest(path)
        if parent is not None and parent.path == path:
            raise AlreadyInTreeError(f"{path} is already in the tree")

        created = 0
        depth = parent.path.depth if parent is not None else 0
        while depth < path.depth:
            depth += 1
            node = Node(path.prefix(depth))
            if parent is None:
                self._root = node
            else:
                parent.add_child(node)
            parent = node
            created += 1
        self._count += created
        self._verify()
        return created

    def remove(self, pathname: str) -> int:
        """Remove ``pathname`` and everything below it.

        Returns the number of nodes removed.
        """
        self._require_initialized()
        self._verify()
        node = self.find(pathname)
        removed = sum(1 for _ in walk(node))
        if node.parent is None:
            self._root = None
        else:
            node.parent.remove_child(node)
        self._count -= removed
        self._verify()
        return removed

    # === Traversal ===

    def paths(self) -> Iterator[str]:
        """Pathnames in pre-order."""
        self._require_initialized()
        for node in walk(self._root):
            yield node.path.pathname

    def to_string(self) -> str:
        return "\n".join(self.paths())

    def __len__(self):
        return self._count

    def __iter__(self):
        return self.paths()
