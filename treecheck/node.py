"""Tree nodes."""

from typing import Iterator, List, Optional

from treecheck.exceptions import AlreadyInTreeError, NoSuchChildError
from treecheck.path import Path


class Node:
    """One entry of a directory tree.

    Children are kept sorted by path with no duplicates when they are
    added through ``add_child``. The ``children`` list itself is plain
    storage, so code that writes to it directly can break that order;
    ``TreeChecker`` is what catches it.

    Args:
        path: Path of this node.
        parent: Parent node, ``None`` for a root.
    """

    def __init__(self, path: Path, parent: Optional["Node"] = None):
        self.path = path
        self.parent = parent
        self.children: List[Optional["Node"]] = []

    @property
    def num_children(self) -> int:
        return len(self.children)

    def get_child(self, index: int) -> Optional["Node"]:
        """Return the child at ``index``.

        Raises NoSuchChildError if the index is out of range.
        """
        if index < 0 or index >= len(self.children):
            raise NoSuchChildError(
                f"{self.path}: no child at index {index} "
                f"({len(self.children)} children)")
        return self.children[index]

    def _bisect(self, path: Path) -> int:
        lo, hi = 0, len(self.children)
        while lo < hi:
            mid = (lo + hi) // 2
            if self.children[mid].path.compare(path) < 0:
                lo = mid + 1
            else:
                hi = mid
        return lo

    def find_child(self, path: Path) -> Optional["Node"]:
        """Binary search for the child holding ``path``."""
        index = self._bisect(path)
        if index < len(self.children) and self.children[index].path == path:
            return self.children[index]
        return None

    def add_child(self, child: "Node") -> "Node":
        """Insert ``child`` in sorted position and point it back at us."""
        index = self._bisect(child.path)
        if index < len(self.children) and self.children[index].path == child.path:
            raise AlreadyInTreeError(f"{child.path} is already a child of {self.path}")
        self.children.insert(index, child)
        child.parent = self
        return child

    def remove_child(self, child: "Node") -> None:
        for index, existing in enumerate(self.children):
            if existing is child:
                del self.children[index]
                child.parent = None
                return
        raise NoSuchChildError(f"{child.path} is not a child of {self.path}")

    def __repr__(self):
        return f"Node({str(self.path)!r}, children={len(self.children)})"


def walk(root: Optional[Node]) -> Iterator[Node]:
    """Lazily yield the nodes under ``root`` in pre-order.

    The walk is iterative and assumes a well-formed tree; use
    ``TreeChecker`` on trees that may be corrupted.
    """
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
