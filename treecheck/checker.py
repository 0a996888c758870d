"""Invariant checker for directory trees.

A tree is valid when, for every node reachable from the root:

1. the node is not None;
2. a parent's path is the node's path minus its last component;
3. the count accessor and the indexed accessor agree, no child slot is
   None and every child points back at the node through ``parent``;
4. children are sorted by path;
5. no two children hold the same path;
6. every descendant's path starts with the node's path.

and the number of reachable nodes equals the count the tree claims.
An uninitialized tree must have no root and a count of 0.

Checking stops at the first broken invariant. That violation is handed
to the checker's sink (stderr by default) and the verdict is False.
The checker never raises for a broken tree and never modifies it.
"""

import enum
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import click

from treecheck.exceptions import NoSuchChildError


class ViolationKind(enum.Enum):
    STRUCTURAL_NULL = "structural-null"
    PARENT_PATH_MISMATCH = "parent-path-mismatch"
    UNSORTED_CHILDREN = "unsorted-children"
    DUPLICATE_CHILDREN = "duplicate-children"
    ANCESTOR_PREFIX = "ancestor-prefix"
    CHILD_ACCESSOR = "child-accessor"
    PARENT_BACKREF = "parent-backref"
    COUNT_MISMATCH = "count-mismatch"
    INITIALIZATION = "initialization"


@dataclass(frozen=True)
class Violation:
    """A broken invariant, with the pathnames of the nodes involved."""

    kind: ViolationKind
    message: str
    paths: Tuple[str, ...] = ()

    def __str__(self):
        text = f"[{self.kind.value}] {self.message}"
        if self.paths:
            text += ": " + " ".join(f"({p})" for p in self.paths)
        return text


Sink = Callable[[Violation], None]


def stderr_sink(violation: Violation) -> None:
    """Write one line per violation to stderr."""
    click.echo(str(violation), err=True)


class DiagnosticCollector:
    """Sink that keeps violations in memory.

    Example:
        >>> collector = DiagnosticCollector()
        >>> TreeChecker(collector).is_valid(False, None, 5)
        False
        >>> collector.last.kind
        <ViolationKind.INITIALIZATION: 'initialization'>
    """

    def __init__(self):
        self.violations: List[Violation] = []

    def __call__(self, violation: Violation) -> None:
        self.violations.append(violation)

    @property
    def last(self) -> Optional[Violation]:
        return self.violations[-1] if self.violations else None

    @property
    def kinds(self) -> List[ViolationKind]:
        return [v.kind for v in self.violations]

    def clear(self) -> None:
        self.violations.clear()

    def __len__(self):
        return len(self.violations)


class TreeChecker:
    """Validates directory trees.

    Nodes are read through ``path``, ``parent``, ``num_children`` and
    ``get_child(index)``; paths through ``depth``,
    ``shared_prefix_depth(other)``, ``compare(other)`` and ``pathname``.

    Args:
        sink: Callable receiving each Violation. Defaults to stderr.
    """

    def __init__(self, sink: Optional[Sink] = None):
        self._sink = sink if sink is not None else stderr_sink

    def _fail(self, kind: ViolationKind, message: str, *paths) -> bool:
        self._sink(Violation(kind, message, tuple(p.pathname for p in paths)))
        return False

    # === Public checks ===

    def is_valid(self, is_initialized: bool, root, count: int) -> bool:
        """Check a whole tree given its root and the node count it claims."""
        if not is_initialized:
            if count != 0:
                return self._fail(
                    ViolationKind.INITIALIZATION,
                    f"Not initialized, but count is {count}")
            if root is not None:
                return self._fail(
                    ViolationKind.INITIALIZATION,
                    "Not initialized, but root is set", root.path)

        actual = 0
        if root is not None:
            stack = [root]
            while stack:
                node = stack.pop()
                children = self._check_node(node)
                if children is None:
                    return False
                if not self._check_subtree(node, children):
                    return False
                actual += 1
                stack.extend(reversed(children))

        if actual != count:
            return self._fail(
                ViolationKind.COUNT_MISMATCH,
                f"Tree claims {count} nodes, but {actual} are reachable")
        return True

    def node_is_valid(self, node) -> bool:
        """Check one node, its children and the paths of its whole subtree."""
        children = self._check_node(node)
        if children is None:
            return False
        return self._check_subtree(node, children)

    # === Internals ===

    def _children(self, node) -> Optional[list]:
        """Children through the indexed accessor, or None once reported."""
        count = node.num_children
        children = []
        for index in range(count):
            try:
                child = node.get_child(index)
            except NoSuchChildError:
                self._fail(
                    ViolationKind.CHILD_ACCESSOR,
                    f"num_children is {count}, but get_child fails "
                    f"at index {index}", node.path)
                return None
            if child is None:
                self._fail(
                    ViolationKind.STRUCTURAL_NULL,
                    f"get_child returned None at index {index}", node.path)
                return None
            if child.parent is not node:
                self._fail(
                    ViolationKind.PARENT_BACKREF,
                    "Child's parent is not the node holding it",
                    node.path, child.path)
                return None
            children.append(child)

        # An accessor that yields more than num_children reports is a
        # silent truncation.
        try:
            node.get_child(count)
        except NoSuchChildError:
            return children
        self._fail(
            ViolationKind.CHILD_ACCESSOR,
            f"num_children is {count}, but get_child succeeds at index {count}",
            node.path)
        return None

    def _check_node(self, node) -> Optional[list]:
        """Node-local checks. Returns the children when they all pass."""
        if node is None:
            self._fail(ViolationKind.STRUCTURAL_NULL, "A node is None")
            return None

        parent = node.parent
        if parent is not None:
            shared = node.path.shared_prefix_depth(parent.path)
            if shared != node.path.depth - 1 or shared != parent.path.depth:
                self._fail(
                    ViolationKind.PARENT_PATH_MISMATCH,
                    "Parent and child nodes don't have parent and child paths",
                    parent.path, node.path)
                return None

        children = self._children(node)
        if children is None:
            return None

        for prev, curr in zip(children, children[1:]):
            if prev.path.compare(curr.path) > 0:
                self._fail(
                    ViolationKind.UNSORTED_CHILDREN,
                    "Children are not sorted by path", prev.path, curr.path)
                return None

        # Sorted, so equal paths sit next to each other.
        for prev, curr in zip(children, children[1:]):
            if prev.path.compare(curr.path) == 0:
                self._fail(
                    ViolationKind.DUPLICATE_CHILDREN,
                    "Two children hold the same path", node.path, curr.path)
                return None

        return children

    def _check_subtree(self, node, children: list) -> bool:
        """Every descendant of ``node`` keeps its path as a prefix.

        Descendants are read through the raw accessors. Slots they cannot
        read, and nodes met twice, are skipped here and left to each
        node's own checks.
        """
        depth = node.path.depth
        seen = {id(node)}
        stack = list(reversed(children))
        while stack:
            descendant = stack.pop()
            if id(descendant) in seen:
                continue
            seen.add(id(descendant))
            if node.path.shared_prefix_depth(descendant.path) != depth:
                return self._fail(
                    ViolationKind.ANCESTOR_PREFIX,
                    "Descendant's path does not extend its ancestor's path",
                    node.path, descendant.path)
            grandchildren = []
            for index in range(descendant.num_children):
                try:
                    child = descendant.get_child(index)
                except NoSuchChildError:
                    break
                if child is not None:
                    grandchildren.append(child)
            stack.extend(reversed(grandchildren))
        return True


def is_valid(is_initialized: bool, root, count: int,
             sink: Optional[Sink] = None) -> bool:
    """Check a whole tree with a one-off TreeChecker."""
    return TreeChecker(sink).is_valid(is_initialized, root, count)


def node_is_valid(node, sink: Optional[Sink] = None) -> bool:
    """Check one node and its subtree with a one-off TreeChecker."""
    return TreeChecker(sink).node_is_valid(node)
